from typing import Any, Dict, Optional


class KursTakipError(Exception):
    """Base class for every domain error raised by the service."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": False, "error": self.message, "code": self.code}
        if self.details:
            data["details"] = self.details
        return data


class ValidationFailed(KursTakipError):
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class AuthenticationError(KursTakipError):
    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(KursTakipError):
    status_code = 403

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message, code="FORBIDDEN")


class OnboardingRequired(KursTakipError):
    status_code = 403

    def __init__(self, message: str = "Create or join an institution first"):
        super().__init__(message, code="ONBOARDING_REQUIRED")


class AlreadyOnboarded(KursTakipError):
    status_code = 409

    def __init__(self, message: str = "User already belongs to an institution"):
        super().__init__(message, code="ALREADY_ONBOARDED")


class InvalidInviteError(KursTakipError):
    """Same message for missing, used and expired tokens."""

    status_code = 400

    def __init__(self):
        super().__init__("Invalid invite", code="INVALID_INVITE")


class NotFoundError(KursTakipError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found", code="NOT_FOUND", details={"id": entity_id})


class InvalidTransition(KursTakipError):
    status_code = 409

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(
            f"{entity} cannot move from '{current}' to '{target}'",
            code="INVALID_TRANSITION",
            details={"current": current, "target": target},
        )


class InstitutionContextMissing(KursTakipError):
    status_code = 400

    def __init__(self):
        super().__init__("Institution ID missing", code="INSTITUTION_MISSING")


class ProviderNotConfigured(KursTakipError):
    status_code = 503

    def __init__(self, provider: str):
        super().__init__(f"{provider} is not configured", code="PROVIDER_NOT_CONFIGURED")


class ProviderError(KursTakipError):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="PROVIDER_ERROR")
