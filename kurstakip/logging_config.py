import logging
import sys
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

SENSITIVE_KEYS = {"password", "token", "access_token", "api_key", "secret", "auth_token"}


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if any(getattr(h, "_kurstakip", False) for h in root.handlers):
        root.setLevel(level.upper())
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._kurstakip = True
    root.addHandler(handler)
    root.setLevel(level.upper())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def sanitize(data: Any) -> Any:
    """Drops credential-like keys before a payload is written to the log."""
    if isinstance(data, dict):
        return {
            k: sanitize(v) for k, v in data.items() if str(k).lower() not in SENSITIVE_KEYS
        }
    if isinstance(data, (list, tuple)):
        return [sanitize(v) for v in data]
    return data
