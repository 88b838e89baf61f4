from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from kurstakip.config import settings
from kurstakip.database import get_db
from kurstakip.errors import AuthenticationError, AuthorizationError, OnboardingRequired
from kurstakip.models.user import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(user: User, expires_minutes: Optional[int] = None) -> str:
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": user.id,
        "role": user.role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_minutes or settings.jwt_exp_minutes)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid token") from exc
    if "sub" not in payload:
        raise AuthenticationError("Invalid token")
    return payload


def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authorization header missing or invalid")
    payload = decode_access_token(credentials.credentials)
    # role and institution are read from the database, not trusted from the token
    user = db.get(User, payload["sub"])
    if not user:
        raise AuthenticationError("Invalid token")
    return user


def require_institution(user: User = Depends(get_current_user)) -> User:
    if not user.institution_id:
        raise OnboardingRequired()
    return user


def require_admin(user: User = Depends(require_institution)) -> User:
    if user.role != "admin":
        raise AuthorizationError("Admin access required")
    return user
