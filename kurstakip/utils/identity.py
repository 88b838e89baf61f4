"""
Principals, institutions and invites.

`ensure_user` is the one place that decides the role of a principal seen for the
first time; every sign-in path goes through it.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import uuid4

import httpx
from sqlalchemy.orm import Session

from kurstakip.config import settings
from kurstakip.errors import (
    AlreadyOnboarded,
    AuthenticationError,
    AuthorizationError,
    InvalidInviteError,
    NotFoundError,
    OnboardingRequired,
    ValidationFailed,
)
from kurstakip.models.institution import Institution
from kurstakip.models.user import Invite, User
from kurstakip.utils.auth import get_password_hash, verify_password

logger = logging.getLogger(__name__)

ROLES = ("admin", "teacher")


def ensure_user(
    db: Session,
    uid: str,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
    role: str = "teacher",
    password_hash: Optional[str] = None,
) -> User:
    """
    Returns the stored user for `uid`, creating it on first sight.
    New principals get the given role (teacher unless a caller says otherwise) and no
    institution; an existing record is never changed here.
    """
    user = db.get(User, uid)
    if user:
        return user

    user = User(
        id=uid,
        email=email,
        display_name=display_name,
        password_hash=password_hash,
        role=role,
        institution_id=None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s with role %s", uid, role)
    return user


def register(db: Session, email: str, password: str, display_name: Optional[str] = None) -> User:
    """Self-service sign-up. The new user is an admin about to found an institution."""
    if db.query(User).filter(User.email == email).first():
        raise ValidationFailed("Email already registered")
    return ensure_user(
        db,
        str(uuid4()),
        email=email,
        display_name=display_name,
        role="admin",
        password_hash=get_password_hash(password),
    )


def authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Email veya şifre hatalı")
    return user


async def sign_in_with_google(db: Session, access_token: str, client: Optional[httpx.AsyncClient] = None) -> User:
    """Looks the token up on Google's userinfo endpoint and maps it to a local user."""
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=10)
    try:
        response = await client.get(
            settings.google_userinfo_url,
            headers={"Authorization": f"Bearer {access_token}"},
        )
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code != 200:
        raise AuthenticationError("Invalid token")
    info = response.json()
    if not info.get("sub"):
        raise AuthenticationError("Invalid token")

    uid = f"google:{info['sub']}"
    known = db.get(User, uid)
    if known is not None:
        return known

    email = info.get("email")
    existing = db.query(User).filter(User.email == email).first() if email else None
    if existing is not None:
        # a password account with the same address is only joined when Google vouches for it
        if not info.get("email_verified"):
            raise ValidationFailed("Email already registered")
        logger.info("Google account %s signed in as existing user %s", uid, existing.id)
        return existing

    return ensure_user(db, uid, email=email, display_name=info.get("name"))


# --- institutions ----------------------------------------------------------

def create_institution(db: Session, user: User, name: str) -> Institution:
    if user.institution_id:
        raise AlreadyOnboarded()
    name = (name or "").strip()
    if not name:
        raise ValidationFailed("Institution name is required")

    now = datetime.now()
    institution = Institution(
        id=str(uuid4()),
        name=name,
        founder_id=user.id,
        created_at=now,
        updated_at=now,
    )
    db.add(institution)
    user.institution_id = institution.id
    user.role = "admin"
    user.role_updated_at = now
    db.commit()
    db.refresh(institution)
    logger.info("User %s founded institution %s", user.id, institution.id)
    return institution


def get_institution(db: Session, user: User) -> Institution:
    if not user.institution_id:
        raise OnboardingRequired()
    institution = db.get(Institution, user.institution_id)
    if not institution:
        raise NotFoundError("Institution", user.institution_id)
    return institution


def rename_institution(db: Session, user: User, name: str) -> Institution:
    institution = get_institution(db, user)
    if institution.founder_id != user.id:
        raise AuthorizationError("Only the founder can rename the institution")
    name = (name or "").strip()
    if not name:
        raise ValidationFailed("Institution name is required")
    institution.name = name
    institution.updated_at = datetime.now()
    db.commit()
    db.refresh(institution)
    return institution


# --- invites ---------------------------------------------------------------

def _require_admin(user: User) -> None:
    if not user.institution_id:
        raise OnboardingRequired()
    if user.role != "admin":
        raise AuthorizationError("Admin access required")


def create_invite(db: Session, user: User, role: str = "teacher") -> Invite:
    _require_admin(user)
    if role not in ROLES:
        raise ValidationFailed(f"role must be one of {list(ROLES)}")

    now = datetime.now()
    invite = Invite(
        id=str(uuid4()),
        institution_id=user.institution_id,
        role=role,
        used=False,
        expires_at=now + timedelta(days=settings.invite_ttl_days),
        created_by=user.id,
        created_at=now,
    )
    db.add(invite)
    db.commit()
    db.refresh(invite)
    return invite


def list_invites(db: Session, user: User) -> List[Invite]:
    _require_admin(user)
    return (
        db.query(Invite)
        .filter(Invite.institution_id == user.institution_id)
        .order_by(Invite.expires_at.desc())
        .all()
    )


def delete_invite(db: Session, user: User, token: str) -> None:
    _require_admin(user)
    invite = (
        db.query(Invite)
        .filter(Invite.id == token, Invite.institution_id == user.institution_id)
        .first()
    )
    if not invite:
        raise NotFoundError("Invite", token)
    db.delete(invite)
    db.commit()


def redeem_invite(db: Session, user: User, token: str, now: Optional[datetime] = None) -> User:
    """
    Binds `user` to the invite's institution and role and burns the invite.
    Missing, used and expired tokens all fail the same way.
    """
    now = now or datetime.now()
    invite = db.get(Invite, token) if token else None
    if invite is None or invite.used or invite.expires_at <= now:
        logger.info("Rejected invite redemption by %s", user.id)
        raise InvalidInviteError()
    if user.institution_id:
        raise AlreadyOnboarded()

    user.institution_id = invite.institution_id
    user.role = invite.role
    user.role_updated_at = now
    invite.used = True
    invite.used_by = user.id
    invite.used_at = now
    db.commit()
    db.refresh(user)
    logger.info("User %s joined institution %s as %s", user.id, invite.institution_id, invite.role)
    return user
