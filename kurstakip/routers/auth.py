from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kurstakip.database import get_db
from kurstakip.models.user import User
from kurstakip.schemas.user import (
    GoogleLogin,
    InstitutionCreate,
    InstitutionOut,
    InviteCreate,
    InviteOut,
    InviteRedeem,
    Token,
    UserCreate,
    UserLogin,
    UserResponse,
)
from kurstakip.utils import identity
from kurstakip.utils.auth import create_access_token, get_current_user, require_admin, require_institution

router = APIRouter(tags=["auth"])


def _token_for(user: User) -> Token:
    return Token(access_token=create_access_token(user), user=UserResponse.model_validate(user))


@router.post("/register", response_model=Token)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    """
    Sign-up for an institute owner. The user becomes an admin and founds
    the institution in a separate step through /onboarding/institution.
    """
    user = identity.register(db, payload.email, payload.password, payload.display_name)
    return _token_for(user)


@router.post("/token", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = identity.authenticate(db, payload.email, payload.password)
    return _token_for(user)


@router.post("/auth/google", response_model=Token)
async def google_login(payload: GoogleLogin, db: Session = Depends(get_db)):
    user = await identity.sign_in_with_google(db, payload.access_token)
    return _token_for(user)


@router.get("/me", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)):
    return user


@router.post("/onboarding/institution", response_model=InstitutionOut, status_code=201)
def create_institution(
    payload: InstitutionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return identity.create_institution(db, user, payload.name)


@router.get("/institution", response_model=InstitutionOut)
def get_institution(db: Session = Depends(get_db), user: User = Depends(require_institution)):
    return identity.get_institution(db, user)


@router.patch("/institution", response_model=InstitutionOut)
def rename_institution(
    payload: InstitutionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    return identity.rename_institution(db, user, payload.name)


@router.post("/invites", response_model=InviteOut, status_code=201)
def create_invite(
    payload: InviteCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    return identity.create_invite(db, user, payload.role)


@router.get("/invites", response_model=List[InviteOut])
def list_invites(db: Session = Depends(get_db), user: User = Depends(require_admin)):
    return identity.list_invites(db, user)


@router.delete("/invites/{token}", status_code=204)
def delete_invite(token: str, db: Session = Depends(get_db), user: User = Depends(require_admin)):
    identity.delete_invite(db, user, token)


@router.post("/invites/redeem", response_model=UserResponse)
def redeem_invite(
    payload: InviteRedeem,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Joins the caller to an institution through a single-use invite."""
    return identity.redeem_invite(db, user, payload.token)
