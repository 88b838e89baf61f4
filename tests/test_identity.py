from datetime import datetime, timedelta

import httpx
import pytest

from kurstakip.errors import (
    AlreadyOnboarded,
    AuthenticationError,
    AuthorizationError,
    InvalidInviteError,
    NotFoundError,
    OnboardingRequired,
    ValidationFailed,
)
from kurstakip.models.user import User
from kurstakip.utils import identity
from kurstakip.utils.auth import create_access_token, decode_access_token


def test_first_sight_user_is_a_teacher_without_institution(db_session):
    user = identity.ensure_user(db_session, "google:123", email="yeni@example.com")

    assert user.role == "teacher"
    assert user.institution_id is None


def test_ensure_user_never_changes_an_existing_record(db_session, admin_user):
    again = identity.ensure_user(db_session, admin_user.id, email="other@example.com", role="teacher")

    assert again.role == "admin"
    assert again.email == "admin@example.com"


def test_register_grants_admin_and_rejects_duplicates(db_session):
    user = identity.register(db_session, "kurucu@example.com", "gizli123")
    assert user.role == "admin"
    assert user.institution_id is None
    assert user.password_hash != "gizli123"

    with pytest.raises(ValidationFailed):
        identity.register(db_session, "kurucu@example.com", "baska123")


def test_authenticate(db_session, admin_user):
    assert identity.authenticate(db_session, "admin@example.com", "adminpassword123").id == admin_user.id
    with pytest.raises(AuthenticationError):
        identity.authenticate(db_session, "admin@example.com", "yanlis")
    with pytest.raises(AuthenticationError):
        identity.authenticate(db_session, "nobody@example.com", "adminpassword123")


def test_create_institution_makes_founder_admin(db_session):
    user = identity.ensure_user(db_session, "google:founder")

    institution = identity.create_institution(db_session, user, "  Yeni Kurs  ")

    assert institution.name == "Yeni Kurs"
    assert institution.founder_id == user.id
    assert (user.role, user.institution_id) == ("admin", institution.id)
    with pytest.raises(AlreadyOnboarded):
        identity.create_institution(db_session, user, "İkinci Kurs")


def test_only_the_founder_renames(db_session, admin_user, teacher_user):
    assert identity.rename_institution(db_session, admin_user, "Cisem Akademi").name == "Cisem Akademi"

    with pytest.raises(AuthorizationError):
        identity.rename_institution(db_session, teacher_user, "Ele Geçirildi")

    second_admin = identity.ensure_user(db_session, "google:second-admin")
    invite = identity.create_invite(db_session, admin_user, "admin")
    identity.redeem_invite(db_session, second_admin, invite.id)
    with pytest.raises(AuthorizationError):
        identity.rename_institution(db_session, second_admin, "Ele Geçirildi")


def test_teachers_cannot_manage_invites(db_session, teacher_user):
    with pytest.raises(AuthorizationError):
        identity.create_invite(db_session, teacher_user)
    with pytest.raises(AuthorizationError):
        identity.list_invites(db_session, teacher_user)


def test_unbound_user_cannot_invite(db_session):
    user = identity.register(db_session, "bos@example.com", "gizli123")

    with pytest.raises(OnboardingRequired):
        identity.create_invite(db_session, user)


def test_invite_expires_after_seven_days(db_session, admin_user):
    invite = identity.create_invite(db_session, admin_user)

    assert invite.expires_at - invite.created_at == timedelta(days=7)
    assert [i.id for i in identity.list_invites(db_session, admin_user)] == [invite.id]


def test_invite_is_single_use(db_session, admin_user):
    invite = identity.create_invite(db_session, admin_user, "teacher")
    first = identity.ensure_user(db_session, "google:first")
    second = identity.ensure_user(db_session, "google:second")

    identity.redeem_invite(db_session, first, invite.id)
    with pytest.raises(InvalidInviteError):
        identity.redeem_invite(db_session, second, invite.id)
    with pytest.raises(InvalidInviteError):
        identity.redeem_invite(db_session, first, invite.id)

    db_session.refresh(invite)
    assert (invite.used, invite.used_by) == (True, first.id)
    assert (first.role, first.institution_id) == ("teacher", admin_user.institution_id)
    assert (second.role, second.institution_id) == ("teacher", None)


def test_invalid_invites_fail_the_same_way(db_session, admin_user):
    invite = identity.create_invite(db_session, admin_user)
    user = identity.ensure_user(db_session, "google:late")
    later = datetime.now() + timedelta(days=8)

    errors = []
    for token, now in ((invite.id, later), ("does-not-exist", None), ("", None)):
        with pytest.raises(InvalidInviteError) as exc:
            identity.redeem_invite(db_session, user, token, now=now)
        errors.append(exc.value.to_dict())

    assert all(e == errors[0] for e in errors)
    assert user.institution_id is None


def test_bound_user_cannot_redeem(db_session, admin_user, other_admin):
    invite = identity.create_invite(db_session, admin_user)

    with pytest.raises(AlreadyOnboarded):
        identity.redeem_invite(db_session, other_admin, invite.id)
    db_session.refresh(invite)
    assert invite.used is False


def test_delete_invite(db_session, admin_user, other_admin):
    invite = identity.create_invite(db_session, admin_user)

    with pytest.raises(NotFoundError):
        identity.delete_invite(db_session, other_admin, invite.id)
    identity.delete_invite(db_session, admin_user, invite.id)

    assert identity.list_invites(db_session, admin_user) == []


async def test_google_sign_in_creates_teacher(db_session):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer google-token"
        return httpx.Response(200, json={"sub": "98765", "email": "ogretmen@gmail.com", "name": "Deniz"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        user = await identity.sign_in_with_google(db_session, "google-token", client=client)

    assert user.id == "google:98765"
    assert user.role == "teacher"
    assert db_session.get(User, "google:98765").display_name == "Deniz"


def userinfo_client(info):
    return httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=info)))


async def test_google_sign_in_joins_verified_registered_email(db_session, admin_user):
    info = {"sub": "555", "email": "admin@example.com", "email_verified": True, "name": "Çisem"}
    async with userinfo_client(info) as client:
        user = await identity.sign_in_with_google(db_session, "google-token", client=client)

    assert user.id == admin_user.id
    assert user.role == "admin"
    assert db_session.get(User, "google:555") is None
    assert db_session.query(User).filter(User.email == "admin@example.com").count() == 1


async def test_google_sign_in_refuses_unverified_registered_email(db_session, admin_user):
    info = {"sub": "556", "email": "admin@example.com", "name": "Biri"}
    async with userinfo_client(info) as client:
        with pytest.raises(ValidationFailed):
            await identity.sign_in_with_google(db_session, "google-token", client=client)

    assert db_session.get(User, "google:556") is None


async def test_google_sign_in_rejects_bad_token(db_session):
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"error": "invalid_token"}))

    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(AuthenticationError):
            await identity.sign_in_with_google(db_session, "expired", client=client)


def test_access_token_round_trip(admin_user):
    payload = decode_access_token(create_access_token(admin_user))

    assert payload["sub"] == admin_user.id
    assert payload["role"] == "admin"


def test_expired_and_tampered_tokens(admin_user):
    with pytest.raises(AuthenticationError, match="Token expired"):
        decode_access_token(create_access_token(admin_user, expires_minutes=-1))
    with pytest.raises(AuthenticationError, match="Invalid token"):
        decode_access_token(create_access_token(admin_user) + "x")
