"""
Kurs Takip - test configuration and fixtures
"""
import os
from datetime import datetime
from typing import AsyncGenerator, Dict, List

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# keep the app module from touching the development database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret-key-for-testing"

from kurstakip.config import Settings
from kurstakip.database import Base, get_db
from kurstakip.dependencies import get_gateway
from kurstakip.errors import ProviderError
from kurstakip.main import app
from kurstakip.models.user import User
from kurstakip.stores.feed import ChangeFeed
from kurstakip.stores.gateway import DocumentGateway
from kurstakip.stores.workspace import Workspace
from kurstakip.utils import identity, rate_limit
from kurstakip.utils.auth import create_access_token
from kurstakip.utils.messaging import Messenger, get_messenger

TODAY = datetime(2026, 3, 10, 9, 30)

configured = Settings(
    twilio_account_sid="AC_test",
    twilio_auth_token="twilio-test-token",
    twilio_phone_number="+15550000000",
    resend_api_key="re_test",
)


class FakeMessenger(Messenger):
    """Records outgoing messages instead of calling the providers."""

    def __init__(self, config: Settings = configured, failing: List[str] = None):
        super().__init__(config)
        self.sent: List[Dict] = []
        self.failing = set(failing or [])

    async def send_text(self, channel, to, body):
        self.require_twilio(channel)
        if to in self.failing:
            raise ProviderError("The 'To' number is not a valid phone number.")
        self.sent.append({"channel": channel, "to": to, "body": body})
        return {"message_id": f"SM{len(self.sent)}", "status": "queued"}

    async def send_email(self, to, subject, message, student_name=None):
        self.require_resend()
        self.sent.append({"channel": "email", "to": to, "subject": subject, "message": message})
        return {"message_id": f"email-{len(self.sent)}", "status": "sent"}


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def gateway(session_factory) -> DocumentGateway:
    return DocumentGateway(session_factory, ChangeFeed())


@pytest.fixture
def messenger() -> FakeMessenger:
    return FakeMessenger()


@pytest.fixture
async def client(db_session, gateway, messenger) -> AsyncGenerator[AsyncClient, None]:
    """Test client bound to the in-memory database and the fake messenger"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_messenger] = lambda: messenger
    rate_limit.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    rate_limit.reset()


@pytest.fixture
def admin_user(db_session) -> User:
    """Founder and admin of 'Cisem Dil Kursu'"""
    user = identity.register(db_session, "admin@example.com", "adminpassword123", "Çisem Hoca")
    identity.create_institution(db_session, user, "Cisem Dil Kursu")
    return user


@pytest.fixture
def teacher_user(db_session, admin_user) -> User:
    invite = identity.create_invite(db_session, admin_user, "teacher")
    user = identity.ensure_user(db_session, "google:teacher-1", email="teacher@example.com")
    return identity.redeem_invite(db_session, user, invite.id)


@pytest.fixture
def other_admin(db_session) -> User:
    user = identity.register(db_session, "owner@example.org", "ownerpassword123")
    identity.create_institution(db_session, user, "Rakip Kurs")
    return user


def headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return headers_for(admin_user)


@pytest.fixture
def teacher_headers(teacher_user) -> dict:
    return headers_for(teacher_user)


@pytest.fixture
def workspace(gateway, admin_user):
    ws = Workspace(gateway, admin_user.institution_id, admin_user.id)
    yield ws
    ws.close()
