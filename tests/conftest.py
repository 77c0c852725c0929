import os
import tempfile

# Settings are read when eventhub.main is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="eventhub-uploads-"))
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import importlib

import pytest
from httpx import ASGITransport, AsyncClient

from eventhub.core.config import Settings
from eventhub.core.security import create_jwt_token
from eventhub.main import create_app
from eventhub.models.user import User
from eventhub.constants.constants import Gender
from scripts.seed_lookups import seed_lookups

FIXED_OTP = "123456"


def make_settings(upload_dir, **overrides) -> Settings:
    values = {
        "SECRET_KEY": "test-secret-key",
        "DATABASE_URL": "sqlite+aiosqlite://",
        "UPLOAD_DIR": str(upload_dir),
        "RATE_LIMIT_ENABLED": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path / "uploads")


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    await app.state.session_manager.init()
    yield app
    await app.state.session_manager.close()


@pytest.fixture
async def build_app(tmp_path):
    """Factory for extra apps built from settings overrides."""
    built = []

    async def _build(**overrides):
        app = create_app(make_settings(tmp_path / "extra-uploads", **overrides))
        await app.state.session_manager.init()
        built.append(app)
        return app

    yield _build
    for app in built:
        await app.state.session_manager.close()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def session_scope(app):
    """Open a short-lived session on the app's database."""
    return app.state.session_manager.get_session


@pytest.fixture
async def db(session_scope):
    async with session_scope() as session:
        yield session


@pytest.fixture
def fixed_otp(monkeypatch):
    """Make every issued OTP equal FIXED_OTP."""
    auth_service_module = importlib.import_module("eventhub.services.AuthService")
    monkeypatch.setattr(auth_service_module, "generate_otp", lambda: FIXED_OTP)
    return FIXED_OTP


@pytest.fixture
def register_payload():
    return {
        "firstName": "Asha",
        "lastName": "Patel",
        "emailId": "asha@example.com",
        "mobileNo": "9999999999",
        "countryCode": "+1",
        "gender": "F",
        "age": 29,
    }


@pytest.fixture
async def user(session_scope):
    async with session_scope() as session:
        user = User(
            first_name="Ravi",
            last_name="Shah",
            email="ravi@example.com",
            mobile_number="9876543210",
            country_code="+91",
            gender=Gender.M,
            age=34,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
    return user


@pytest.fixture
def auth_headers(user, settings):
    token = create_jwt_token(
        {"sub": str(user.id), "userId": user.id, "mobileNumber": user.mobile_number},
        settings=settings,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def lookups(session_scope):
    async with session_scope() as session:
        return await seed_lookups(session)
