"""
tests/conftest.py

Test fixtures for API integration and unit tests.
Includes an in-memory data store, fake users, a fake blob storage,
async clients and dependency overrides.
"""
import os
import sys
import tempfile
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ["STORE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CACHE_ENABLED"] = "false"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="gladiator-logs-")
os.environ["SECRET_KEY"] = "test-secret-key"

# --- Imports ---
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app
from gladiator.core.dependencies import get_current_identity, get_current_user, get_optional_identity
from gladiator.core.schemas import CurrentUser, Identity
from gladiator.core.storage import BlobStorage, get_blob_storage
from gladiator.database.enums import Category, UserRole
from gladiator.database.memory import InMemoryStore
from gladiator.database.models import PROFILES
from gladiator.database.session import get_store

# Smallest header filetype recognises as PNG.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeBlobStorage(BlobStorage):
    """Records uploads instead of sending them to S3."""

    def __init__(self) -> None:
        self.uploads: list[dict[str, Any]] = []

    async def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        self.uploads.append(
            {"bucket": bucket, "path": path, "size": len(data), "content_type": content_type}
        )
        return f"https://storage.test/{bucket}/{path}"


ProfileFactory = Callable[..., Awaitable[CurrentUser]]


# --- Core Test Fixtures ---


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory data store per test."""
    return InMemoryStore()


@pytest.fixture
def blob_storage() -> FakeBlobStorage:
    return FakeBlobStorage()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def transport() -> ASGITransport:
    """Fixture for ASGI transport."""
    return ASGITransport(app=app)


@pytest_asyncio.fixture(scope="function")
async def async_client(
    transport: ASGITransport, store: InMemoryStore, blob_storage: FakeBlobStorage
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the test store and storage."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_blob_storage] = lambda: blob_storage
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture(autouse=True)
def clear_overrides() -> Generator[None, None, None]:
    yield
    app.dependency_overrides.clear()


# --- Fake User Fixtures ---


@pytest.fixture
def make_profile(store: InMemoryStore) -> ProfileFactory:
    """Insert a profile row and return it as the acting user."""

    async def _make(role: UserRole, **fields: Any) -> CurrentUser:
        profile_id: UUID = fields.pop("id", None) or uuid4()
        email = fields.pop("email", f"{role.value}.{profile_id.hex[:6]}@example.com")
        await store.insert(
            PROFILES, {"id": profile_id, "email": email, "user_type": role, **fields}
        )
        return CurrentUser(id=profile_id, role=role, email=email)

    return _make


@pytest_asyncio.fixture
async def fake_professional(make_profile: ProfileFactory) -> CurrentUser:
    return await make_profile(
        UserRole.PROFESSIONAL,
        full_name="Ana Designer",
        category=Category.DESIGN,
        skills=["Figma", "Branding"],
        bio="Brand identities and UI design",
        experience_years=3,
        hourly_rate=Decimal("40.00"),
        crypto_wallet_trc20="TXYZwallet123",
        accepts_crypto=True,
    )


@pytest_asyncio.fixture
async def fake_client(make_profile: ProfileFactory) -> CurrentUser:
    return await make_profile(UserRole.CLIENT, full_name="Cleo Client", company_name="Acme")


# --- Dependency Override Fixtures ---


@pytest.fixture
def login_as() -> Callable[[CurrentUser | Identity], None]:
    """Authenticate subsequent requests as the given user or bare identity."""

    def _login(user: CurrentUser | Identity) -> None:
        identity = Identity(id=user.id, email=user.email)
        app.dependency_overrides[get_optional_identity] = lambda: identity
        app.dependency_overrides[get_current_identity] = lambda: identity
        if isinstance(user, CurrentUser):
            app.dependency_overrides[get_current_user] = lambda: user

    return _login
