# conftest.py
from typing import AsyncGenerator, Dict, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from app.main import app
from app.core.auth import get_current_user
from app.core.database.db import get_session
from app.core.database.base import Base
from app.core.security import hash_password
from content.ports.outbound.storage_port import StoragePort
from users.models.user import User


# ---- Fakes ------------------------------------------------------------------

class FakeStorage(StoragePort):
    """
    In-memory object storage. `fail` makes every call raise like botocore would;
    `upload_limit` lets that many uploads succeed and fails the ones after.
    """

    def __init__(self) -> None:
        self.objects: Dict[str, bytes] = {}
        self.deleted: List[str] = []
        self.fail = False
        self.upload_limit: int | None = None

    def _maybe_fail(self) -> None:
        if self.fail:
            from botocore.exceptions import EndpointConnectionError
            raise EndpointConnectionError(endpoint_url="https://s3.test")

    def upload(self, key: str, data: bytes, content_type: str | None = None) -> str:
        self._maybe_fail()
        if self.upload_limit is not None and len(self.objects) >= self.upload_limit:
            from botocore.exceptions import EndpointConnectionError
            raise EndpointConnectionError(endpoint_url="https://s3.test")
        self.objects[key] = data
        return f"https://cdn.test/{key}"

    def delete(self, key: str) -> None:
        self._maybe_fail()
        self.objects.pop(key, None)
        self.deleted.append(key)


# ---- Async engine + session --------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def async_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest_asyncio.fixture(scope="function")
async def SessionMaker(async_engine):
    return async_sessionmaker(bind=async_engine, expire_on_commit=False, class_=AsyncSession)

@pytest_asyncio.fixture
async def db_session(SessionMaker):
    async with SessionMaker() as s:
        yield s

@pytest_asyncio.fixture(autouse=True, scope="function")
async def override_get_session(db_session):
    """Handlers and tests share one session so DB assertions see committed work."""
    async def _dep():
        yield db_session
    app.dependency_overrides[get_session] = _dep
    yield
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def fake_storage() -> FakeStorage:
    from content.routers import images
    fs = FakeStorage()
    app.dependency_overrides[images.get_storage] = lambda: fs
    yield fs
    app.dependency_overrides.pop(images.get_storage, None)


# ---- Users -------------------------------------------------------------------

async def make_user(db: AsyncSession, email: str, name: str, password: str = "s3cret-pass") -> User:
    """
    Persist a user and detach it, so a rollback inside a request never
    expires the instance the auth override hands out.
    """
    user = User(email=email, name=name, password_hash=hash_password(password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    db.expunge(user)
    return user

@pytest_asyncio.fixture
async def owner(db_session) -> User:
    return await make_user(db_session, "owner@example.com", "Owner")

@pytest_asyncio.fixture
async def other_user(db_session) -> User:
    return await make_user(db_session, "other@example.com", "Other")

class AuthAs:
    """Switch the authenticated caller for subsequent requests."""

    def __call__(self, user: User | None) -> None:
        if user is None:
            app.dependency_overrides.pop(get_current_user, None)
        else:
            app.dependency_overrides[get_current_user] = lambda: user

@pytest.fixture
def auth_as():
    switch = AuthAs()
    yield switch
    app.dependency_overrides.pop(get_current_user, None)


# ---- HTTP client -------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
