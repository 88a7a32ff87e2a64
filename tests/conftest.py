"""
Shared fixtures.

- a fake dispatch namespace reached through httpx.MockTransport
- a seeded SQLite database per test
- an ASGI client against a freshly built application
"""

from collections.abc import AsyncGenerator

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.core.config import get_settings
from gateway.infrastructure.database import dispose_engine, reset_db
from gateway.infrastructure.database.session import get_session_factory
from gateway.infrastructure.namespace import DispatchNamespaceClient
from gateway.main import create_app
from gateway.modules.customers import CustomerService

from tests.fakes import ACCOUNT_ID, API_BASE_URL, DISPATCH_URL, NAMESPACE, FakeDispatchNamespace


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def fake_namespace() -> FakeDispatchNamespace:
    return FakeDispatchNamespace()


@pytest.fixture
async def namespace_client(fake_namespace: FakeDispatchNamespace) -> AsyncGenerator[DispatchNamespaceClient, None]:
    client = DispatchNamespaceClient(
        api_base_url=API_BASE_URL,
        account_id=ACCOUNT_ID,
        api_token="secret",
        namespace=NAMESPACE,
        dispatch_url=DISPATCH_URL,
        transport=httpx.MockTransport(fake_namespace.handle),
    )
    yield client
    await client.aclose()


@pytest.fixture
async def database(tmp_path, monkeypatch) -> AsyncGenerator[None, None]:
    """Point the engine at an empty SQLite file and load the seed customers."""
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'gateway.db'}")
    get_settings.cache_clear()
    await dispose_engine()

    await reset_db()
    async with get_session_factory()() as session:
        await CustomerService.with_session(session).seed()
        await session.commit()

    yield

    await dispose_engine()
    get_settings.cache_clear()


@pytest.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        yield session


@pytest.fixture
def app(database, namespace_client):
    return create_app(namespace=namespace_client)


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://gateway.test") as http:
        yield http
