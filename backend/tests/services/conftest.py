"""Service test fixtures — async DB, fake commerce platform, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Commerce calls never leave the process: httpx.MockTransport answers them
    - Pending OAuth states are cleared between tests

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - commerce_api.responses keyed by URL path; values are httpx.Response,
      a callable(request) -> httpx.Response, or an exception to raise
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import fundboard.models  # noqa: F401
from fundboard.db.base import Base
from fundboard.infrastructure.commerce_client import CommerceClient
from fundboard.infrastructure.database import get_db, DatabaseSessionManager
import fundboard.infrastructure.database as db_module
from fundboard.main import app
from fundboard.models.commerce_session import CommerceSession, offline_session_id
from fundboard.services import commerce_gateway

SHOP = "demo.myshopify.com"
TOKEN_PATH = "/admin/oauth/access_token"
GRAPHQL_PATH = "/admin/api/2023-10/graphql.json"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def commerce_api():
    """Fake commerce platform.

    Returns dict with:
      - requests: list of httpx.Request seen by the transport
      - responses: dict[url_path, httpx.Response | callable | Exception]
    """
    requests: list[httpx.Request] = []
    responses: dict = {
        TOKEN_PATH: httpx.Response(
            200, json={"access_token": "shpat_test", "scope": "read_products"},
        ),
        GRAPHQL_PATH: httpx.Response(200, json={"data": {}}),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        answer = responses.get(request.url.path)
        if answer is None:
            return httpx.Response(404, json={"errors": "Not Found"})
        if isinstance(answer, Exception):
            raise answer
        return answer(request) if callable(answer) else answer

    return {
        "requests": requests,
        "responses": responses,
        "transport": httpx.MockTransport(handler),
    }


@pytest.fixture
async def commerce_client(commerce_api):
    client = CommerceClient(
        api_key="test-key", api_secret="test-secret",
        transport=commerce_api["transport"],
    )
    yield client
    await client.aclose()


@pytest.fixture(autouse=True)
def clear_pending_states():
    commerce_gateway._pending_states.clear()
    yield
    commerce_gateway._pending_states.clear()


@pytest.fixture
async def stored_session(test_db):
    """Completed OAuth handshake for SHOP."""
    session = CommerceSession(
        id=offline_session_id(SHOP), shop=SHOP,
        access_token="shpat_stored", scope="read_products,read_orders",
    )
    test_db.add(session)
    await test_db.commit()
    return session


@pytest.fixture
async def client(test_engine, test_session_factory, commerce_client):
    """FastAPI test client with DB dependency and commerce client overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    app.state.commerce_client = commerce_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
