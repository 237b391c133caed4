import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from testhub.adapter.services.cache import InMemoryCache
from testhub.adapter.services.counter_store import InMemoryCounterStore
from testhub.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from testhub.api.app import create_app
from testhub.app.services.rate_limiter import RateLimiter
from testhub.depends import (
    enable_sqlite_savepoints,
    get_cache,
    get_rate_limiter,
    get_unit_of_work,
)

ADMIN_HEADERS = {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}
PASSWORD = "SecurePass123!"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def rate_limiter():
    return RateLimiter(InMemoryCounterStore())


@pytest_asyncio.fixture
async def client(db_session, cache, rate_limiter):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register(client):
    """Sign up a user and return its id and bearer headers"""

    async def _register(email: str, name: str = None) -> dict:
        response = await client.post(
            "/auth/signup", json={"email": email, "password": PASSWORD, "name": name}
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return {
            "id": data["user"]["id"],
            "email": data["user"]["email"],
            "headers": {"Authorization": f"Bearer {data['access_token']}"},
        }

    return _register


@pytest.fixture
def create_team(client):
    async def _create_team(owner: dict, name: str = "QA Guild") -> str:
        response = await client.post("/teams", json={"name": name}, headers=owner["headers"])
        assert response.status_code == 201, response.text
        return response.json()["team"]["id"]

    return _create_team


@pytest.fixture
def sync_subscription(client):
    """Push a subscription state through the billing admin endpoint"""

    async def _sync(team_id: str, seats: int, status: str = "ACTIVE"):
        response = await client.post(
            "/admin/subscriptions/sync",
            json={"team_id": team_id, "status": status, "seats": seats},
            headers=ADMIN_HEADERS,
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _sync


@pytest.fixture
def add_member(client):
    """Invite ``user`` into ``team_id`` as ``inviter`` and accept"""

    async def _add_member(inviter: dict, team_id: str, user: dict, role: str = "TESTER"):
        response = await client.post(
            f"/teams/{team_id}/invite",
            json={"email": user["email"], "role": role},
            headers=inviter["headers"],
        )
        assert response.status_code == 201, response.text
        token = response.json()["token"]

        response = await client.post(f"/invitations/{token}/accept", headers=user["headers"])
        assert response.status_code == 200, response.text
        return response.json()

    return _add_member
