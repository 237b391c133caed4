import logging
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from testhub.adapter.services.cache import InMemoryCache, RedisCache
from testhub.adapter.services.counter_store import InMemoryCounterStore, RedisCounterStore
from testhub.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from testhub.api.error import ClientError
from testhub.api.utils.jwt import verify_jwt
from testhub.app.services.cache import ICache
from testhub.app.services.rate_limiter import RateLimiter
from testhub.libs.result import Error

logger = logging.getLogger(__name__)


def enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    """
    Hand transaction control to SQLAlchemy so SAVEPOINTs nest properly on SQLite.

    SQLite has no row locks and ignores FOR UPDATE, so every transaction
    starts with BEGIN IMMEDIATE and takes the database write lock up front.
    Concurrent transactions then run one after the other and each one reads
    what the previous one committed.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
if engine.url.get_backend_name() == "sqlite":
    enable_sqlite_savepoints(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


def build_cache(config=ApplicationConfig) -> ICache:
    if config.CACHE_BACKEND == "redis":
        return RedisCache.from_url(config.REDIS_URL)
    return InMemoryCache()


def build_rate_limiter(config=ApplicationConfig) -> RateLimiter:
    """
    Redis counters when Redis is configured, with the in-process store as
    fallback for when Redis cannot be reached.
    """
    fallback = InMemoryCounterStore()
    if config.CACHE_BACKEND == "redis":
        return RateLimiter(RedisCounterStore.from_url(config.REDIS_URL), fallback=fallback)

    logger.warning(
        "Rate limiting uses the in-process counter store; limits are per instance"
    )
    return RateLimiter(fallback)


cache = build_cache()
rate_limiter = build_rate_limiter()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_cache() -> ICache:
    return cache


def get_rate_limiter() -> RateLimiter:
    return rate_limiter


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload
