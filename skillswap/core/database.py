import logging

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from .config import settings

logger = logging.getLogger(__name__)

# Async engine (asyncpg in deployment, aiosqlite under DATABASE_URL overrides)
engine = create_async_engine(
    settings.database_url,
    echo=settings.echo_sql,
    future=True,
    pool_pre_ping=True,
)

# Services commit their own writes; nothing is expired afterwards so
# response schemas can read the committed objects
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# Base class for SQLAlchemy models
Base = declarative_base()


async def get_db():
    """
    Request-scoped session dependency.

    A request that fails leaves no partial writes behind: whatever the
    session has not committed is rolled back before the error propagates.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            logger.debug("Rolling back request session after error")
            await session.rollback()
            raise
        finally:
            await session.close()
