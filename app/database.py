import logging

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.middleware import install_query_counter

logger = logging.getLogger(__name__)


def _connect_args() -> dict:
    if settings.DATABASE_SSL:
        return {"ssl": "require"}
    return {}


# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    connect_args=_connect_args(),
)

# Register the per-request SQL query counter on the production engine.
install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    """
    Yield one session per request.

    Each handler issues a single statement, so the session doubles as the
    statement's transaction: commit on success, rollback and re-raise on any
    error so the exception handlers can report it.

    Declare it as ``Depends(get_db, scope="function")`` so the commit runs
    before the response is sent; a failed commit then still becomes a 500.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Close every pooled connection.  Called once at application shutdown."""
    await engine.dispose()
    logger.info("Database connection pool closed")
