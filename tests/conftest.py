"""
Shared fixtures for the blog API tests.

- ``engine_test`` is an in-memory SQLite store (aiosqlite + StaticPool, so
  every session sees the same connection and tables).  ``store_engine``
  exposes it to tests that need engine events.
- ``get_db`` is overridden so requests run against that store; the override
  commits and rolls back exactly like the production dependency.
- ``setup_db`` creates blog_posts and blog_comments before each test and
  drops them afterwards.
- ``async_client`` drives the app in-process through ASGITransport;
  ``db_session`` is for calling the services directly.
- ``post_payload`` is a complete post body with every field set.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.middleware import install_query_counter

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Register the per-request SQL query counter on the test engine.
install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override: replace production get_db with the test session factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that call the service layer
    directly (seeding data, asserting stored state).
    """
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def post_payload() -> dict:
    """A complete create/update body; tests override individual fields."""
    return {
        "title": "A",
        "slug": "a",
        "image_url": "https://example.com/a.png",
        "content": "c",
        "excerpt": "e",
        "author": "x",
        "badge": "b",
    }


@pytest.fixture
def store_engine():
    """The async engine behind the overridden get_db."""
    return engine_test
