import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from prizecheck.db.database import get_session
from prizecheck.main import app
from prizecheck.models.db import Base
from prizecheck.services.card_images import get_card_image_lookup


@pytest.fixture(autouse=True)
def clear_card_image_lookup():
    """Drop the shared image lookup (and its cache) between tests."""
    get_card_image_lookup.cache_clear()
    yield
    get_card_image_lookup.cache_clear()


@pytest.fixture
def sample_decklist() -> str:
    """A 60-card decklist with a section header and a total line."""
    return """Pokémon: 12
4 Pikachu ex SSP 57
4 Magnemite SSP 58
4 Raichu V BRS 45

Trainer: 34
4 Professor's Research SVI 189
4 Iono PAL 185
4 Ultra Ball SVI 196
4 Nest Ball SVI 181
4 Electric Generator SVI 170
4 Switch SVI 194
3 Boss's Orders PAL 172
3 Earthen Vessel PAR 163
4 Levincia PAL 259

Energy: 14
14 Basic Lightning Energy SVE 4

Total Cards: 60"""


@pytest.fixture
def short_decklist() -> str:
    """A decklist one card short of 60."""
    return "4 Pikachu SVI 54\n55 Basic Lightning Energy"


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
