import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from spellforge.db.database import get_session
from spellforge.main import app
from spellforge.models import failure as failure_module
from spellforge.models.card import CardKind, CardRef
from spellforge.models.db import Base
from spellforge.models.deck import Deck, create_empty_deck


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


# --- Catalog entries ---


@pytest.fixture
def imp() -> CardRef:
    return CardRef(id="u_fire_imp", kind=CardKind.CREATURE, name="Fire Imp", rank="I")


@pytest.fixture
def knight() -> CardRef:
    return CardRef(id="u_iron_knight", kind=CardKind.CREATURE, name="Iron Knight", rank="III")


@pytest.fixture
def tower() -> CardRef:
    return CardRef(id="u_arrow_tower", kind=CardKind.BUILDING, name="Arrow Tower", rank="II")


@pytest.fixture
def fireball() -> CardRef:
    return CardRef(id="u_fireball", kind=CardKind.SPELL, name="Fireball", rank="IV")


@pytest.fixture
def golem() -> CardRef:
    return CardRef(id="t_stone_golem", kind=CardKind.TITAN, name="Stone Golem")


@pytest.fixture
def dragon() -> CardRef:
    return CardRef(id="t_elder_dragon", kind=CardKind.TITAN, name="Elder Dragon")


@pytest.fixture
def mage() -> CardRef:
    return CardRef(id="sc_pyromancer", kind=CardKind.SPELLCASTER, name="Pyromancer")


@pytest.fixture
def witch() -> CardRef:
    return CardRef(id="sc_hedge_witch", kind=CardKind.SPELLCASTER, name="Hedge Witch")


@pytest.fixture
def catalog(imp, knight, tower, fireball, golem, dragon, mage, witch) -> list[CardRef]:
    return [imp, knight, tower, fireball, golem, dragon, mage, witch]


@pytest.fixture
def full_deck(imp, knight, tower, fireball, golem, mage) -> Deck:
    """A complete, playable deck."""
    deck = create_empty_deck(deck_id="deck-full", name="Burn")
    for i, card in enumerate([imp, knight, tower, fireball, golem]):
        deck = deck.with_slot(i, card)
    return deck.with_spellcaster(mage)


# --- Database / HTTP ---


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
def session_factory(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    """A single session for calling db operations directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Provide an async test client with overridden database session."""
    async def override_get_session():
        async with session_factory() as session:
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
