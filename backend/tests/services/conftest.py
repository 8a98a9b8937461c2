"""Service test fixtures — async DB, FastAPI test client, and seeded shelter data.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager swapped for a manager over the test engine, so get_db, the health
      check and the error mapping all run the production code paths
    - get_breed_catalog overridden: no test ever reaches the real catalogue

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection, so
      rows seeded through test_db are visible to the app's sessions
    - Seed fixtures build one shelter with an admin, two adopters, a breed and an
      Available animal; tests add what they need on top
"""

from datetime import date, time
from decimal import Decimal

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from seepaw.api.deps import get_breed_catalog
from seepaw.core.domain_types import AnimalState, Species, SizeType, SexType
from seepaw.db.base import Base
from seepaw.infrastructure.breed_catalog import BreedCatalogClient
from seepaw.infrastructure.database import DatabaseSessionManager
import seepaw.infrastructure.database as db_module
from seepaw.main import app
from seepaw.models import Animal, Breed, Image, Shelter, User


@pytest.fixture
def auth():
    """Headers identifying a user to the API."""
    def _headers(user) -> dict:
        return {"X-User-Id": str(user.id)}
    return _headers


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
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
def catalog_payload():
    """What the fake breed catalogue returns; tests may replace the list contents."""
    return [
        {"name": "Beagle", "temperament": "Amiable, Even Tempered, Determined"},
        {"name": "Border Collie", "temperament": "Energetic, Intelligent"},
    ]


@pytest.fixture
def fake_catalog(catalog_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=catalog_payload)

    return BreedCatalogClient(
        "https://catalog.test/v1/breeds",
        max_retries=0,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
async def client(test_engine, fake_catalog):
    """FastAPI test client over the test engine, with the breed catalogue faked."""
    app.dependency_overrides[get_breed_catalog] = lambda: fake_catalog

    original_manager = db_module.db_manager
    db_module.db_manager = DatabaseSessionManager.for_engine(test_engine)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed data ───────────────────────────────────────────────────

@pytest.fixture
async def shelter(test_db):
    shelter = Shelter(
        name="Patas Felizes",
        street="Rua das Flores 10",
        city="Setubal",
        postal_code="2900-001",
        phone="912345678",
        nif="123456789",
        opening_time=time(8, 0),
        closing_time=time(20, 0),
    )
    test_db.add(shelter)
    await test_db.commit()
    return shelter


@pytest.fixture
async def other_shelter(test_db):
    shelter = Shelter(
        name="Quatro Patas",
        street="Avenida Central 5",
        city="Lisboa",
        postal_code="1000-100",
        phone="213456789",
        nif="987654321",
        opening_time=time(9, 0),
        closing_time=time(18, 0),
    )
    test_db.add(shelter)
    await test_db.commit()
    return shelter


@pytest.fixture
async def breed(test_db):
    breed = Breed(name="Labrador", description="Friendly")
    test_db.add(breed)
    await test_db.commit()
    return breed


@pytest.fixture
async def admin(test_db, shelter):
    user = User(name="Ana Admin", email="ana@shelter.test", shelter_id=shelter.id)
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def user(test_db):
    user = User(name="Bruno", email="bruno@example.test")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def other_user(test_db):
    user = User(name="Carla", email="carla@example.test")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
def make_animal(test_db, shelter, breed):
    """Factory: insert an animal of the seeded shelter (with a principal image)."""
    async def _make(
        name: str = "Rex",
        state: AnimalState = AnimalState.AVAILABLE,
        cost: str = "50.00",
        species: Species = Species.DOG,
        birth_date: date = date(2020, 5, 17),
        shelter_id=None,
        with_image: bool = True,
    ) -> Animal:
        animal = Animal(
            name=name,
            animal_state=state,
            species=species,
            size=SizeType.MEDIUM,
            sex=SexType.MALE,
            colour="Brown",
            birth_date=birth_date,
            sterilized=True,
            cost=Decimal(cost),
            shelter_id=shelter_id or shelter.id,
            breed_id=breed.id,
        )
        test_db.add(animal)
        await test_db.flush()
        if with_image:
            test_db.add(Image(
                animal_id=animal.id,
                url=f"https://img.test/{name.lower()}.jpg",
                public_id=f"animals/{name.lower()}",
                is_principal=True,
            ))
        await test_db.commit()
        return animal

    return _make


@pytest.fixture
async def animal(make_animal):
    return await make_animal()
