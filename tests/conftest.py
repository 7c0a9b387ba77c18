from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from app.models import Base, Booking, BookingItem, City, Product, Tour
from app.models.base import create_catalog_engine, create_session_factory
from app.services.database_service import DatabaseService
from app.services.semantic_search_service import SemanticSearchService

LONG_DESCRIPTION = "A" * 2000


def _catalog_rows():
    cities = [
        City(id=1, name="Kraków", name_en="Krakow", country="Poland",
             description_en="Former royal capital of Poland.", slug_en="krakow"),
        City(id=2, name="Gdańsk", name_en="Gdansk", country="Poland",
             description_en="Port city on the Baltic coast.", slug_en="gdansk"),
        City(id=3, name="Warszawa", name_en="Warsaw", country="Poland",
             description_en="Capital of Poland.", slug_en="warsaw"),
    ]
    products = [
        Product(id=1, title_en="City Tour", title="Wycieczka po mieście", city_id=1,
                short_description_en="Walk through the Old Town",
                long_description_en=LONG_DESCRIPTION, slug_en="city-tour"),
        Product(id=2, title_en="Jewish Quarter Tour", city_id=1,
                short_description_en="Kazimierz and its history"),
        Product(id=3, title_en="Gdansk Old Town Walk", city_id=2,
                short_description_en="Long Market and the Crane"),
        Product(id=4, title_en="Food Tour Warsaw", city_id=3,
                short_description_en="Pierogi and vodka"),
        Product(id=5, title_en=None, title="Wycieczka rowerowa", city_id=None),
    ]
    tours = [
        Tour(id=1, product_id=1),
        Tour(id=2, product_id=1),
        Tour(id=3, product_id=2),
        Tour(id=4, product_id=3),
        Tour(id=5, product_id=4),
    ]
    bookings = [
        Booking(id=1, tour_id=1),
        Booking(id=2, tour_id=1),
        Booking(id=3, tour_id=2),
        Booking(id=4, tour_id=3),
        Booking(id=5, tour_id=4),
    ]
    items = [
        BookingItem(id=1, booking_id=1),
        BookingItem(id=2, booking_id=1),
        BookingItem(id=3, booking_id=2),
        BookingItem(id=4, booking_id=3),
        BookingItem(id=5, booking_id=4),
        BookingItem(id=6, booking_id=5),
        BookingItem(id=7, booking_id=5),
    ]
    return cities + products + tours + bookings + items


@pytest_asyncio.fixture
async def catalog_db(tmp_path):
    """Seeded catalogue on a file-backed SQLite database (schemas mapped away)"""
    engine = create_catalog_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        execution_options={"schema_translate_map": {"main": None, "public": None}},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        session.add_all(_catalog_rows())
        await session.commit()

    db = DatabaseService(engine=engine)
    yield db
    await engine.dispose()


@pytest.fixture
def failing_db():
    db = MagicMock(spec=DatabaseService)
    db.run_read_only_query = AsyncMock(side_effect=RuntimeError("connection refused"))
    return db


@pytest.fixture
def embeddings():
    mock = MagicMock()
    mock.aembed_query = AsyncMock(return_value=[1.0, 0.0])
    return mock


@pytest.fixture
def qdrant():
    mock = MagicMock()
    mock.query_points = AsyncMock(return_value=SimpleNamespace(points=[]))
    mock.scroll = AsyncMock(return_value=([], None))
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def semantic_service(qdrant, embeddings):
    return SemanticSearchService(qdrant_client=qdrant, embeddings=embeddings, collection_name="test_chunks")
