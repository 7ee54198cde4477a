"""Pytest configuration and fixtures"""
import os
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("DATABASE_URL", "sqlite:///./cart_test.db")
os.environ.setdefault("CART_TAX_PERCENTAGE", "10")
os.environ.setdefault("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from cart_manager import models  # noqa: E402,F401
from cart_manager.core.config import CartConfig  # noqa: E402
from cart_manager.core.drivers.base import CartDriver  # noqa: E402
from cart_manager.core.drivers.memory import MemoryCartDriver  # noqa: E402
from cart_manager.database import Base  # noqa: E402
from cart_manager.services.catalog_client import Product  # noqa: E402


@pytest.fixture
def config():
    """Tax 10%, no shipping, no rounding"""
    return CartConfig(tax_percentage=Decimal("10"))


@pytest.fixture
def memory_driver():
    return MemoryCartDriver()


@pytest.fixture
def mock_driver():
    """Driver mock with no stored cart"""
    driver = Mock(spec=CartDriver)
    driver.load_cart.return_value = None
    return driver


@pytest.fixture
def stored_cart():
    """Cart record as a driver returns it"""
    return {
        "id": 7,
        "subtotal": Decimal("25.00"),
        "discount": Decimal("5.00"),
        "discount_percentage": Decimal("20.00"),
        "coupon_id": 3,
        "shipping_charges": Decimal("0.00"),
        "net_total": Decimal("20.00"),
        "tax": Decimal("2.00"),
        "total": Decimal("22.00"),
        "round_off": Decimal("0.00"),
        "payable": Decimal("22.00"),
        "items": [
            {
                "id": 11,
                "source_type": "Book",
                "source_id": 1,
                "name": "Dune",
                "price": Decimal("10.00"),
                "quantity": 2,
            },
            {
                "id": 12,
                "source_type": "Gadget",
                "source_id": 2,
                "name": "Lamp",
                "price": Decimal("5.00"),
                "quantity": 1,
            },
        ],
    }


@pytest.fixture
def loaded_driver(mock_driver, stored_cart):
    """Driver mock returning a stored cart with two items"""
    mock_driver.load_cart.return_value = stored_cart
    return mock_driver


@pytest.fixture
def engine():
    """In-memory SQLite engine with cart tables"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


class FakeCatalogClient:
    """Catalog client serving products from a dict"""

    def __init__(self, products):
        self.products = products

    async def get_product(self, product_id):
        return self.products.get(product_id)


@pytest.fixture
def catalog_products():
    return {
        1: Product(id=1, name="Dune", price=Decimal("10.00")),
        2: Product(id=2, name="Lamp", price=Decimal("5.00")),
        3: Product(id=3, name="Poster", price=None),
        4: Product(id=4, name="Refund voucher", price=Decimal("-1.00")),
    }


@pytest.fixture
def mock_events():
    """Kafka client mock"""
    events = Mock()
    events.publish_event = AsyncMock(return_value=True)
    return events


@pytest.fixture
def client(session_factory, catalog_products, mock_events):
    """FastAPI test client with SQLite, fake catalog and mocked Kafka"""
    from fastapi.testclient import TestClient

    from cart_manager.api.dependencies import get_catalog_client
    from cart_manager.database import get_db
    from cart_manager.main import app
    from cart_manager.services.kafka_client import get_kafka_client

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_client] = lambda: FakeCatalogClient(catalog_products)
    app.dependency_overrides[get_kafka_client] = lambda: mock_events

    yield TestClient(app)

    app.dependency_overrides.clear()
