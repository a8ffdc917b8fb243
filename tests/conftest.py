# tests/conftest.py
import os

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

# Load test environment variables
load_dotenv(".env.test", override=True)

# Test database URL - in-memory SQLite unless a test database is configured
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

# Settings are read at import time, so point the app at the test database first
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

from fastapi.testclient import TestClient  # noqa: E402

from catalog_admin.db.base import Base, get_db_session  # noqa: E402
import catalog_admin.db.models  # noqa: E402,F401
from catalog_admin.api.web_app import app  # noqa: E402
from catalog_admin.schemas import BrandCreate, CategoryCreate, ProductCreate  # noqa: E402
from catalog_admin.services.brand_service import BrandService  # noqa: E402
from catalog_admin.services.category_service import CategoryService  # noqa: E402
from catalog_admin.services.product_service import ProductService  # noqa: E402
from catalog_admin.services.catalog_query_service import CatalogQueryService  # noqa: E402


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine with a fresh schema."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        @event.listens_for(engine, "connect")
        def enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        engine = create_engine(TEST_DATABASE_URL)

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a test database session."""
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()

    yield session

    session.close()


@pytest.fixture(scope="function")
def brand_service(db_session):
    """Create a brand service for testing."""
    return BrandService(db_session)


@pytest.fixture(scope="function")
def category_service(db_session):
    """Create a category service for testing."""
    return CategoryService(db_session)


@pytest.fixture(scope="function")
def product_service(db_session):
    """Create a product service for testing."""
    return ProductService(db_session)


@pytest.fixture(scope="function")
def catalog_query_service(db_session):
    """Create the product listing service for testing."""
    return CatalogQueryService(db_session)


@pytest.fixture(scope="function")
def make_brand(brand_service):
    """Factory creating a brand by name."""

    def _make(name, website=None):
        return brand_service.create_brand(BrandCreate(name=name, website=website))

    return _make


@pytest.fixture(scope="function")
def make_category(category_service):
    """Factory creating a category by name."""

    def _make(name, parent_id=None):
        return category_service.create_category(CategoryCreate(name=name, parent_id=parent_id))

    return _make


@pytest.fixture(scope="function")
def make_product(product_service):
    """Factory creating a product with sensible defaults."""

    def _make(name, **fields):
        data = {
            "name": name,
            "old_price": 100.0,
            "discount": 0,
            "gender": "women",
            "rating": 4.0,
        }
        data.update(fields)
        return product_service.create_product(ProductCreate(**data))

    return _make


@pytest.fixture(scope="function")
def test_client(db_session):
    """FastAPI test client sharing the test session."""

    def override_get_db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()
