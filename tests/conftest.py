"""Pytest configuration and fixtures."""

import os

# Select test settings before any hilltop module reads them.
os.environ.setdefault("ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.pool import NullPool

from hilltop.core.dtos.category import CategoryCreate
from hilltop.core.services.catalog_service import CatalogService
from hilltop.core.services.contact_service import ContactService
from hilltop.database.database import build_engine, build_sessionmaker, init_db
from hilltop.observability.metrics import CatalogMetrics


@pytest.fixture
def database_url(tmp_path):
    """A fresh SQLite file per test."""
    return f"sqlite:///{tmp_path / 'catalog.sqlite'}"


@pytest_asyncio.fixture
async def engine(database_url):
    engine = build_engine(database_url, poolclass=NullPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
def metrics():
    return CatalogMetrics(environment="test")


@pytest.fixture
def catalog(session, metrics):
    return CatalogService(session, metrics)


@pytest.fixture
def contacts(session):
    return ContactService(session)


@pytest_asyncio.fixture
async def cicd(catalog):
    return await catalog.create_category(
        CategoryCreate(name="CI/CD", description="desc", icon="fa-icon")
    )


def _make_client(database_url, metrics, seed):
    from hilltop.main import create_app

    engine = build_engine(database_url, poolclass=NullPool)
    app = create_app(engine=engine, metrics=metrics, seed_default_data=seed)
    return TestClient(app)


@pytest.fixture
def client(database_url, metrics):
    """API client over an empty database."""
    with _make_client(database_url, metrics, seed=False) as client:
        yield client


@pytest.fixture
def seeded_client(database_url, metrics):
    """API client over a database holding the default categories and resources."""
    with _make_client(database_url, metrics, seed=True) as client:
        yield client
