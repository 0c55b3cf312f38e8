"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before any application module reads the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base
from rest_api.services.domain import (
    AreaService,
    GradeService,
    LocalityService,
    MillService,
    ProductClassService,
    ProductTypeService,
    SupplierService,
)
from shared.infrastructure.db import enable_sqlite_foreign_keys, get_db


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def locality_service(db_session):
    return LocalityService(db_session)


@pytest.fixture
def area_service(db_session):
    return AreaService(db_session)


@pytest.fixture
def seed_locality(locality_service):
    """Create the CDMX locality without areas."""
    return locality_service.create({"name": "CDMX"})


@pytest.fixture
def seed_other_locality(locality_service):
    return locality_service.create({"name": "Guadalajara"})


@pytest.fixture
def seed_area(area_service, seed_locality):
    """Create the Almacen area inside CDMX."""
    return area_service.create_child(seed_locality.id, {"name": "Almacen"})


@pytest.fixture
def seed_references(db_session):
    """
    Create one entry in every catalog a coil references.

    Returns the coil reference fields mapped to their ids.
    """
    return {
        "type_id": ProductTypeService(db_session).create({"name": "Kraft"}).id,
        "class_id": ProductClassService(db_session).create({"name": "Liner"}).id,
        "mill_id": MillService(db_session).create({"name": "Molino Norte"}).id,
        "grade_id": GradeService(db_session).create({"name": "Grado A"}).id,
        "supplier_id": SupplierService(db_session).create({"name": "Papelera del Norte"}).id,
    }
