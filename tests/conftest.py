import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from order_tracker.application.schemas import CustomerCreate, ProductCreate
from order_tracker.application.customer_service import CustomerService
from order_tracker.application.product_service import ProductService
from order_tracker.infrastructure.db import get_db, init_models, make_engine, make_session_factory
from order_tracker.main import app

@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_models(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)

@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()

@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def products(db):
    """Three active products and one retired one, ids 1-4."""
    service = ProductService(db)
    created = [
        service.create(ProductCreate(name="limonata")),
        service.create(ProductCreate(name="sade soda")),
        service.create(ProductCreate(name="ideal pet şişe 0.50")),
        service.create(ProductCreate(name="şalgam", active=False)),
    ]
    return created

@pytest.fixture
def customer(db):
    return CustomerService(db).create(CustomerCreate(name="Bakkal Ali", phone="05321234567", address="Çarşı Cd. 4"))
