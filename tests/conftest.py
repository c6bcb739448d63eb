"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; configure before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from catalog_api.core.security import create_access_token
from catalog_api.db.session import get_db, init_db
from catalog_api.main import app
from catalog_api.models import Product, User
from catalog_api.repositories.client_repository import ClientRepository
from catalog_api.schemas.client import ClientCreate

PASSWORD = "password123"
EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    """Create test client bound to the in-memory database."""
    def override_get_db():
        with Session(engine) as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_tenant(session, name, email, active=True):
    return ClientRepository(session).create(
        ClientCreate(name=name, email=email, password=PASSWORD, is_active=active)
    )


@pytest.fixture
def tenant(session):
    return make_tenant(session, "TechStore", "admin@techstore.com")


@pytest.fixture
def other_tenant(session):
    return make_tenant(session, "Shop1", "admin@shop1.com")


def bearer(tenant):
    token = create_access_token(subject=tenant.email, client_id=tenant.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def inactive_tenant(session):
    return make_tenant(session, "Closed Shop", "admin@closed.com", active=False)


@pytest.fixture
def auth_headers(tenant):
    return bearer(tenant)


@pytest.fixture
def other_headers(other_tenant):
    return bearer(other_tenant)


@pytest.fixture
def add_products(session):
    """Insert products with strictly increasing creation times."""
    def _add(count, brand="Apple", start=0):
        products = []
        for i in range(start, start + count):
            product = Product(
                name=f"Phone {i}",
                brand=brand,
                model=f"A{1000 + i}",
                price=Decimal("499.00") + i,
                description=f"Phone number {i}",
                specifications={"storage": "128 GB"},
                created_at=EPOCH + timedelta(minutes=i),
                updated_at=EPOCH + timedelta(minutes=i),
            )
            session.add(product)
            products.append(product)
        session.commit()
        for product in products:
            session.refresh(product)
        return products
    return _add


@pytest.fixture
def add_users(session):
    """Insert users for a tenant with strictly increasing creation times."""
    def _add(owner, people, start=0):
        users = []
        for offset, (first_name, last_name, email) in enumerate(people):
            user = User(
                first_name=first_name,
                last_name=last_name,
                email=email,
                client_id=owner.id,
                created_at=EPOCH + timedelta(minutes=start + offset),
            )
            session.add(user)
            users.append(user)
        session.commit()
        for user in users:
            session.refresh(user)
        return users
    return _add
