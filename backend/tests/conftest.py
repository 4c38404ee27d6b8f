"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before the application (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["CMS_PROJECT_ID"] = ""

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt
from shared.security.password import hash_password
from shared.security.rate_limit import limiter
from store_api.main import app
from store_api.models import Base, Category, Extra, Ingredient, Product, User


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpass123"

# Products get increasing created_at values so "newest first" is deterministic
_clock = itertools.count()
_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


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
    Login rate limiting is off unless a test turns it on.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    limiter.enabled = True


# =============================================================================
# Users and tokens
# =============================================================================


def _create_user(db_session, email: str, name: str, role: str) -> User:
    user = User(
        email=email,
        password=hash_password(TEST_PASSWORD, rounds=4),
        name=name,
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def _headers(user: User) -> dict[str, str]:
    token = sign_jwt({"sub": user.id, "role": user.role, "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db_session):
    return _create_user(db_session, "admin@test.com", "Test Admin", Roles.ADMIN)


@pytest.fixture
def employee_user(db_session):
    return _create_user(db_session, "staff@test.com", "Test Staff", Roles.EMPLOYEE)


@pytest.fixture
def customer_user(db_session):
    return _create_user(db_session, "client@test.com", "Test Client", Roles.USER)


@pytest.fixture
def other_customer(db_session):
    return _create_user(db_session, "other@test.com", "Other Client", Roles.USER)


@pytest.fixture
def admin_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def staff_headers(employee_user):
    return _headers(employee_user)


@pytest.fixture
def user_headers(customer_user):
    return _headers(customer_user)


@pytest.fixture
def other_user_headers(other_customer):
    return _headers(other_customer)


# =============================================================================
# Catalog factories
# =============================================================================


@pytest.fixture
def make_category(db_session):
    """Factory: make_category("Pizzas", parent=None, is_active=True)."""
    counter = itertools.count(1)

    def _make(name: str = "Test Category", **fields) -> Category:
        n = next(counter)
        category = Category(name=name, slug=fields.pop("slug", f"category-{n}"), **fields)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _make


@pytest.fixture
def make_product(db_session):
    """
    Factory: make_product(name="Margherita", price=9.5, is_popular=True).
    Each product is created one second after the previous one.
    """
    counter = itertools.count(1)

    def _make(name="Test Product", **fields) -> Product:
        n = next(counter)
        fields.setdefault("price", 10.0)
        fields.setdefault("created_at", _BASE_TIME + timedelta(seconds=next(_clock)))
        product = Product(name=name, slug=fields.pop("slug", f"product-{n}"), **fields)
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


@pytest.fixture
def seed_ingredient(db_session):
    ingredient = Ingredient(
        name="Mozzarella",
        slug="mozzarella",
        allergens=["lactose"],
        is_vegetarian=True,
        is_gluten_free=True,
    )
    db_session.add(ingredient)
    db_session.commit()
    db_session.refresh(ingredient)
    return ingredient


@pytest.fixture
def seed_extra(db_session):
    extra = Extra(name="Grande taille", slug="grande-taille", type="size", price=3.0)
    db_session.add(extra)
    db_session.commit()
    db_session.refresh(extra)
    return extra
