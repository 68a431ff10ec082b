"""Shared test fixtures for all tests."""
import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from decimal import Decimal
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.core.database import Base, enable_sqlite_foreign_keys, get_db
from app.core.security import create_access_token, get_password_hash
from app.main import app
from app.middleware import limiter
from app.models import User, Supplier, Product, Customer

ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
async def engine():
    """Fresh in-memory SQLite database for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def test_db(session_factory):
    """Session used by tests to arrange data and inspect results."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD


@pytest.fixture
async def admin_user(test_db):
    user = User(
        username="admin",
        email="admin@example.com",
        password_hash=get_password_hash(ADMIN_PASSWORD),
        role="admin",
        is_active=True
    )
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def anon_client(session_factory):
    """Client without credentials; every request gets its own session."""
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(anon_client, admin_user):
    """Client authenticated as the admin user."""
    token = create_access_token(subject=admin_user.id)
    anon_client.headers["Authorization"] = f"Bearer {token}"
    return anon_client


@pytest.fixture
async def sample_supplier(test_db):
    supplier = Supplier(
        supplier_code="SUP-001",
        name="Anadolu Gıda",
        contact_person="Ayşe Yılmaz",
        phone="+90 212 555 0101"
    )
    test_db.add(supplier)
    await test_db.commit()
    return supplier


@pytest.fixture
async def sample_products(test_db, sample_supplier):
    """Two supplier products and one standalone product."""
    products = [
        Product(
            name="Süt 1L",
            sku="SUP-001-001",
            barcode="8690000000011",
            category="Süt Ürünleri",
            price=Decimal("25.00"),
            currency="TRY",
            quantity=10,
            min_quantity=5,
            supplier_id=sample_supplier.id
        ),
        Product(
            name="Beyaz Peynir",
            sku="SUP-001-002",
            barcode="8690000000028",
            category="Süt Ürünleri",
            price=Decimal("120.00"),
            currency="TRY",
            quantity=3,
            min_quantity=5,
            supplier_id=sample_supplier.id
        ),
        Product(
            name="Zeytinyağı 1L",
            sku="ZEY-250101-1234",
            category="Yağ",
            price=Decimal("8.50"),
            currency="USD",
            quantity=0,
            min_quantity=2
        ),
    ]
    test_db.add_all(products)
    await test_db.commit()
    return products


@pytest.fixture
async def sample_customer(test_db):
    customer = Customer(
        name="Mehmet Demir",
        email="mehmet@example.com",
        phone="+90 532 555 0000",
        total_debt=Decimal("0"),
        debt_currency="TRY"
    )
    test_db.add(customer)
    await test_db.commit()
    return customer
