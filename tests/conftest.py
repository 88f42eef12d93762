"""
Test configuration and fixtures for the gold shop backend tests.
"""
import pytest
from typing import AsyncGenerator
from datetime import datetime

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from app.core.database import Base, get_db
from main import app


# ============================================================
# Database Fixtures
# ============================================================

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create a fresh test database engine for each test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for each test"""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================
# Customer Fixtures
# ============================================================

@pytest.fixture
async def test_customer(db_session):
    """Create a test customer"""
    from app.modules.customers.models import Customer, Gender

    customer = Customer(
        name="Asha Verma",
        mobile="9876543210",
        email="asha@example.com",
        address="12 MG Road, Jaipur",
        gender=Gender.FEMALE,
        loyalty_points=0,
        total_due=0.0
    )

    db_session.add(customer)
    await db_session.commit()
    await db_session.refresh(customer)

    return customer


# ============================================================
# Gold Loan Fixtures
# ============================================================

@pytest.fixture
def gold_necklace():
    return {
        "item_type": "Gold",
        "description": "22K necklace",
        "weight": 20.0,
        "purity": 22,
        "market_value": 125000.0
    }


@pytest.fixture
async def test_loan(db_session, test_customer):
    """Create an active gold loan of 100000 at 12% for 12 months"""
    from app.modules.gold_loans.services import GoldLoanService
    from app.modules.gold_loans.schemas import GoldLoanCreate

    service = GoldLoanService(db_session)
    request = GoldLoanCreate(
        customer_id=test_customer.id,
        loan_amount=100000.0,
        interest_rate=12.0,
        duration=12,
        start_date=datetime(2026, 1, 15, 10, 0, 0),
        items=[{
            "item_type": "Gold",
            "description": "22K necklace",
            "weight": 20.0,
            "purity": 22,
            "market_value": 125000.0
        }]
    )
    return await service.create_loan(request)


# ============================================================
# Inventory Fixtures
# ============================================================

@pytest.fixture
def ring_payload():
    return {
        "item_type": "Gold",
        "category": "Ornament",
        "name": "Bridal Ring",
        "description": "22K bridal ring with filigree",
        "weight": 8.5,
        "unit": "gram",
        "purity": 22,
        "purchase_price": 50000.0,
        "selling_price": 58000.0,
        "making_charges": 2500.0,
        "quantity": 10,
        "reorder_level": 3,
        "supplier": {"name": "Shree Bullion", "contact": "0141-2222222", "invoice_number": "SB-1001"},
        "location": "Showcase A"
    }
