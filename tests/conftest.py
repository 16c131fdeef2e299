"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import os
import sys

# Set required environment variables before importing app modules,
# config.py reads them at import time
os.environ.setdefault('RUNTIME_ENVIRONMENT', 'TEST')
os.environ.setdefault('DB_URL', 'sqlite+aiosqlite:///:memory:')
os.environ.setdefault('ADMIN_API_TOKEN', 'test-admin-token')
os.environ.setdefault('CURRENCY_SYMBOL', '₹')
os.environ.setdefault('LOCAL_SHIPPING_REGION', 'Gujarat')
os.environ.setdefault('LOCAL_RATE_PER_KG', '50')
os.environ.setdefault('DEFAULT_RATE_PER_KG', '80')
os.environ.setdefault('FREE_SHIPPING_THRESHOLD', '1999')
os.environ.setdefault('HEAVY_WEIGHT_THRESHOLD_KG', '1')
os.environ.setdefault('WHATSAPP_HOST', 'wa.me')
os.environ.setdefault('LOG_MASK_SECRETS', 'true')

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from models.cart import CartLineDTO


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """In-memory SQLite engine with all tables."""
    from db import Base
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Sync session, accepted by every repository through the db.session_* helpers."""
    session = Session(engine)
    yield session
    session.rollback()
    session.close()


@pytest_asyncio.fixture
async def test_engine():
    """Async in-memory engine; StaticPool keeps one connection so all sessions see the same tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    from db import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


# ============================================================================
# Checkout Fixtures
# ============================================================================

@pytest.fixture
def customer_fields():
    """Valid checkout form data."""
    return {
        "name": "Asha Patel",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "12 MG Road, Near Bus Stand",
        "city": "Surat",
        "state": "Gujarat",
        "pincode": "395003",
    }


@pytest.fixture
def almonds_line():
    return CartLineDTO(product_id=1, name="Almonds", unit_price=1000.0, quantity=1, size_label="500g")


@pytest.fixture
def honey_line():
    return CartLineDTO(product_id=2, name="Wild Honey", unit_price=2500.0, quantity=1, size_label="2kg")
