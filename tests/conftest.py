"""Pytest configuration and fixtures."""

from datetime import date, timedelta

import pytest

from paymodel.sinks import MemorySink


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sink() -> MemorySink:
    """Sink collecting events emitted during a test."""
    return MemorySink()


@pytest.fixture
def card_number() -> str:
    """Visa test card number."""
    return "4111111111111111"


@pytest.fixture
def future_expiration() -> date:
    """Expiration date two years from today."""
    return date.today() + timedelta(days=730)


@pytest.fixture
def past_expiration() -> date:
    """Expiration date one year ago."""
    return date.today() - timedelta(days=365)


@pytest.fixture
def wallet_address() -> str:
    """Well-formed 34 character bitcoin address."""
    return "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"


@pytest.fixture
def paypal_email() -> str:
    """Sample PayPal account email."""
    return "user@example.com"
