"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from credit_evolution.models import Credit
from credit_evolution.rates import RateEntry, RateTable


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_credit_id() -> str:
    """Sample credit ID."""
    return "cred-test-001"


@pytest.fixture
def sample_credit(sample_credit_id: str) -> Credit:
    """Credit of 1000 originated mid January 2025."""
    return Credit(
        credit_id=sample_credit_id,
        principal=Decimal("1000"),
        origination_date=date(2025, 1, 15),
    )


@pytest.fixture
def sample_rates() -> RateTable:
    """Index with a February entry (ignored by policy) and March 0.85%."""
    return RateTable(
        (
            RateEntry(date(2025, 2, 1), Decimal("1.0")),
            RateEntry(date(2025, 3, 1), Decimal("0.85")),
        )
    )


@pytest.fixture
def march_2025() -> date:
    """Horizon used by most ledger tests."""
    return date(2025, 3, 1)
