"""Tests for domain models."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from credit_evolution.models import (
    Balance,
    Credit,
    InstallmentPlan,
    InstallmentProgram,
    LedgerRow,
    SettlementEvent,
)


class TestCredit:
    """Tests for Credit model."""

    def test_credit_creation(self) -> None:
        credit = Credit(
            credit_id="cred-001",
            principal=Decimal("1500.00"),
            origination_date=date(2025, 1, 15),
        )

        assert credit.term_months is None
        assert credit.description == ""

    def test_credit_is_frozen(self) -> None:
        credit = Credit("cred-001", Decimal("1"), date(2025, 1, 1))

        with pytest.raises(dataclasses.FrozenInstanceError):
            credit.principal = Decimal("2")  # type: ignore[misc]


class TestSettlementEvent:
    """Tests for SettlementEvent model."""

    def test_defaults(self) -> None:
        event = SettlementEvent("s1", "cred-001", "2025-02-01", "R$ 10,00")

        assert event.document_ref is None

    def test_equal_events_hash_equal(self) -> None:
        a = SettlementEvent("s1", "cred-001", "2025-02-01", Decimal("10"))
        b = SettlementEvent("s1", "cred-001", "2025-02-01", Decimal("10"))

        assert a == b
        assert hash(a) == hash(b)


class TestLedgerRow:
    """Tests for LedgerRow model."""

    def test_month_label(self) -> None:
        zero = Decimal("0")
        row = LedgerRow(
            month=date(2025, 3, 1),
            principal_base=zero,
            monthly_rate=zero,
            accumulated_rate=zero,
            factor=Decimal("1"),
            updated_value=zero,
            monthly_accrual_amount=zero,
            settlement_gross=zero,
            settlement_principal_portion=zero,
            settlement_accrual_portion=zero,
            closing_balance=zero,
        )

        assert row.month_label == "03/2025"


class TestBalance:
    """Tests for Balance model."""

    def test_defaults(self) -> None:
        balance = Balance(Decimal("10"))

        assert balance.is_future is False
        assert balance.error is None


class TestInstallmentPlan:
    """Tests for InstallmentPlan model."""

    def test_defaults(self) -> None:
        plan = InstallmentPlan("p1", "2025-01-01", 100, 10, 5, 12)

        assert plan.program == InstallmentProgram.ORDINARY
        assert plan.original_amount is None
        assert plan.process_number == ""
