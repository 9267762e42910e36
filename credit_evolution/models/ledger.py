"""Ledger rows and balance snapshots produced by the engines."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from credit_evolution.normalize import month_label


@dataclass(frozen=True)
class LedgerRow:
    """One month of a credit's evolution."""

    month: date  # First day of the month
    principal_base: Decimal
    monthly_rate: Decimal
    accumulated_rate: Decimal
    factor: Decimal
    updated_value: Decimal
    monthly_accrual_amount: Decimal
    settlement_gross: Decimal
    settlement_principal_portion: Decimal
    settlement_accrual_portion: Decimal
    closing_balance: Decimal

    @property
    def month_label(self) -> str:
        """Month as ``MM/YYYY``."""
        return month_label(self.month)


@dataclass(frozen=True)
class Balance:
    """Balance of one credit at a reference month."""

    value: Decimal
    is_future: bool = False
    error: str | None = None  # Set when the credit could not be computed
