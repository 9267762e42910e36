"""Installment plan models."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from credit_evolution.models.enums import InstallmentProgram
from credit_evolution.normalize import month_label


@dataclass(frozen=True)
class InstallmentPlan:
    """Consolidated debt split into a fixed number of monthly installments."""

    plan_id: str
    consolidation_date: date | str | None
    principal: Decimal | str | float | None
    fine: Decimal | str | float | None
    interest: Decimal | str | float | None
    term_months: int | None
    original_amount: Decimal | None = None
    program: InstallmentProgram = InstallmentProgram.ORDINARY
    process_number: str = ""


@dataclass(frozen=True)
class InstallmentRow:
    """One scheduled installment of a plan."""

    number: int  # 1, 2, 3, ...
    due_month: date
    amortized_principal: Decimal
    amortized_fine: Decimal
    amortized_interest: Decimal
    amortized_total: Decimal
    monthly_rate: Decimal
    accumulated_rate: Decimal
    indexation_amount: Decimal
    total_amount: Decimal
    balance: Decimal  # Unamortized remainder after this installment

    @property
    def due_label(self) -> str:
        """Due month as ``MM/YYYY``."""
        return month_label(self.due_month)
