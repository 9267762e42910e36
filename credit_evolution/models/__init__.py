"""Domain models for credit evolution."""

from credit_evolution.models.credit import Credit, SettlementEvent
from credit_evolution.models.enums import InstallmentProgram, PreOriginationPolicy
from credit_evolution.models.installment import InstallmentPlan, InstallmentRow
from credit_evolution.models.ledger import Balance, LedgerRow

__all__ = [
    "Balance",
    "Credit",
    "InstallmentPlan",
    "InstallmentProgram",
    "InstallmentRow",
    "LedgerRow",
    "PreOriginationPolicy",
    "SettlementEvent",
]
