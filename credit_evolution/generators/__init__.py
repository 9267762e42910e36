"""Synthetic portfolio generators."""

from credit_evolution.generators.credit import CreditGenerator, SettlementGenerator
from credit_evolution.generators.installment import InstallmentPlanGenerator
from credit_evolution.generators.rates import RateTableGenerator

__all__ = [
    "CreditGenerator",
    "InstallmentPlanGenerator",
    "RateTableGenerator",
    "SettlementGenerator",
]
