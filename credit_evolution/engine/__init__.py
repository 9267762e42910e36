"""Balance evolution, settlement aggregation and caching."""

from credit_evolution.engine.cache import BalanceCache, balance_at
from credit_evolution.engine.evolution import EvolutionEngine, current_month, evolve
from credit_evolution.engine.installment import InstallmentEngine
from credit_evolution.engine.settlements import (
    aggregate_by_credit,
    group_by_credit,
    monthly_settlements,
)

__all__ = [
    "BalanceCache",
    "EvolutionEngine",
    "InstallmentEngine",
    "aggregate_by_credit",
    "balance_at",
    "current_month",
    "evolve",
    "group_by_credit",
    "monthly_settlements",
]
