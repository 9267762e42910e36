"""Credit ledger store with referential integrity and version stamping."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Any

from credit_evolution.config import EngineConfig
from credit_evolution.engine import BalanceCache, EvolutionEngine, InstallmentEngine
from credit_evolution.exceptions import EntityNotFoundError, ReferentialIntegrityError
from credit_evolution.models import (
    Balance,
    Credit,
    InstallmentPlan,
    InstallmentRow,
    LedgerRow,
    SettlementEvent,
)
from credit_evolution.rates import RateTable


@dataclass
class LedgerStore:
    """In-memory snapshot of credits, settlements, installment plans and rates.

    Every mutation bumps ``version``; the store-owned balance cache uses it
    as the snapshot key, so balances are recomputed only after a change.
    Changing ``horizon`` or ``engine_config`` discards the cache.
    """

    credits: dict[str, Credit] = field(default_factory=dict)
    settlements: list[SettlementEvent] = field(default_factory=list)
    installment_plans: dict[str, InstallmentPlan] = field(default_factory=dict)
    rate_table: RateTable = field(default_factory=RateTable)
    engine_config: EngineConfig = field(default_factory=EngineConfig)
    horizon: date | None = None
    version: int = 0

    # Relationship indexes
    _credit_settlements: dict[str, list[int]] = field(default_factory=dict)
    _cache: BalanceCache | None = field(default=None, repr=False, compare=False)

    def add_credit(self, credit: Credit) -> None:
        """Add or replace a credit."""
        self.credits[credit.credit_id] = credit
        self._credit_settlements.setdefault(credit.credit_id, [])
        self.version += 1

    def add_settlement(self, settlement: SettlementEvent) -> None:
        """Add a settlement event to the store."""
        if settlement.credit_id not in self.credits:
            raise ReferentialIntegrityError(f"Credit {settlement.credit_id} not found")

        idx = len(self.settlements)
        self.settlements.append(settlement)
        self._credit_settlements[settlement.credit_id].append(idx)
        self.version += 1

    def remove_credit(self, credit_id: str) -> None:
        """Remove a credit together with its settlements."""
        if credit_id not in self.credits:
            raise EntityNotFoundError(f"Credit {credit_id} not found")

        del self.credits[credit_id]
        self.settlements = [s for s in self.settlements if s.credit_id != credit_id]
        self._reindex_settlements()
        self.version += 1

    def add_installment_plan(self, plan: InstallmentPlan) -> None:
        """Add or replace an installment plan."""
        self.installment_plans[plan.plan_id] = plan
        self.version += 1

    def set_rate_table(self, rate_table: RateTable) -> None:
        """Replace the rate table."""
        self.rate_table = rate_table
        self.version += 1

    # Query methods
    def get_credit(self, credit_id: str) -> Credit:
        """Get a credit by id."""
        if credit_id not in self.credits:
            raise EntityNotFoundError(f"Credit {credit_id} not found")
        return self.credits[credit_id]

    def get_credit_settlements(self, credit_id: str) -> list[SettlementEvent]:
        """Get all settlement events for a credit."""
        indices = self._credit_settlements.get(credit_id, [])
        return [self.settlements[i] for i in indices]

    def evolution(self, credit_id: str) -> list[LedgerRow]:
        """Monthly ledger of one stored credit."""
        credit = self.get_credit(credit_id)
        return EvolutionEngine(self.engine_config).evolve_events(
            credit, self.rate_table, self.get_credit_settlements(credit_id), self.horizon
        )

    def installment_schedule(self, plan_id: str) -> list[InstallmentRow]:
        """Installment schedule of one stored plan."""
        if plan_id not in self.installment_plans:
            raise EntityNotFoundError(f"Installment plan {plan_id} not found")
        return InstallmentEngine(self.engine_config).evolve(
            self.installment_plans[plan_id], self.rate_table
        )

    def balances(self, reference_month: Any) -> dict[str, Balance]:
        """Balance of every credit at ``reference_month``."""
        return dict(self._refreshed_cache(reference_month).balances)

    def total_balance(self, reference_month: Any) -> Decimal:
        """Sum of all credit balances at ``reference_month``."""
        return self._refreshed_cache(reference_month).total

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "credits": len(self.credits),
            "settlements": len(self.settlements),
            "installment_plans": len(self.installment_plans),
            "rates": len(self.rate_table),
        }

    def _refreshed_cache(self, reference_month: Any) -> BalanceCache:
        if (
            self._cache is None
            or self._cache.horizon != self.horizon
            or self._cache.engine.config != self.engine_config
        ):
            self._cache = BalanceCache(EvolutionEngine(replace(self.engine_config)), self.horizon)
        self._cache.refresh(
            self.credits.values(),
            self.settlements,
            self.rate_table,
            reference_month,
            version=self.version,
        )
        return self._cache

    def _reindex_settlements(self) -> None:
        self._credit_settlements = {credit_id: [] for credit_id in self.credits}
        for idx, settlement in enumerate(self.settlements):
            self._credit_settlements[settlement.credit_id].append(idx)
