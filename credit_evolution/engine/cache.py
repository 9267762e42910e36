"""Balance snapshots for many credits at a shared reference month."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Hashable, Iterable, Mapping

from credit_evolution.engine.evolution import EvolutionEngine
from credit_evolution.engine.settlements import group_by_credit
from credit_evolution.exceptions import CreditEvolutionError
from credit_evolution.models import Balance, Credit, LedgerRow, SettlementEvent
from credit_evolution.normalize import ZERO, month_label, parse_month
from credit_evolution.rates import RateTable

logger = logging.getLogger(__name__)


def balance_at(rows: list[LedgerRow], reference_month: date) -> Balance:
    """Pick the balance for ``reference_month`` out of a computed ledger.

    The matching row's closing balance when there is one; zero flagged as
    future when the month precedes origination; otherwise the last row's
    closing balance.
    """
    if not rows:
        return Balance(ZERO)
    for row in rows:
        if row.month == reference_month:
            return Balance(row.closing_balance)
    if reference_month < rows[0].month:
        return Balance(ZERO, is_future=True)
    return Balance(rows[-1].closing_balance)


class BalanceCache:
    """Memoized credit balances at one reference month.

    The cache holds the balances computed for the last input snapshot
    (credits, settlements, rate table, reference month). A refresh with an
    equal snapshot is a no-op; anything else rebuilds every balance, since a
    single new settlement can move every later month of its credit.

    Parameters
    ----------
    engine : EvolutionEngine | None
        Engine used for each credit.
    horizon : date | None
        Last month evolved. Defaults to the current month at refresh time.
    """

    def __init__(
        self,
        engine: EvolutionEngine | None = None,
        horizon: date | None = None,
    ) -> None:
        self.engine = engine or EvolutionEngine()
        self.horizon = horizon
        self._key: Hashable | None = None
        self._reference_month: date | None = None
        self._balances: dict[str, Balance] = {}
        self._total = ZERO
        self._credits: tuple[Credit, ...] = ()
        self._events_by_credit: dict[str, list[SettlementEvent]] = {}
        self._rate_table = RateTable()
        self.rebuilds = 0

    @property
    def reference_month(self) -> date | None:
        """Reference month of the cached snapshot."""
        return self._reference_month

    @property
    def balances(self) -> Mapping[str, Balance]:
        """Cached balance per credit id."""
        return dict(self._balances)

    @property
    def total(self) -> Decimal:
        """Sum of cached balances."""
        return self._total

    def refresh(
        self,
        credits: Iterable[Credit],
        settlements: Iterable[SettlementEvent],
        rate_table: RateTable,
        reference_month: Any,
        version: Hashable | None = None,
    ) -> bool:
        """Rebuild the cache if the inputs differ from the cached snapshot.

        Parameters
        ----------
        credits : Iterable[Credit]
            All credits.
        settlements : Iterable[SettlementEvent]
            All settlement events, for any credit.
        rate_table : RateTable
            Monthly index rates.
        reference_month : Any
            Month to snapshot (``date``, ``"YYYY-MM"``, ``"MM/YYYY"``...).
        version : Hashable | None
            Version stamp of the inputs. When given it replaces the
            content comparison of credits and settlements.

        Returns
        -------
        bool
            True if the cache was rebuilt.
        """
        month = parse_month(reference_month)
        credits = tuple(credits)
        settlements = tuple(settlements)
        key: Hashable
        if version is not None:
            key = ("version", version, rate_table, month)
        else:
            key = (credits, settlements, rate_table, month)

        if key == self._key:
            return False

        self._rebuild(credits, settlements, rate_table, month)
        self._key = key
        return True

    def get_balance(self, credit: Credit, reference_month: Any = None) -> Balance:
        """Balance of ``credit`` at ``reference_month``.

        The cached snapshot answers when the month is the cached one (or
        omitted); any other month is computed on demand from the inputs of
        the last refresh.
        """
        month = self._reference_month if reference_month is None else parse_month(reference_month)
        if month == self._reference_month and credit.credit_id in self._balances:
            return self._balances[credit.credit_id]
        return self._compute(credit, self._events_by_credit.get(credit.credit_id, []), month)

    def snapshot(self, reference_month: Any) -> dict[str, Balance]:
        """Balances of every cached credit at another month, without caching them."""
        month = parse_month(reference_month)
        return {
            credit.credit_id: self._compute(
                credit, self._events_by_credit.get(credit.credit_id, []), month
            )
            for credit in self._credits
        }

    def _rebuild(
        self,
        credits: tuple[Credit, ...],
        settlements: Iterable[SettlementEvent],
        rate_table: RateTable,
        month: date | None,
    ) -> None:
        self._credits = credits
        self._events_by_credit = group_by_credit(settlements)
        self._rate_table = rate_table
        self._reference_month = month

        balances: dict[str, Balance] = {}
        total = ZERO
        for credit in credits:
            balance = self._compute(credit, self._events_by_credit.get(credit.credit_id, []), month)
            balances[credit.credit_id] = balance
            total += balance.value

        self._balances = balances
        self._total = total
        self.rebuilds += 1
        logger.debug(
            "Rebuilt balances for %d credits at %s, total %s",
            len(balances),
            month_label(month) if month else "-",
            total,
        )

    def _compute(
        self,
        credit: Credit,
        events: Iterable[SettlementEvent],
        month: date | None,
    ) -> Balance:
        if month is None:
            return Balance(ZERO)
        try:
            rows = self.engine.evolve_events(credit, self._rate_table, events, self.horizon)
        except CreditEvolutionError as e:
            logger.error(
                "Cannot compute balance of credit %s: %s",
                credit.credit_id,
                e,
                extra={"credit_id": credit.credit_id, "reference_month": month},
            )
            return Balance(ZERO, error=str(e))
        return balance_at(rows, month)
