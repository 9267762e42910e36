"""Month-by-month evolution of a credit balance.

Accrual is simple interest: monthly rates are summed, never compounded,
and the sum is applied to the current principal base. The origination
month accrues nothing, the following month accrues a flat policy rate and
every later month accrues the published index for that month.

A settlement is split into the principal it extinguishes (the amount
un-grown by the current factor) and the accrued part. After a settlement
the principal base is rebased to ``closing_balance / factor`` so that
later accrual only grows what is actually left.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping

from credit_evolution.config import EngineConfig
from credit_evolution.engine.settlements import monthly_settlements
from credit_evolution.exceptions import InvalidEntityStateError, MissingFieldError
from credit_evolution.models import Credit, LedgerRow, SettlementEvent
from credit_evolution.normalize import (
    HUNDRED,
    ZERO,
    add_months,
    month_label,
    month_start,
    months_between,
    parse_date,
    to_decimal,
)
from credit_evolution.rates import RateTable

logger = logging.getLogger(__name__)

ONE = Decimal("1")


def current_month() -> date:
    """First day of the current month."""
    return month_start(date.today())


class EvolutionEngine:
    """Build the monthly ledger of a credit.

    Parameters
    ----------
    config : EngineConfig | None
        Policy rate and pre-origination settlement policy. Defaults to
        ``EngineConfig()``.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def origination_month(self, credit: Credit) -> date | None:
        """Month accrual starts from, or None if the date is unreadable."""
        origination = parse_date(credit.origination_date)
        return month_start(origination) if origination else None

    def evolve(
        self,
        credit: Credit,
        rate_table: RateTable,
        settlements_by_month: Mapping[date, Decimal] | None = None,
        horizon: date | None = None,
    ) -> list[LedgerRow]:
        """Compute one ledger row per month from origination to ``horizon``.

        Parameters
        ----------
        credit : Credit
            Credit to evolve.
        rate_table : RateTable
            Monthly index rates.
        settlements_by_month : Mapping[date, Decimal] | None
            Net settlement per month, as produced by ``monthly_settlements``.
        horizon : date | None
            Last month to compute. Defaults to the current month.

        Returns
        -------
        list[LedgerRow]
            Rows in month order. Empty when the origination date cannot be
            read or the horizon precedes origination.

        Raises
        ------
        MissingFieldError
            If the credit has no identity or no principal.
        InvalidEntityStateError
            If the principal is negative.
        """
        principal = self._principal(credit)
        start = self.origination_month(credit)
        if start is None:
            logger.warning(
                "Credit %s has invalid origination date %r, no ledger built",
                credit.credit_id,
                credit.origination_date,
                extra={"credit_id": credit.credit_id},
            )
            return []

        end = month_start(horizon) if horizon else current_month()
        settlements = settlements_by_month or {}

        rows: list[LedgerRow] = []
        accumulated = ZERO
        for i in range(months_between(start, end) + 1):
            month = add_months(start, i)
            monthly_rate = self._monthly_rate(i, month, rate_table)
            accumulated += monthly_rate

            factor = ONE + accumulated / HUNDRED
            updated_value = principal * factor
            settlement = settlements.get(month, ZERO)

            if factor > ZERO:
                principal_portion = settlement / factor
            else:
                logger.warning(
                    "Credit %s has non-positive factor %s in %s",
                    credit.credit_id,
                    factor,
                    month_label(month),
                    extra={"credit_id": credit.credit_id},
                )
                principal_portion = ZERO
            closing_balance = updated_value - settlement

            rows.append(
                LedgerRow(
                    month=month,
                    principal_base=principal,
                    monthly_rate=monthly_rate,
                    accumulated_rate=accumulated,
                    factor=factor,
                    updated_value=updated_value,
                    monthly_accrual_amount=principal * monthly_rate / HUNDRED,
                    settlement_gross=settlement,
                    settlement_principal_portion=principal_portion,
                    settlement_accrual_portion=settlement - principal_portion,
                    closing_balance=closing_balance,
                )
            )

            if settlement != ZERO:
                principal = closing_balance / factor if factor > ZERO else ZERO

        return rows

    def evolve_events(
        self,
        credit: Credit,
        rate_table: RateTable,
        events: Iterable[SettlementEvent],
        horizon: date | None = None,
    ) -> list[LedgerRow]:
        """Aggregate raw settlement events, then evolve the credit."""
        settlements = monthly_settlements(
            events,
            origination_month=self.origination_month(credit),
            policy=self.config.pre_origination_policy,
        )
        return self.evolve(credit, rate_table, settlements, horizon)

    def _principal(self, credit: Credit) -> Decimal:
        if not credit.credit_id:
            raise MissingFieldError("Credit has no credit_id")
        if credit.principal is None:
            raise MissingFieldError(f"Credit {credit.credit_id} has no principal")
        principal = to_decimal(credit.principal)
        if principal < ZERO:
            raise InvalidEntityStateError(
                f"Credit {credit.credit_id} has negative principal {principal}"
            )
        return principal

    def _monthly_rate(self, index: int, month: date, rate_table: RateTable) -> Decimal:
        if index == 0:
            return ZERO
        if index == 1:
            return self.config.policy_rate
        rate = rate_table.rate_for(month)
        if rate is None:
            logger.debug("No published rate for %s, using 0", month_label(month))
            return ZERO
        return rate


def evolve(
    credit: Credit,
    rate_table: RateTable,
    settlements_by_month: Mapping[date, Decimal] | None = None,
    horizon: date | None = None,
) -> list[LedgerRow]:
    """Evolve a credit with the default engine configuration."""
    return EvolutionEngine().evolve(credit, rate_table, settlements_by_month, horizon)
