"""Installment plan schedules with indexation of the unamortized remainder."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from credit_evolution.config import EngineConfig
from credit_evolution.exceptions import InvalidEntityStateError, MissingFieldError
from credit_evolution.models import InstallmentPlan, InstallmentRow
from credit_evolution.normalize import (
    HUNDRED,
    ZERO,
    add_months,
    month_label,
    month_start,
    parse_date,
    to_decimal,
)
from credit_evolution.rates import RateTable

logger = logging.getLogger(__name__)


class InstallmentEngine:
    """Build the installment schedule of a consolidated debt.

    Each installment amortizes an equal share of what remains of the
    principal, fine and consolidated interest. The remainder entering a
    month is indexed by that month's rate, with the same rate schedule as
    credits: the policy rate for the first installment and the published
    index afterwards.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def evolve(self, plan: InstallmentPlan, rate_table: RateTable) -> list[InstallmentRow]:
        """Compute every installment of ``plan``.

        Parameters
        ----------
        plan : InstallmentPlan
            Plan to schedule.
        rate_table : RateTable
            Monthly index rates.

        Returns
        -------
        list[InstallmentRow]
            One row per installment, empty if the consolidation date is
            unreadable.

        Raises
        ------
        MissingFieldError
            If the plan has no identity or no term.
        InvalidEntityStateError
            If the term is not positive or a component is negative.
        """
        term = self._term(plan)
        remaining = self._components(plan)

        consolidated = parse_date(plan.consolidation_date)
        if consolidated is None:
            logger.warning(
                "Plan %s has invalid consolidation date %r, no schedule built",
                plan.plan_id,
                plan.consolidation_date,
                extra={"plan_id": plan.plan_id},
            )
            return []
        start = month_start(consolidated)

        rows: list[InstallmentRow] = []
        accumulated = ZERO
        for number in range(1, term + 1):
            due_month = add_months(start, number)
            monthly_rate = self._monthly_rate(number, due_month, rate_table)
            accumulated += monthly_rate

            outstanding = sum(remaining, ZERO)
            indexation = outstanding * monthly_rate / HUNDRED

            installments_left = term - number + 1
            amortized = [component / installments_left for component in remaining]
            remaining = [component - part for component, part in zip(remaining, amortized)]
            amortized_total = sum(amortized, ZERO)

            rows.append(
                InstallmentRow(
                    number=number,
                    due_month=due_month,
                    amortized_principal=amortized[0],
                    amortized_fine=amortized[1],
                    amortized_interest=amortized[2],
                    amortized_total=amortized_total,
                    monthly_rate=monthly_rate,
                    accumulated_rate=accumulated,
                    indexation_amount=indexation,
                    total_amount=amortized_total + indexation,
                    balance=sum(remaining, ZERO),
                )
            )

        return rows

    def _term(self, plan: InstallmentPlan) -> int:
        if not plan.plan_id:
            raise MissingFieldError("Installment plan has no plan_id")
        if plan.term_months is None:
            raise MissingFieldError(f"Installment plan {plan.plan_id} has no term")
        if plan.term_months <= 0:
            raise InvalidEntityStateError(
                f"Installment plan {plan.plan_id} has non-positive term {plan.term_months}"
            )
        return plan.term_months

    def _components(self, plan: InstallmentPlan) -> list[Decimal]:
        components = [to_decimal(plan.principal), to_decimal(plan.fine), to_decimal(plan.interest)]
        if any(component < ZERO for component in components):
            raise InvalidEntityStateError(
                f"Installment plan {plan.plan_id} has a negative component"
            )
        if plan.original_amount is not None:
            original = to_decimal(plan.original_amount)
            if original != sum(components, ZERO):
                logger.info(
                    "Plan %s components sum to %s, original amount is %s",
                    plan.plan_id,
                    sum(components, ZERO),
                    original,
                    extra={"plan_id": plan.plan_id},
                )
        return components

    def _monthly_rate(self, number: int, month: date, rate_table: RateTable) -> Decimal:
        if number == 1:
            return self.config.policy_rate
        rate = rate_table.rate_for(month)
        if rate is None:
            logger.debug("No published rate for %s, using 0", month_label(month))
            return ZERO
        return rate
