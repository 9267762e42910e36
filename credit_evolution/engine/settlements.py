"""Settlement aggregation: one net amount per credit and calendar month."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping

from credit_evolution.models import PreOriginationPolicy, SettlementEvent
from credit_evolution.normalize import month_label, month_start, parse_date, to_decimal

logger = logging.getLogger(__name__)


def monthly_settlements(
    events: Iterable[SettlementEvent],
    origination_month: date | None = None,
    policy: PreOriginationPolicy = PreOriginationPolicy.SKIP,
) -> dict[date, Decimal]:
    """Sum a single credit's settlements by calendar month.

    Parameters
    ----------
    events : Iterable[SettlementEvent]
        Raw events for one credit.
    origination_month : date | None
        When given, events dated before this month follow ``policy``.
    policy : PreOriginationPolicy
        ``SKIP`` drops early events, ``CLAMP`` books them in the
        origination month.

    Returns
    -------
    dict[date, Decimal]
        Net settlement per month (first day of month), in month order.
    """
    totals: dict[date, Decimal] = {}
    for event in events:
        effective = parse_date(event.effective_date)
        if effective is None:
            logger.warning(
                "Skipping settlement %s with invalid date %r",
                event.settlement_id,
                event.effective_date,
                extra={"settlement_id": event.settlement_id, "credit_id": event.credit_id},
            )
            continue

        month = month_start(effective)
        if origination_month is not None and month < origination_month:
            if policy == PreOriginationPolicy.CLAMP:
                logger.info(
                    "Settlement %s dated %s moved to origination month %s",
                    event.settlement_id,
                    effective.isoformat(),
                    month_label(origination_month),
                    extra={"settlement_id": event.settlement_id, "credit_id": event.credit_id},
                )
                month = origination_month
            else:
                logger.warning(
                    "Skipping settlement %s dated %s, before origination %s",
                    event.settlement_id,
                    effective.isoformat(),
                    month_label(origination_month),
                    extra={"settlement_id": event.settlement_id, "credit_id": event.credit_id},
                )
                continue

        totals[month] = totals.get(month, Decimal("0")) + to_decimal(event.amount)

    return dict(sorted(totals.items()))


def group_by_credit(events: Iterable[SettlementEvent]) -> dict[str, list[SettlementEvent]]:
    """Group events by ``credit_id``, keeping their original order."""
    grouped: dict[str, list[SettlementEvent]] = {}
    for event in events:
        grouped.setdefault(event.credit_id, []).append(event)
    return grouped


def aggregate_by_credit(
    events: Iterable[SettlementEvent],
    origination_months: Mapping[str, date] | None = None,
    policy: PreOriginationPolicy = PreOriginationPolicy.SKIP,
) -> dict[str, dict[date, Decimal]]:
    """Net settlement per (credit, month) for a whole event collection.

    Credits present in ``origination_months`` get the pre-origination
    ``policy`` applied; the others are aggregated unchecked.
    """
    origination_months = origination_months or {}
    return {
        credit_id: monthly_settlements(
            credit_events, origination_months.get(credit_id), policy
        )
        for credit_id, credit_events in group_by_credit(events).items()
    }
