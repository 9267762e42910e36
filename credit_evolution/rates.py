"""Monthly indexation rate table."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping

from credit_evolution.normalize import month_label, parse_month, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateEntry:
    """Indexation rate (percent) published for one calendar month."""

    month: date  # First day of the month
    rate: Decimal


@dataclass(frozen=True)
class RateTable:
    """Read-only month → rate lookup.

    Entries are kept sorted by month with one entry per month; when the
    source repeats a month the last value wins.
    """

    entries: tuple[RateEntry, ...] = ()
    _by_month: dict[date, Decimal] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        by_month: dict[date, Decimal] = {}
        for entry in self.entries:
            if entry.month in by_month:
                logger.warning(
                    "Duplicate rate for %s, keeping %s", month_label(entry.month), entry.rate
                )
            by_month[entry.month] = entry.rate
        ordered = tuple(RateEntry(month, by_month[month]) for month in sorted(by_month))
        object.__setattr__(self, "entries", ordered)
        object.__setattr__(self, "_by_month", by_month)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, month: object) -> bool:
        return month in self._by_month

    def rate_for(self, month: date) -> Decimal | None:
        """Rate for the calendar month of ``month``, or None if unpublished."""
        return self._by_month.get(date(month.year, month.month, 1))

    @classmethod
    def from_mapping(cls, rates: Mapping[Any, Any]) -> RateTable:
        """Build from ``{month: rate}`` where months are anything ``parse_month`` reads."""
        entries = []
        for raw_month, raw_rate in rates.items():
            month = parse_month(raw_month)
            if month is None:
                logger.warning("Skipping rate with invalid month %r", raw_month)
                continue
            entries.append(RateEntry(month, to_decimal(raw_rate)))
        return cls(tuple(entries))

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> RateTable:
        """Build from index feed records.

        Each record looks like ``{"data": "01/03/2025", "valor": "0,85"}``.
        ``valor`` may also be a ``{"buy": ..., "sell": ...}`` quote, in which
        case the buy side is used and sell is the fallback.

        Parameters
        ----------
        records : Iterable[Mapping[str, Any]]
            Raw feed records.

        Returns
        -------
        RateTable
            Table of every record with a readable month.
        """
        entries = []
        for record in records:
            if not record or not record.get("data"):
                continue
            month = parse_month(record["data"])
            if month is None:
                logger.warning("Skipping rate with invalid date %r", record["data"])
                continue
            value = record.get("valor")
            if isinstance(value, Mapping):
                value = value.get("buy") or value.get("sell")
            entries.append(RateEntry(month, to_decimal(value)))
        return cls(tuple(entries))
