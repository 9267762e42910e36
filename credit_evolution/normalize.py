"""Numeric and calendar normalization shared by every engine.

Raw records reach the engines with currency amounts typed as formatted
strings (``"R$ 1.234,56"``), plain numbers or ``Decimal``, and with dates as
ISO strings, ``DD/MM/YYYY`` strings or ``date`` objects. Everything is
normalized here, once, before any arithmetic happens.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

_CURRENCY_JUNK = re.compile(r"[^0-9,.\-]")
_DOT_THOUSANDS = re.compile(r"^-?\d{1,3}(\.\d{3})+$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")
_BR_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_MONTH = re.compile(r"^(\d{4})-(\d{1,2})$")
_BR_MONTH = re.compile(r"^(\d{1,2})/(\d{4})$")


def to_decimal(value: Any) -> Decimal:
    """Normalize a currency or rate value to ``Decimal``.

    Strings are read as currency: symbols and spaces are dropped, and when a
    comma is present it is the decimal mark and dots are thousands
    separators. Without a comma, dots grouping exactly three digits
    (``"1.250.000"``, ``"1.500"``) are thousands separators too. Unparsable
    input becomes zero.

    Parameters
    ----------
    value : Any
        Decimal, int, float, formatted string or None.

    Returns
    -------
    Decimal
        Normalized value, ``Decimal("0")`` when it cannot be read.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        logger.warning("Boolean %r is not a monetary value, using 0", value)
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        result = Decimal(str(value))
        return result if result.is_finite() else ZERO

    text = _CURRENCY_JUNK.sub("", str(value))
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    elif _DOT_THOUSANDS.match(text):
        text = text.replace(".", "")
    if not text:
        if str(value).strip():
            logger.warning("Unparsable amount %r, using 0", value)
        return ZERO
    try:
        return Decimal(text)
    except InvalidOperation:
        logger.warning("Unparsable amount %r, using 0", value)
        return ZERO


def parse_date(value: Any) -> date | None:
    """Parse a date from ``date``, ``datetime``, ISO or ``DD/MM/YYYY`` input."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        match = _ISO_DATE.match(text)
        if match:
            year, month, day = (int(g) for g in match.groups())
            return date(year, month, day)
        match = _BR_DATE.match(text)
        if match:
            day, month, year = (int(g) for g in match.groups())
            return date(year, month, day)
    except ValueError:
        return None
    return None


def parse_month(value: Any) -> date | None:
    """Parse a calendar month; returns the first day of that month.

    Accepts anything ``parse_date`` accepts plus ``YYYY-MM`` and ``MM/YYYY``.
    """
    if value is None:
        return None
    if not isinstance(value, (date, datetime)):
        text = str(value).strip()
        for pattern, order in ((_ISO_MONTH, (0, 1)), (_BR_MONTH, (1, 0))):
            match = pattern.match(text)
            if match:
                year = int(match.group(order[0] + 1))
                month = int(match.group(order[1] + 1))
                if 1 <= month <= 12:
                    return date(year, month, 1)
                return None
    parsed = parse_date(value)
    return month_start(parsed) if parsed else None


def month_start(value: date) -> date:
    """First day of the month containing ``value``."""
    return date(value.year, value.month, 1)


def add_months(value: date, months: int) -> date:
    """First day of the month ``months`` after the month of ``value``."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_label(value: date) -> str:
    """``MM/YYYY`` label for a month."""
    return f"{value.month:02d}/{value.year}"
