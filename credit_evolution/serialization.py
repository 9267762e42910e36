"""Conversion of engine output to plain, JSON-ready dicts."""

from dataclasses import asdict, fields, is_dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Iterable

from credit_evolution.models import Balance, InstallmentRow, LedgerRow

CENTS = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    """Round to cents, half up."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def to_dict_fast(obj: Any) -> dict:
    """Convert a flat dataclass without the deep copy ``asdict`` makes.

    Parameters
    ----------
    obj : Any
        A dataclass instance.

    Returns
    -------
    dict
        Serialized dictionary.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def ledger_records(rows: Iterable[LedgerRow], rounded: bool = False) -> list[dict]:
    """Ledger rows as dicts keyed by field name plus ``month_label``.

    Parameters
    ----------
    rows : Iterable[LedgerRow]
        Engine output.
    rounded : bool
        Round monetary fields to cents. Rates and the factor are left as is.

    Returns
    -------
    list[dict]
        One record per row.
    """
    exact = {"monthly_rate", "accumulated_rate", "factor"}
    records = []
    for row in rows:
        record = {"month_label": row.month_label}
        for f in fields(row):
            value = getattr(row, f.name)
            if rounded and isinstance(value, Decimal) and f.name not in exact:
                value = money(value)
            record[f.name] = serialize_value(value)
        records.append(record)
    return records


def installment_records(rows: Iterable[InstallmentRow]) -> list[dict]:
    """Installment rows as dicts plus ``due_label``."""
    return [{"due_label": row.due_label, **to_dict_fast(row)} for row in rows]


def balance_records(balances: dict[str, Balance]) -> list[dict]:
    """Balances as ``{"credit_id": ..., "value": ..., ...}`` records."""
    return [{"credit_id": credit_id, **to_dict_fast(b)} for credit_id, b in balances.items()]
