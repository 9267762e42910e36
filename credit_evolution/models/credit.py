"""Tax credit and settlement models."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Credit:
    """Tax credit whose balance is indexed month by month.

    ``principal`` and ``origination_date`` keep whatever the upstream record
    carried; the engines normalize them.
    """

    credit_id: str
    principal: Decimal | str | float | None
    origination_date: date | str | None
    term_months: int | None = None
    description: str = ""


@dataclass(frozen=True)
class SettlementEvent:
    """Compensation or payment applied against a credit's updated balance."""

    settlement_id: str
    credit_id: str
    effective_date: date | str | None
    amount: Decimal | str | float | None
    document_ref: str | None = None  # External document number, not used in calculations
