"""Credit and settlement generators."""

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from credit_evolution.generators.base import BaseGenerator
from credit_evolution.models import Credit, SettlementEvent
from credit_evolution.normalize import month_start


class CreditGenerator(BaseGenerator):
    """Generate synthetic tax credits."""

    DESCRIPTIONS = [
        "PIS pago a maior",
        "COFINS pago a maior",
        "IRPJ saldo negativo",
        "CSLL saldo negativo",
        "IPI ressarcimento",
        "INSS retido",
    ]

    def generate(self, as_of: date | None = None, max_age_months: int = 60) -> Credit:
        """Generate a credit originated up to ``max_age_months`` before ``as_of``.

        Parameters
        ----------
        as_of : date | None
            Latest possible origination date. Defaults to today.
        max_age_months : int
            Oldest origination, in months before ``as_of``.

        Returns
        -------
        Credit
            Generated credit.
        """
        as_of = as_of or date.today()
        origination = self.fake.date_between(
            start_date=as_of - timedelta(days=30 * max_age_months),
            end_date=as_of,
        )
        principal = Decimal(random.randint(1_000, 2_000_000)) + Decimal(random.randint(0, 99)) / 100

        return Credit(
            credit_id=self.fake.uuid4(),
            principal=principal,
            origination_date=origination,
            description=random.choice(self.DESCRIPTIONS),
        )

    def generate_batch(self, count: int, as_of: date | None = None) -> Iterator[Credit]:
        """Generate ``count`` credits."""
        for _ in range(count):
            yield self.generate(as_of=as_of)


class SettlementGenerator(BaseGenerator):
    """Generate compensations against a credit."""

    def generate_for_credit(
        self,
        credit: Credit,
        count: int,
        as_of: date | None = None,
        max_share: float = 0.3,
    ) -> list[SettlementEvent]:
        """Generate up to ``count`` settlements between origination and ``as_of``.

        Each settlement consumes at most ``max_share`` of the principal, so
        a handful of them never fully extinguishes the credit.

        Parameters
        ----------
        credit : Credit
            Credit being compensated. Its origination must be a ``date``.
        count : int
            Number of settlements.
        as_of : date | None
            Latest settlement date. Defaults to today.
        max_share : float
            Largest fraction of the principal a single settlement takes.

        Returns
        -------
        list[SettlementEvent]
            Settlements sorted by date.
        """
        as_of = as_of or date.today()
        origination = credit.origination_date
        if not isinstance(origination, date) or origination > as_of:
            return []

        start = month_start(origination)
        principal = float(credit.principal)
        events = []
        for _ in range(count):
            share = random.uniform(0.01, max_share)
            events.append(
                SettlementEvent(
                    settlement_id=self.fake.uuid4(),
                    credit_id=credit.credit_id,
                    effective_date=self.fake.date_between(start_date=start, end_date=as_of),
                    amount=Decimal(str(round(principal * share, 2))),
                    document_ref=self.fake.numerify("#####.#####.######.#.#.##-####"),
                )
            )
        return sorted(events, key=lambda e: e.effective_date)
