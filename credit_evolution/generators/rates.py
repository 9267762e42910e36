"""Rate table generator."""

import random
from datetime import date
from decimal import Decimal

from credit_evolution.generators.base import BaseGenerator
from credit_evolution.normalize import add_months, month_start, months_between
from credit_evolution.rates import RateEntry, RateTable


class RateTableGenerator(BaseGenerator):
    """Generate a monthly reference index series.

    Rates follow a bounded random walk so consecutive months look like a
    published policy-rate series.
    """

    MIN_RATE = 0.30
    MAX_RATE = 1.40

    def generate(self, start: date, end: date, initial_rate: float = 0.85) -> RateTable:
        """Generate one rate per month from ``start`` to ``end`` inclusive.

        Parameters
        ----------
        start : date
            First month.
        end : date
            Last month.
        initial_rate : float
            Rate of the first month, in percent.

        Returns
        -------
        RateTable
            Generated table.
        """
        first = month_start(start)
        rate = initial_rate
        entries = []
        for i in range(months_between(first, end) + 1):
            entries.append(RateEntry(add_months(first, i), Decimal(str(round(rate, 2)))))
            rate = min(self.MAX_RATE, max(self.MIN_RATE, rate + random.uniform(-0.08, 0.08)))
        return RateTable(tuple(entries))
