"""Credit portfolio scenario: credits, compensations, installment plans and rates."""

from __future__ import annotations

import logging
import random
from datetime import date

from credit_evolution.config import EngineConfig, GeneratorConfig
from credit_evolution.generators import (
    CreditGenerator,
    InstallmentPlanGenerator,
    RateTableGenerator,
    SettlementGenerator,
)
from credit_evolution.normalize import add_months, month_start
from credit_evolution.store import LedgerStore

logger = logging.getLogger(__name__)


class CreditPortfolioScenario:
    """Generate a company's portfolio of tax credits.

    This scenario creates:
    - Credits originated over the last ``max_age_months``
    - Compensations against a share of those credits
    - Installment plans for consolidated debts
    - A monthly index covering every origination up to ``as_of``
    """

    def __init__(
        self,
        num_credits: int = 100,
        compensation_rate: float = 0.60,
        max_settlements_per_credit: int = 4,
        num_installment_plans: int = 10,
        max_age_months: int = 60,
        as_of: date | None = None,
        seed: int | None = None,
        *,
        config: GeneratorConfig | None = None,
        engine_config: EngineConfig | None = None,
    ) -> None:
        """Initialize credit portfolio scenario.

        Parameters
        ----------
        num_credits : int
            Number of credits to generate.
        compensation_rate : float
            Share of credits with at least one compensation (0.0 to 1.0).
        max_settlements_per_credit : int
            Upper bound of compensations per compensated credit.
        num_installment_plans : int
            Number of installment plans to generate.
        max_age_months : int
            Oldest credit origination, in months before ``as_of``.
        as_of : date | None
            Evaluation month of the portfolio. Defaults to today.
        seed : int | None
            Random seed for reproducibility.
        config : GeneratorConfig | None
            Optional generator configuration. If provided, its seed and
            locale override ``seed``.
        engine_config : EngineConfig | None
            Engine configuration handed to the resulting store.
        """
        if config is not None:
            self.seed = config.seed
            self.locale = config.locale
        else:
            self.seed = seed
            self.locale = "pt_BR"

        self.num_credits = num_credits
        self.compensation_rate = compensation_rate
        self.max_settlements_per_credit = max_settlements_per_credit
        self.num_installment_plans = num_installment_plans
        self.max_age_months = max_age_months
        self.as_of = as_of or date.today()

        if self.seed is not None:
            random.seed(self.seed)

        self.store = LedgerStore(
            engine_config=engine_config or EngineConfig(),
            horizon=month_start(self.as_of),
        )
        self._credit_gen = CreditGenerator(seed=self.seed, locale=self.locale)
        self._settlement_gen = SettlementGenerator(seed=self.seed, locale=self.locale)
        self._plan_gen = InstallmentPlanGenerator(seed=self.seed, locale=self.locale)
        self._rate_gen = RateTableGenerator(seed=self.seed, locale=self.locale)

    def generate(self) -> LedgerStore:
        """Generate all data for the portfolio.

        Returns
        -------
        LedgerStore
            Store containing all generated data.
        """
        logger.info(
            "Starting credit portfolio scenario: %d credits, %.0f%% compensated",
            self.num_credits,
            self.compensation_rate * 100,
        )

        for credit in self._credit_gen.generate_batch(self.num_credits, as_of=self.as_of):
            self.store.add_credit(credit)

        credits = list(self.store.credits.values())
        num_compensated = int(len(credits) * self.compensation_rate)
        for credit in random.sample(credits, num_compensated):
            count = random.randint(1, self.max_settlements_per_credit)
            for settlement in self._settlement_gen.generate_for_credit(
                credit, count, as_of=self.as_of
            ):
                self.store.add_settlement(settlement)

        for _ in range(self.num_installment_plans):
            self.store.add_installment_plan(self._plan_gen.generate(as_of=self.as_of))

        # Plans run past as_of, so the index is generated for their whole term
        start = add_months(month_start(self.as_of), -(max(self.max_age_months, 60) + 1))
        end = self.as_of
        if self.store.installment_plans:
            end = max(
                end,
                max(
                    add_months(plan.consolidation_date, plan.term_months)
                    for plan in self.store.installment_plans.values()
                ),
            )
        self.store.set_rate_table(self._rate_gen.generate(start, end))

        logger.info("Generated portfolio: %s", self.store.summary())
        return self.store
