"""Installment plan generator."""

import random
from datetime import date, timedelta
from decimal import Decimal

from credit_evolution.generators.base import BaseGenerator
from credit_evolution.models import InstallmentPlan, InstallmentProgram

# Term options in months by program
PROGRAM_TERMS = {
    InstallmentProgram.ORDINARY: [12, 24, 36, 48, 60],
    InstallmentProgram.SIMPLIFIED: [12, 24, 36, 60],
    InstallmentProgram.PERT: [120, 145, 175],
    InstallmentProgram.REFIS: [60, 120, 180],
    InstallmentProgram.TRANSACTION: [84, 120, 133],
}


class InstallmentPlanGenerator(BaseGenerator):
    """Generate consolidated debt installment plans."""

    def generate(self, as_of: date | None = None) -> InstallmentPlan:
        """Generate a plan consolidated in the last five years.

        Returns
        -------
        InstallmentPlan
            Generated plan; its components sum to the original amount.
        """
        as_of = as_of or date.today()
        program = random.choice(list(InstallmentProgram))

        principal = Decimal(random.randint(5_000, 500_000))
        fine = (principal * Decimal(str(random.choice([0.20, 0.30, 0.75])))).quantize(Decimal("0.01"))
        interest = (principal * Decimal(str(round(random.uniform(0.05, 0.60), 2)))).quantize(
            Decimal("0.01")
        )

        return InstallmentPlan(
            plan_id=self.fake.uuid4(),
            consolidation_date=self.fake.date_between(
                start_date=as_of - timedelta(days=365 * 5), end_date=as_of
            ),
            principal=principal,
            fine=fine,
            interest=interest,
            term_months=random.choice(PROGRAM_TERMS[program]),
            original_amount=principal + fine + interest,
            program=program,
            process_number=self.fake.numerify("#####.######/####-##"),
        )
