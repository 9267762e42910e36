"""Scenarios for generating realistic credit portfolios."""

from credit_evolution.scenarios.credit_portfolio import CreditPortfolioScenario

__all__ = ["CreditPortfolioScenario"]
