"""Tests for the balance cache layer."""

from datetime import date
from decimal import Decimal

import pytest

from credit_evolution.engine import BalanceCache, EvolutionEngine, balance_at
from credit_evolution.models import Balance, Credit, SettlementEvent
from credit_evolution.rates import RateEntry, RateTable
from credit_evolution.serialization import money


@pytest.fixture
def credits() -> list[Credit]:
    """Two valid credits and one the engine rejects."""
    return [
        Credit("cred-a", Decimal("1000"), date(2025, 1, 15)),
        Credit("cred-b", Decimal("2000"), date(2025, 3, 2)),
        Credit("cred-c", None, date(2025, 1, 1)),
    ]


@pytest.fixture
def settlements() -> list[SettlementEvent]:
    """A February compensation of 500 against cred-a."""
    return [SettlementEvent("s-1", "cred-a", date(2025, 2, 10), Decimal("500"))]


@pytest.fixture
def cache() -> BalanceCache:
    """Cache evolving up to May 2025."""
    return BalanceCache(horizon=date(2025, 5, 1))


class TestBalanceAt:
    """Tests for picking a balance out of a ledger."""

    def test_empty_ledger(self) -> None:
        assert balance_at([], date(2025, 1, 1)) == Balance(Decimal("0"))


class TestBalanceCache:
    """Tests for BalanceCache."""

    def test_reference_month_found(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03")

        balance = cache.get_balance(credits[0])
        assert money(balance.value) == Decimal("514.29")
        assert balance.is_future is False

    def test_reference_before_origination(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-02")

        assert cache.get_balance(credits[1]) == Balance(Decimal("0"), is_future=True)

    def test_reference_after_horizon(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2026-01")
        rows = EvolutionEngine().evolve_events(
            credits[0], sample_rates, settlements, date(2025, 5, 1)
        )

        balance = cache.get_balance(credits[0])
        assert balance.value == rows[-1].closing_balance
        assert balance.is_future is False

    def test_failing_credit_does_not_abort_batch(
        self, cache, credits, settlements, sample_rates
    ) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03")

        broken = cache.balances["cred-c"]
        assert broken.value == Decimal("0")
        assert broken.error is not None
        assert cache.balances["cred-b"].value == Decimal("2000")

    def test_total(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03")

        expected = sum((b.value for b in cache.balances.values()), Decimal("0"))
        assert cache.total == expected
        assert money(cache.total) == Decimal("2514.29")

    def test_unchanged_inputs_do_not_rebuild(
        self, cache, credits, settlements, sample_rates
    ) -> None:
        assert cache.refresh(credits, settlements, sample_rates, "2025-03") is True
        assert cache.refresh(list(credits), list(settlements), sample_rates, "03/2025") is False
        assert cache.rebuilds == 1

    def test_new_settlement_rebuilds(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03")
        before = cache.get_balance(credits[0]).value

        extra = SettlementEvent("s-2", "cred-a", "2025-03-05", Decimal("100"))
        assert cache.refresh(credits, settlements + [extra], sample_rates, "2025-03") is True
        assert cache.get_balance(credits[0]).value == before - Decimal("100")

    def test_rate_table_change_rebuilds(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03")
        bumped = RateTable(sample_rates.entries + (RateEntry(date(2025, 4, 1), Decimal("1")),))

        assert cache.refresh(credits, settlements, bumped, "2025-03") is True
        assert cache.rebuilds == 2

    def test_reference_month_change_rebuilds(
        self, cache, credits, settlements, sample_rates
    ) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03")

        assert cache.refresh(credits, settlements, sample_rates, "2025-04") is True
        assert cache.reference_month == date(2025, 4, 1)

    def test_version_stamp_short_circuits(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03", version=7)
        extra = SettlementEvent("s-2", "cred-a", "2025-03-05", Decimal("100"))

        assert cache.refresh(credits, settlements + [extra], sample_rates, "2025-03", version=7) is False
        assert cache.refresh(credits, settlements + [extra], sample_rates, "2025-03", version=8) is True

    def test_other_month_bypasses_cache(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03")

        february = cache.get_balance(credits[0], "2025-02")
        assert february.value == Decimal("510.00")
        assert cache.reference_month == date(2025, 3, 1)
        assert cache.rebuilds == 1

    def test_snapshot(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, "2025-03")

        snapshot = cache.snapshot("2025-01")
        assert snapshot["cred-a"].value == Decimal("1000")
        assert snapshot["cred-b"].is_future is True
        assert cache.balances["cred-b"].is_future is False

    def test_missing_reference_month(self, cache, credits, settlements, sample_rates) -> None:
        cache.refresh(credits, settlements, sample_rates, None)

        assert all(b == Balance(Decimal("0")) for b in cache.balances.values())
        assert cache.total == Decimal("0")

    def test_invalid_origination(self, cache, sample_rates) -> None:
        credit = Credit("cred-bad", Decimal("10"), "31/02/2025")
        cache.refresh([credit], [], sample_rates, "2025-03")

        assert cache.get_balance(credit) == Balance(Decimal("0"))
