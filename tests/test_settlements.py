"""Tests for settlement aggregation."""

from datetime import date, datetime
from decimal import Decimal

from credit_evolution.engine import aggregate_by_credit, group_by_credit, monthly_settlements
from credit_evolution.models import PreOriginationPolicy, SettlementEvent


def _event(settlement_id: str, credit_id: str, when, amount) -> SettlementEvent:
    return SettlementEvent(settlement_id, credit_id, when, amount)


class TestMonthlySettlements:
    """Tests for monthly_settlements."""

    def test_sums_same_month(self) -> None:
        events = [
            _event("s1", "c1", "2025-02-01", Decimal("100")),
            _event("s2", "c1", date(2025, 2, 28), "R$ 1.250,50"),
            _event("s3", "c1", datetime(2025, 3, 1, 12, 0), 10.1),
        ]

        result = monthly_settlements(events)

        assert result == {
            date(2025, 2, 1): Decimal("1350.50"),
            date(2025, 3, 1): Decimal("10.1"),
        }

    def test_invalid_date_skipped(self, caplog) -> None:
        events = [
            _event("s1", "c1", "garbage", Decimal("100")),
            _event("s2", "c1", None, Decimal("100")),
            _event("s3", "c1", "2025-02-10", Decimal("5")),
        ]

        result = monthly_settlements(events)

        assert result == {date(2025, 2, 1): Decimal("5")}
        assert "s1" in caplog.text

    def test_malformed_amount_counts_as_zero(self) -> None:
        events = [
            _event("s1", "c1", "2025-02-10", "abc"),
            _event("s2", "c1", "2025-02-11", Decimal("7")),
        ]

        assert monthly_settlements(events) == {date(2025, 2, 1): Decimal("7")}

    def test_thousands_without_cents(self) -> None:
        events = [
            _event("s1", "c1", "2025-03-05", "R$ 1.250.000"),
            _event("s2", "c1", "2025-03-20", "R$ 1.500"),
        ]

        assert monthly_settlements(events) == {date(2025, 3, 1): Decimal("1251500")}

    def test_result_in_month_order(self) -> None:
        events = [
            _event("s1", "c1", "2025-05-10", 1),
            _event("s2", "c1", "2025-01-10", 1),
            _event("s3", "c1", "2025-03-10", 1),
        ]

        assert list(monthly_settlements(events)) == [
            date(2025, 1, 1),
            date(2025, 3, 1),
            date(2025, 5, 1),
        ]

    def test_pre_origination_skip(self) -> None:
        events = [
            _event("s1", "c1", "2024-12-31", 100),
            _event("s2", "c1", "2025-01-02", 50),
        ]

        result = monthly_settlements(events, origination_month=date(2025, 1, 1))

        assert result == {date(2025, 1, 1): Decimal("50")}

    def test_pre_origination_clamp(self) -> None:
        events = [
            _event("s1", "c1", "2024-12-31", 100),
            _event("s2", "c1", "2025-01-02", 50),
        ]

        result = monthly_settlements(
            events,
            origination_month=date(2025, 1, 1),
            policy=PreOriginationPolicy.CLAMP,
        )

        assert result == {date(2025, 1, 1): Decimal("150")}

    def test_empty(self) -> None:
        assert monthly_settlements([]) == {}


class TestGrouping:
    """Tests for per-credit grouping."""

    def test_group_by_credit_keeps_order(self) -> None:
        events = [
            _event("s1", "c1", "2025-01-10", 1),
            _event("s2", "c2", "2025-01-10", 1),
            _event("s3", "c1", "2025-02-10", 1),
        ]

        grouped = group_by_credit(events)

        assert [e.settlement_id for e in grouped["c1"]] == ["s1", "s3"]
        assert [e.settlement_id for e in grouped["c2"]] == ["s2"]

    def test_aggregate_by_credit(self) -> None:
        events = [
            _event("s1", "c1", "2025-01-10", 1),
            _event("s2", "c2", "2025-01-10", 2),
            _event("s3", "c1", "2025-01-20", 3),
        ]

        assert aggregate_by_credit(events) == {
            "c1": {date(2025, 1, 1): Decimal("4")},
            "c2": {date(2025, 1, 1): Decimal("2")},
        }

    def test_aggregate_by_credit_applies_origination(self) -> None:
        events = [
            _event("s1", "c1", "2024-12-10", 5),
            _event("s2", "c1", "2025-01-10", 1),
            _event("s3", "c2", "2024-12-10", 2),
        ]

        result = aggregate_by_credit(events, {"c1": date(2025, 1, 1)})

        assert result == {
            "c1": {date(2025, 1, 1): Decimal("1")},
            "c2": {date(2024, 12, 1): Decimal("2")},
        }

    def test_aggregate_by_credit_clamp(self) -> None:
        events = [
            _event("s1", "c1", "2024-12-10", 5),
            _event("s2", "c1", "2025-01-10", 1),
        ]

        result = aggregate_by_credit(
            events, {"c1": date(2025, 1, 1)}, PreOriginationPolicy.CLAMP
        )

        assert result == {"c1": {date(2025, 1, 1): Decimal("6")}}
