#!/usr/bin/env python3
"""Benchmark credit evolution and the balance cache.

Measures:
- Portfolio generation rate
- Cold balance refresh (every credit evolved)
- Warm balance lookups (served from the cache)
- On-demand snapshots at a different reference month
- Installment schedule computation

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --scale 10000
    python scripts/benchmark.py --scale 5000 --seed 7
"""

import argparse
import logging
import sys
import time
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from credit_evolution.engine import BalanceCache, EvolutionEngine
from credit_evolution.normalize import add_months, month_label, month_start
from credit_evolution.scenarios import CreditPortfolioScenario
from credit_evolution.store import LedgerStore

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def benchmark_generation(num_credits: int, seed: int, as_of: date) -> LedgerStore:
    """Benchmark portfolio generation speed.

    Parameters
    ----------
    num_credits : int
        Number of credits to generate.
    seed : int
        Random seed.
    as_of : date
        Evaluation month of the portfolio.

    Returns
    -------
    LedgerStore
        Store with generated data.
    """
    t0 = time.perf_counter()
    store = CreditPortfolioScenario(
        num_credits=num_credits,
        num_installment_plans=max(1, num_credits // 20),
        as_of=as_of,
        seed=seed,
    ).generate()
    elapsed = time.perf_counter() - t0
    print(f"  Credits:       {len(store.credits):>8,} in {elapsed:.2f}s  ({len(store.credits) / elapsed:,.0f}/sec)")
    print(f"  Settlements:   {len(store.settlements):>8,}")
    print(f"  Plans:         {len(store.installment_plans):>8,}")
    return store


def benchmark_cache(store: LedgerStore, as_of: date) -> None:
    """Benchmark cold and warm balance refreshes."""
    cache = BalanceCache(EvolutionEngine(store.engine_config), horizon=as_of)
    credits = list(store.credits.values())
    reference = month_start(as_of)

    t0 = time.perf_counter()
    cache.refresh(credits, store.settlements, store.rate_table, reference, version=store.version)
    t_cold = time.perf_counter() - t0
    print(f"  Cold refresh:  {len(credits):>8,} credits in {t_cold:.3f}s  ({len(credits) / t_cold:,.0f}/sec)")

    rounds = 100
    t0 = time.perf_counter()
    for _ in range(rounds):
        cache.refresh(credits, store.settlements, store.rate_table, reference, version=store.version)
        for credit in credits:
            cache.get_balance(credit)
    t_warm = time.perf_counter() - t0
    print(f"  Warm lookups:  {rounds * len(credits):>8,} in {t_warm:.3f}s  (rebuilds: {cache.rebuilds})")

    other = add_months(reference, -12)
    t0 = time.perf_counter()
    snapshot = cache.snapshot(other)
    t_snap = time.perf_counter() - t0
    print(f"  Snapshot {month_label(other)}: {len(snapshot):>6,} credits in {t_snap:.3f}s")
    print(f"\n  Total at {month_label(reference)}: {cache.total:,.2f}")


def benchmark_installments(store: LedgerStore) -> None:
    """Benchmark installment schedules."""
    t0 = time.perf_counter()
    rows = 0
    for plan_id in store.installment_plans:
        rows += len(store.installment_schedule(plan_id))
    elapsed = time.perf_counter() - t0
    print(f"  Schedules:     {len(store.installment_plans):>8,} plans, {rows:,} rows in {elapsed:.3f}s")


def main() -> None:
    """Run benchmarks."""
    parser = argparse.ArgumentParser(description="Benchmark credit-evolution performance")
    parser.add_argument("--scale", type=int, default=1000, help="Number of credits (default: 1000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    as_of = month_start(date.today())

    print("=" * 60)
    print(f"  credit-evolution Benchmark  |  scale={args.scale:,}  seed={args.seed}")
    print("=" * 60)

    print("\n[1] Portfolio Generation")
    store = benchmark_generation(args.scale, args.seed, as_of)

    print("\n[2] Balance Cache")
    benchmark_cache(store, as_of)

    print("\n[3] Installment Plans")
    benchmark_installments(store)

    print("\n" + "=" * 60)
    print("  Benchmark complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
