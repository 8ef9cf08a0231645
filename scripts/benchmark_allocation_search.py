#!/usr/bin/env python3
"""Benchmark the allocator: per-strategy run time and totals.

Run from repo root:
  python scripts/benchmark_allocation_search.py

Optional: catalog path and search depth via env.
"""
from __future__ import annotations

import os
import sys
import time

# Allow importing from src when run from repo root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.allocation.allocator import Allocator
from src.allocation.search import SearchStats
from src.catalog.catalog_db import CatalogDB
from src.catalog.settings import DEFAULT_STRATEGY_ORDER, OptimizerSettings


def main() -> None:
    catalog_path = os.environ.get("ALLOCATION_CATALOG", "data/catalog.json")
    max_depth = int(os.environ.get("ALLOCATION_MAX_DEPTH", "10"))

    db = CatalogDB(catalog_path)
    recipes = db.get_all_recipes()
    ingredients = db.get_all_ingredients()
    allocator = Allocator(OptimizerSettings(max_search_depth=max_depth))

    print("--- Allocation benchmark ---")
    print(f"Catalog: {catalog_path} ({len(recipes)} recipes, {len(ingredients)} ingredients)")
    print(f"Max search depth: {max_depth}")
    for name in DEFAULT_STRATEGY_ORDER:
        stats = SearchStats(enabled=True)
        t0 = time.perf_counter()
        result = allocator.run_strategy(name, recipes, ingredients, stats=stats)
        t1 = time.perf_counter()
        print(f"{name:>17}: serves {result.total_people_served:>3}  wall {t1 - t0:.3f}s")
        if stats.total_calls:
            print(f"{'':>17}  calls={stats.total_calls} max_depth={stats.max_depth} "
                  f"time/call={stats.time_per_call():.6f}s")

    t0 = time.perf_counter()
    best = allocator.optimize(recipes, ingredients)
    t1 = time.perf_counter()
    print(f"Best: {best.strategy} serving {best.total_people_served} ({t1 - t0:.3f}s)")
    for entry in best.entries:
        print(f"  {entry.recipe.name} x{entry.count}")
    print("----------------------------")


if __name__ == "__main__":
    main()
