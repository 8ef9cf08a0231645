"""Bounded backtracking search over recipe production sequences.

Explores every sequence of feasible productions up to a fixed depth and keeps
the plan serving the most people. Exponential in branching factor x depth;
the depth bound is the only limit on running time, so this is meant for
small catalogs.

Branches never share stock: each child works on its own copy of the parent
inventory (copy-on-branch), so undoing a branch is dropping its copy. The
partial allocation is shared and undone explicitly after each child returns.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

from src.allocation.inventory import consume, feasible_recipes, finalize
from src.allocation.models import AllocationEntry, AllocationResult, Inventory
from src.catalog.models import Recipe
from src.catalog.settings import MAX_SEARCH_DEPTH, STRATEGY_BACKTRACKING


# --- Optional instrumentation (observational only) ---


@dataclass
class SearchStats:
    """Optional stats collection. All updates guarded by stats.enabled. Does not affect search behavior."""

    enabled: bool = False
    total_calls: int = 0
    max_depth: int = 0
    improvements: int = 0
    _start_time: Optional[float] = field(default=None, repr=False)
    _end_time: Optional[float] = field(default=None, repr=False)

    def total_runtime(self) -> float:
        if self._start_time is not None and self._end_time is not None:
            return self._end_time - self._start_time
        return 0.0

    def time_per_call(self) -> float:
        if self.total_calls <= 0:
            return 0.0
        return self.total_runtime() / self.total_calls


# --- Search state ---


@dataclass
class _SearchState:
    recipes: Sequence[Recipe]
    max_depth: int
    current: AllocationResult
    best: AllocationResult
    best_inventory: Inventory
    stats: Optional[SearchStats] = None


def _snapshot(result: AllocationResult) -> AllocationResult:
    """Independent copy of a partial allocation, immune to later undo."""
    return AllocationResult(
        entries=[AllocationEntry(recipe=e.recipe, count=e.count) for e in result.entries],
        total_people_served=result.total_people_served,
    )


def _search(state: _SearchState, inventory: Inventory, depth: int) -> None:
    stats = state.stats
    if stats is not None and stats.enabled:
        stats.total_calls += 1
        stats.max_depth = max(stats.max_depth, depth)

    if state.current.total_people_served > state.best.total_people_served:
        state.best = _snapshot(state.current)
        state.best_inventory = dict(inventory)
        if stats is not None and stats.enabled:
            stats.improvements += 1

    if depth >= state.max_depth:
        return

    for recipe in feasible_recipes(state.recipes, inventory):
        branch = dict(inventory)
        consume(recipe, branch)
        state.current.record(recipe)
        _search(state, branch, depth + 1)
        state.current.unrecord(recipe)


def backtracking_search(
    recipes: Sequence[Recipe],
    inventory: Inventory,
    max_depth: int = MAX_SEARCH_DEPTH,
    stats: Optional[SearchStats] = None,
) -> AllocationResult:
    """Best plan reachable within max_depth productions.

    Recipes are tried in input order at every level, so among equally good
    plans the one found first wins. inventory is not mutated.
    If stats is provided and stats.enabled, observational metrics are recorded.
    """
    if stats is not None and stats.enabled:
        stats._start_time = time.perf_counter()

    state = _SearchState(
        recipes=list(recipes),
        max_depth=max_depth,
        current=AllocationResult(),
        best=AllocationResult(),
        best_inventory=dict(inventory),
        stats=stats,
    )
    _search(state, dict(inventory), 0)

    if stats is not None and stats.enabled:
        stats._end_time = time.perf_counter()
    return finalize(state.best, state.best_inventory, STRATEGY_BACKTRACKING)
