"""Greedy strategies: fixed recipe order, each recipe produced until infeasible."""

from typing import List, Sequence

from src.allocation.inventory import can_make, consume, efficiency, finalize
from src.allocation.models import AllocationResult, Inventory
from src.catalog.models import Recipe
from src.catalog.settings import STRATEGY_EFFICIENCY, STRATEGY_SERVING_SIZE


def order_by_serving_size(recipes: Sequence[Recipe]) -> List[Recipe]:
    """Largest serving size first. sorted() is stable, so ties keep input order."""
    return sorted(recipes, key=lambda r: -r.serving_size)


def order_by_efficiency(recipes: Sequence[Recipe]) -> List[Recipe]:
    """Highest served-per-unit first; ties keep input order."""
    return sorted(recipes, key=lambda r: -efficiency(r))


def run_greedy(
    ordered_recipes: Sequence[Recipe],
    inventory: Inventory,
    strategy: str,
) -> AllocationResult:
    """Produce each recipe in order as many times as stock allows.

    Terminates: every requirement is >= 1, so each consume strictly lowers
    total stock. Mutates inventory (caller passes a private copy).
    """
    result = AllocationResult()
    for recipe in ordered_recipes:
        while can_make(recipe, inventory):
            consume(recipe, inventory)
            result.record(recipe)
    return finalize(result, inventory, strategy)


def greedy_by_serving_size(recipes: Sequence[Recipe], inventory: Inventory) -> AllocationResult:
    """Greedy by people served per batch, largest first."""
    return run_greedy(order_by_serving_size(recipes), inventory, STRATEGY_SERVING_SIZE)


def greedy_by_efficiency(recipes: Sequence[Recipe], inventory: Inventory) -> AllocationResult:
    """Greedy by people served per ingredient unit, largest first."""
    return run_greedy(order_by_efficiency(recipes), inventory, STRATEGY_EFFICIENCY)
