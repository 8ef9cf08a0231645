"""Shared predicates and helpers over a working inventory.

can_make is the feasibility predicate, consume the consumption operator.
Every strategy goes through these two functions, so the non-negativity of
remaining stock rests on consume only ever following a successful can_make.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from src.allocation.models import AllocationResult, Inventory
from src.catalog.models import Ingredient, Recipe


def build_inventory(ingredients: Iterable[Ingredient]) -> Inventory:
    """Fresh working inventory from the catalog. The catalog is never mutated."""
    return {ing.name: ing.available_quantity for ing in ingredients}


def can_make(recipe: Recipe, inventory: Inventory) -> bool:
    """True iff every requirement is covered. Missing ingredients count as 0."""
    for req in recipe.requirements:
        if inventory.get(req.ingredient_name, 0) < req.quantity:
            return False
    return True


def consume(recipe: Recipe, inventory: Inventory) -> None:
    """Subtract one batch of recipe from inventory in place.

    Precondition: can_make(recipe, inventory) is True. Not checked here.
    """
    for req in recipe.requirements:
        inventory[req.ingredient_name] -= req.quantity


def efficiency(recipe: Recipe) -> float:
    """People served per ingredient unit; 0.0 for a recipe needing no units."""
    total = recipe.total_required_units()
    if total == 0:
        return 0.0
    return recipe.serving_size / total


def feasible_recipes(recipes: Sequence[Recipe], inventory: Inventory) -> List[Recipe]:
    return [r for r in recipes if can_make(r, inventory)]


def finalize(
    result: AllocationResult,
    inventory: Inventory,
    strategy: Optional[str],
) -> AllocationResult:
    """Attach the final remaining stock and strategy name to a result."""
    result.remaining_ingredients = dict(inventory)
    result.strategy = strategy
    return result


def consumed_totals(result: AllocationResult) -> Dict[str, int]:
    """Ingredient name -> units consumed by every entry of result."""
    totals: Dict[str, int] = {}
    for entry in result.entries:
        for req in entry.recipe.requirements:
            totals[req.ingredient_name] = (
                totals.get(req.ingredient_name, 0) + req.quantity * entry.count
            )
    return totals


def check_mass_balance(result: AllocationResult, initial: Inventory) -> List[str]:
    """Return mass-balance violations of result against the initial stock.

    An empty list means: for every ingredient, initial minus consumed equals
    remaining, remaining is never negative, and the served total matches the
    entries.
    """
    problems: List[str] = []
    consumed = consumed_totals(result)
    names = set(initial) | set(result.remaining_ingredients)
    for name in sorted(names):
        start = initial.get(name, 0)
        left = result.remaining_ingredients.get(name, 0)
        used = consumed.get(name, 0)
        if left < 0:
            problems.append(f"{name}: remaining quantity {left} is negative")
        if start - used != left:
            problems.append(f"{name}: {start} - {used} != {left}")
    for name, used in consumed.items():
        if name not in initial and used > 0:
            problems.append(f"{name}: consumed {used} but not in stock")
    served = sum(entry.people_served for entry in result.entries)
    if served != result.total_people_served:
        problems.append(
            f"total_people_served {result.total_people_served} != sum of entries {served}"
        )
    return problems
