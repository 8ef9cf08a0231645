"""Combined-scoring strategy: iterative best-pick over all recipes.

Each round scores every recipe against the current stock and produces one
batch of the best. Score = serving term + efficiency term + scarcity bonus +
diversity bonus. Infeasible recipes score -1 and are never picked.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from src.allocation.inventory import can_make, consume, efficiency, finalize
from src.allocation.models import AllocationResult, Inventory
from src.catalog.models import Recipe
from src.catalog.settings import STRATEGY_COMBINED_SCORING, ScoringWeights

INFEASIBLE_SCORE = -1.0


# --- Score components ---


def scarcity_bonus(recipe: Recipe, inventory: Inventory, weights: ScoringWeights) -> float:
    """Bonus per requirement whose stock is non-zero and within ratio x required.

    Rewards recipes that use up nearly exhausted ingredients.
    """
    scarce = 0
    for req in recipe.requirements:
        available = inventory.get(req.ingredient_name, 0)
        if 0 < available <= weights.scarcity_ratio * req.quantity:
            scarce += 1
    return weights.scarcity_bonus * scarce


def diversity_bonus(times_produced: int, weights: ScoringWeights) -> float:
    """Decays with each batch already produced; 0 from the fifth batch on by default."""
    return max(0.0, weights.diversity_base - weights.diversity_decay * times_produced)


def combined_score(
    recipe: Recipe,
    inventory: Inventory,
    times_produced: int,
    weights: Optional[ScoringWeights] = None,
) -> float:
    """Score for producing one more batch of recipe now; -1 if infeasible."""
    weights = weights or ScoringWeights()
    if not can_make(recipe, inventory):
        return INFEASIBLE_SCORE
    return (
        weights.serving_weight * recipe.serving_size
        + weights.efficiency_weight * efficiency(recipe)
        + scarcity_bonus(recipe, inventory, weights)
        + diversity_bonus(times_produced, weights)
    )


# --- Selection ---


def score_round(
    recipes: Sequence[Recipe],
    inventory: Inventory,
    produced: Dict[str, int],
    weights: ScoringWeights,
) -> List[Tuple[Recipe, float]]:
    return [
        (recipe, combined_score(recipe, inventory, produced.get(recipe.name, 0), weights))
        for recipe in recipes
    ]


def pick_best(scored: Sequence[Tuple[Recipe, float]]) -> Optional[Recipe]:
    """Highest score >= 0; earliest recipe in input order wins ties."""
    best: Optional[Recipe] = None
    best_score = INFEASIBLE_SCORE
    for recipe, score in scored:
        if score < 0:
            continue
        if best is None or score > best_score:
            best = recipe
            best_score = score
    return best


def combined_scoring(
    recipes: Sequence[Recipe],
    inventory: Inventory,
    weights: Optional[ScoringWeights] = None,
) -> AllocationResult:
    """Run the best-pick loop until no recipe is feasible.

    Terminates for the same reason as the greedy strategies: each pick
    strictly lowers total stock. Mutates inventory.
    """
    weights = weights or ScoringWeights()
    produced: Dict[str, int] = {}
    result = AllocationResult()
    while True:
        best = pick_best(score_round(recipes, inventory, produced, weights))
        if best is None:
            break
        consume(best, inventory)
        produced[best.name] = produced.get(best.name, 0) + 1
        result.record(best)
    return finalize(result, inventory, STRATEGY_COMBINED_SCORING)
