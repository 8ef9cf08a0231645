"""Allocator: runs every enabled strategy and keeps the best plan."""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from src.allocation.combined_scoring import combined_scoring
from src.allocation.greedy import greedy_by_efficiency, greedy_by_serving_size
from src.allocation.inventory import build_inventory, finalize
from src.allocation.models import AllocationResult, Inventory
from src.allocation.search import SearchStats, backtracking_search
from src.catalog.exceptions import UnknownStrategyError
from src.catalog.models import Ingredient, Recipe
from src.catalog.settings import (
    STRATEGY_BACKTRACKING,
    STRATEGY_COMBINED_SCORING,
    STRATEGY_EFFICIENCY,
    STRATEGY_SERVING_SIZE,
    OptimizerSettings,
)
from src.catalog.validation import find_dangling_references, validate_catalog

log = logging.getLogger("recipe_optimizer.allocator")

StrategyFn = Callable[[Sequence[Recipe], Inventory], AllocationResult]


class Allocator:
    """Decides how many batches of each recipe to produce from shared stock.

    Stateless between calls: every optimize() call works on private copies
    of the ingredient stock and never mutates the caller's objects.
    """

    def __init__(self, settings: Optional[OptimizerSettings] = None):
        """Initialize allocator.

        Args:
            settings: Optional OptimizerSettings (built-in defaults if omitted)
        """
        self.settings = settings or OptimizerSettings()

    def _strategy_table(self, stats: Optional[SearchStats] = None) -> Dict[str, StrategyFn]:
        scoring = self.settings.scoring
        max_depth = self.settings.max_search_depth
        return {
            STRATEGY_SERVING_SIZE: greedy_by_serving_size,
            STRATEGY_EFFICIENCY: greedy_by_efficiency,
            STRATEGY_COMBINED_SCORING: lambda recipes, inventory: combined_scoring(
                recipes, inventory, scoring
            ),
            STRATEGY_BACKTRACKING: lambda recipes, inventory: backtracking_search(
                recipes, inventory, max_depth, stats
            ),
        }

    def strategies(self, stats: Optional[SearchStats] = None) -> List[Tuple[str, StrategyFn]]:
        """Enabled strategies in evaluation order."""
        table = self._strategy_table(stats)
        return [(name, table[name]) for name in self.settings.strategies]

    def run_strategy(
        self,
        name: str,
        recipes: Sequence[Recipe],
        ingredients: Sequence[Ingredient],
        stats: Optional[SearchStats] = None,
    ) -> AllocationResult:
        """Run a single strategy in isolation against a fresh inventory.

        Raises:
            UnknownStrategyError: If name is not a registered strategy.
        """
        lookup = self._strategy_table(stats)
        if name not in lookup:
            raise UnknownStrategyError(name)
        validate_catalog(recipes, ingredients)
        return lookup[name](list(recipes), build_inventory(ingredients))

    def optimize(
        self,
        recipes: Sequence[Recipe],
        ingredients: Sequence[Ingredient],
        stats: Optional[SearchStats] = None,
    ) -> AllocationResult:
        """Return the plan serving the most people across all enabled strategies.

        Each strategy gets its own copy of the initial stock. The first
        strategy in evaluation order wins ties. An empty recipe or ingredient
        list yields zero served and the input stock unchanged.

        Raises:
            CatalogValidationError: If the catalog violates an input constraint.
        """
        validate_catalog(recipes, ingredients)
        recipes = list(recipes)
        initial = build_inventory(ingredients)

        dangling = find_dangling_references(recipes, ingredients)
        if dangling:
            log.warning("Recipes reference unknown ingredients (treated as 0): %s", dangling)

        if not recipes or not initial:
            log.info("Nothing to allocate (%d recipes, %d ingredients)", len(recipes), len(initial))
            return finalize(AllocationResult(), dict(initial), None)

        best: Optional[AllocationResult] = None
        for name, strategy in self.strategies(stats):
            result = strategy(recipes, dict(initial))
            log.debug("Strategy %s serves %d", name, result.total_people_served)
            if best is None or result.total_people_served > best.total_people_served:
                best = result

        log.info(
            "Best allocation: %s serving %d people",
            best.strategy,
            best.total_people_served,
        )
        return best


def optimize(
    recipes: Sequence[Recipe],
    ingredients: Sequence[Ingredient],
    settings: Optional[OptimizerSettings] = None,
) -> AllocationResult:
    """Functional form of Allocator(settings).optimize(recipes, ingredients)."""
    return Allocator(settings).optimize(recipes, ingredients)
