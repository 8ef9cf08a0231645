"""Allocation result types shared by every strategy.

Data structures only. No feasibility checks, scoring or search here.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.catalog.models import Recipe

# Working inventory: ingredient name -> remaining units. Each strategy and
# each search branch owns its own copy.
Inventory = Dict[str, int]


@dataclass
class AllocationEntry:
    """How many batches of one recipe a plan produces."""

    recipe: Recipe
    count: int  # >= 1

    @property
    def people_served(self) -> int:
        return self.recipe.serving_size * self.count


@dataclass
class AllocationResult:
    """One candidate production plan and the stock it leaves behind.

    entries holds one entry per distinct recipe produced, in order of first
    production. remaining_ingredients includes ingredients at zero.
    """

    entries: List[AllocationEntry] = field(default_factory=list)
    total_people_served: int = 0
    remaining_ingredients: Dict[str, int] = field(default_factory=dict)
    strategy: Optional[str] = None

    def count_for(self, recipe_name: str) -> int:
        """Batches of recipe_name produced (0 if never produced)."""
        for entry in self.entries:
            if entry.recipe.name == recipe_name:
                return entry.count
        return 0

    def record(self, recipe: Recipe, batches: int = 1) -> None:
        """Add batches of recipe to the plan and to the served total."""
        for entry in self.entries:
            if entry.recipe.name == recipe.name:
                entry.count += batches
                break
        else:
            self.entries.append(AllocationEntry(recipe=recipe, count=batches))
        self.total_people_served += recipe.serving_size * batches

    def unrecord(self, recipe: Recipe) -> None:
        """Remove one batch of recipe; drops the entry when its count reaches 0."""
        for index, entry in enumerate(self.entries):
            if entry.recipe.name == recipe.name:
                entry.count -= 1
                if entry.count == 0:
                    del self.entries[index]
                self.total_people_served -= recipe.serving_size
                return
        raise ValueError(f"Recipe '{recipe.name}' is not part of this allocation")
