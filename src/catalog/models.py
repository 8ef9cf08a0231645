"""Data models for the recipe optimizer catalog."""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Ingredient:
    """Represents an ingredient in stock."""

    name: str  # Unique within a catalog (e.g., "Meat", "Dough")
    available_quantity: int  # Units on hand, never negative
    id: Optional[int] = None  # Identifier from the source catalog, if any


@dataclass(frozen=True)
class Requirement:
    """How many units of one ingredient a single batch of a recipe uses."""

    ingredient_name: str
    quantity: int  # >= 1


@dataclass(frozen=True)
class Recipe:
    """Represents a recipe: fixed ingredient inputs, fixed number of people served."""

    name: str  # Unique identifier within a catalog
    serving_size: int  # People served per batch
    requirements: Tuple[Requirement, ...] = field(default_factory=tuple)
    id: Optional[int] = None

    def total_required_units(self) -> int:
        """Sum of required quantities across all requirements."""
        return sum(req.quantity for req in self.requirements)


@dataclass
class Catalog:
    """A consistent snapshot of recipes and ingredient stock."""

    recipes: List[Recipe]
    ingredients: List[Ingredient]
