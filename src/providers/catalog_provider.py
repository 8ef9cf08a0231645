"""Abstract base class for catalog data providers.

The allocator, API server and CLI depend ONLY on this interface. Concrete
implementations supply a recipe/ingredient snapshot from a local JSON file,
from memory, or from a remote catalog service.
"""

from abc import ABC, abstractmethod
from typing import List

from src.catalog.models import Catalog, Ingredient, Recipe


class CatalogProvider(ABC):
    """Abstraction for the current catalog of recipes and ingredient stock.

    Implementations must return a consistent snapshot: every call to
    :meth:`get_catalog` reflects one point in time.
    """

    @abstractmethod
    def get_recipes(self) -> List[Recipe]:
        """Return all recipes, in a stable order."""
        ...

    @abstractmethod
    def get_ingredients(self) -> List[Ingredient]:
        """Return all ingredients with their available quantities."""
        ...

    def get_catalog(self) -> Catalog:
        return Catalog(recipes=self.get_recipes(), ingredients=self.get_ingredients())
