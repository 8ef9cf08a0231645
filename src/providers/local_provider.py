"""Local catalog providers: JSON-file backed and in-memory.

Both hold their data in memory once constructed, so lookups never touch
the disk after initialization.
"""

import logging
from typing import List, Sequence

from src.catalog.catalog_db import CatalogDB
from src.catalog.models import Ingredient, Recipe
from src.providers.catalog_provider import CatalogProvider

log = logging.getLogger("recipe_optimizer.providers")


class LocalCatalogProvider(CatalogProvider):
    """Provider backed by a local JSON catalog file.

    Delegates directly to :class:`CatalogDB`.
    """

    def __init__(self, catalog_db: CatalogDB) -> None:
        self._catalog_db = catalog_db
        log.info(
            "Loaded catalog %s: %d recipes, %d ingredients",
            catalog_db.json_path,
            len(catalog_db.get_all_recipes()),
            len(catalog_db.get_all_ingredients()),
        )

    @classmethod
    def from_path(cls, json_path: str) -> "LocalCatalogProvider":
        return cls(CatalogDB(json_path))

    def get_recipes(self) -> List[Recipe]:
        return self._catalog_db.get_all_recipes()

    def get_ingredients(self) -> List[Ingredient]:
        return self._catalog_db.get_all_ingredients()


class InMemoryCatalogProvider(CatalogProvider):
    """Provider over lists supplied by the caller (tests, request bodies)."""

    def __init__(self, recipes: Sequence[Recipe], ingredients: Sequence[Ingredient]) -> None:
        self._recipes = list(recipes)
        self._ingredients = list(ingredients)

    def get_recipes(self) -> List[Recipe]:
        return list(self._recipes)

    def get_ingredients(self) -> List[Ingredient]:
        return list(self._ingredients)
