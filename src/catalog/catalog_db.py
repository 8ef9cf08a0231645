"""Catalog database for loading recipes and ingredient stock from JSON."""
import json
from pathlib import Path
from typing import Any, Dict, List

from src.catalog.exceptions import CatalogErrorCode, CatalogValidationError
from src.catalog.models import Ingredient, Recipe, Requirement


class CatalogDB:
    """Database for a recipe/ingredient catalog loaded from JSON.

    Expected shape::

        {
            "ingredients": [{"name": "Meat", "available_quantity": 6}, ...],
            "recipes": [
                {
                    "name": "Pie",
                    "serving_size": 1,
                    "requirements": [{"ingredient": "Meat", "quantity": 2}, ...]
                },
                ...
            ]
        }
    """

    def __init__(self, json_path: str):
        """Initialize catalog database from JSON file.

        Args:
            json_path: Path to JSON file containing the catalog
        """
        self.json_path = Path(json_path)
        self._recipes: List[Recipe] = []
        self._ingredients: List[Ingredient] = []
        self._load_catalog()

    def _load_catalog(self):
        """Load ingredients and recipes from JSON file."""
        with open(self.json_path, "r") as f:
            raw = f.read()

        try:
            data = json.loads(raw)
            self._ingredients = [
                parse_ingredient(ing_data) for ing_data in data.get("ingredients", [])
            ]
            self._recipes = [
                parse_recipe(recipe_data) for recipe_data in data.get("recipes", [])
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise CatalogValidationError(
                CatalogErrorCode.MALFORMED_CATALOG,
                f"Malformed catalog file {self.json_path}: {e!r}",
                {"path": str(self.json_path)},
            ) from e

    def get_all_recipes(self) -> List[Recipe]:
        """Get all recipes in the catalog, in file order."""
        return list(self._recipes)

    def get_all_ingredients(self) -> List[Ingredient]:
        """Get all ingredients in the catalog, in file order."""
        return list(self._ingredients)


def parse_quantity(value: Any, field_name: str) -> int:
    """Parse a whole-number count, rejecting fractions, booleans and strings.

    Raises:
        ValueError: If value is not an integral number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_name} must be a whole number; got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{field_name} must be a whole number; got {value!r}")
    return int(value)


def parse_ingredient(ing_data: Dict[str, Any]) -> Ingredient:
    """Parse a single ingredient from dictionary data."""
    return Ingredient(
        name=str(ing_data["name"]),
        available_quantity=parse_quantity(ing_data["available_quantity"], "available_quantity"),
        id=ing_data.get("id"),
    )


def parse_recipe(recipe_data: Dict[str, Any]) -> Recipe:
    """Parse a single recipe (with its requirements) from dictionary data."""
    requirements = tuple(
        Requirement(
            ingredient_name=str(req_data["ingredient"]),
            quantity=parse_quantity(req_data["quantity"], "quantity"),
        )
        for req_data in recipe_data.get("requirements", [])
    )
    return Recipe(
        name=str(recipe_data["name"]),
        serving_size=parse_quantity(recipe_data["serving_size"], "serving_size"),
        requirements=requirements,
        id=recipe_data.get("id"),
    )
