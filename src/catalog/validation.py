"""Boundary validation for catalog snapshots.

Runs once per optimization request, before any working inventory is built.
No allocation logic here: validation and reference checks only.
"""

from typing import List, Sequence

from src.catalog.exceptions import CatalogErrorCode, CatalogValidationError
from src.catalog.models import Ingredient, Recipe


def validate_ingredients(ingredients: Sequence[Ingredient]) -> None:
    """Validate ingredient stock levels and name uniqueness.

    Raises:
        CatalogValidationError: On a negative quantity or a duplicated name.
    """
    seen = set()
    for ingredient in ingredients:
        if ingredient.name in seen:
            raise CatalogValidationError(
                CatalogErrorCode.DUPLICATE_INGREDIENT,
                f"Ingredient '{ingredient.name}' appears more than once",
                {"ingredient": ingredient.name},
            )
        seen.add(ingredient.name)
        if ingredient.available_quantity < 0:
            raise CatalogValidationError(
                CatalogErrorCode.NEGATIVE_QUANTITY,
                f"Ingredient '{ingredient.name}' has negative quantity "
                f"{ingredient.available_quantity}",
                {"ingredient": ingredient.name, "value": ingredient.available_quantity},
            )


def validate_recipe(recipe: Recipe) -> None:
    """Validate a single recipe's serving size and requirements.

    A recipe with no requirements is rejected: it would be makeable an
    unbounded number of times. Each ingredient may appear once per recipe,
    since can_make checks requirements one at a time.

    Raises:
        CatalogValidationError: On the first violated constraint.
    """
    if recipe.serving_size <= 0:
        raise CatalogValidationError(
            CatalogErrorCode.NON_POSITIVE_SERVING_SIZE,
            f"Recipe '{recipe.name}' has serving size {recipe.serving_size}; must be >= 1",
            {"recipe": recipe.name, "value": recipe.serving_size},
        )
    if not recipe.requirements:
        raise CatalogValidationError(
            CatalogErrorCode.EMPTY_REQUIREMENTS,
            f"Recipe '{recipe.name}' has no ingredient requirements",
            {"recipe": recipe.name},
        )
    seen = set()
    for req in recipe.requirements:
        if req.ingredient_name in seen:
            raise CatalogValidationError(
                CatalogErrorCode.DUPLICATE_REQUIREMENT,
                f"Recipe '{recipe.name}' lists ingredient "
                f"'{req.ingredient_name}' more than once",
                {"recipe": recipe.name, "ingredient": req.ingredient_name},
            )
        seen.add(req.ingredient_name)
        if req.quantity <= 0:
            raise CatalogValidationError(
                CatalogErrorCode.NON_POSITIVE_REQUIREMENT,
                f"Recipe '{recipe.name}' requires {req.quantity} of "
                f"'{req.ingredient_name}'; must be >= 1",
                {
                    "recipe": recipe.name,
                    "ingredient": req.ingredient_name,
                    "value": req.quantity,
                },
            )


def validate_catalog(recipes: Sequence[Recipe], ingredients: Sequence[Ingredient]) -> None:
    """Validate a full catalog snapshot. Raises on the first violation."""
    validate_ingredients(ingredients)
    seen = set()
    for recipe in recipes:
        if recipe.name in seen:
            raise CatalogValidationError(
                CatalogErrorCode.DUPLICATE_RECIPE,
                f"Recipe '{recipe.name}' appears more than once",
                {"recipe": recipe.name},
            )
        seen.add(recipe.name)
        validate_recipe(recipe)


def find_dangling_references(
    recipes: Sequence[Recipe],
    ingredients: Sequence[Ingredient],
) -> List[str]:
    """Sorted ingredient names referenced by a recipe but absent from stock.

    Dangling references are not an error; the allocator treats them as zero
    available, which makes the referencing recipe infeasible.
    """
    known = {ing.name for ing in ingredients}
    missing = {
        req.ingredient_name
        for recipe in recipes
        for req in recipe.requirements
        if req.ingredient_name not in known
    }
    return sorted(missing)
