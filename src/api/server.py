"""FastAPI server for the recipe allocation engine."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import uvicorn
import yaml
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from src.allocation.allocator import Allocator
from src.catalog.exceptions import CatalogValidationError
from src.catalog.models import Ingredient, Recipe, Requirement
from src.catalog.settings import OptimizerSettings, OptimizerSettingsLoader
from src.logging_config import configure_logging
from src.output.formatters import format_result_json
from src.providers.local_provider import LocalCatalogProvider


catalog_path = os.getenv("RECIPE_CATALOG_PATH", "data/catalog.json")
config_path = os.getenv("RECIPE_OPTIMIZER_CONFIG", "config/optimizer.yaml")

app = FastAPI(title="Recipe Optimizer API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Local development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RequirementIn(BaseModel):
    ingredient: str
    quantity: int


class RecipeIn(BaseModel):
    name: str
    serving_size: int
    requirements: List[RequirementIn] = Field(default_factory=list)
    id: Optional[int] = None


class IngredientIn(BaseModel):
    name: str
    available_quantity: int
    id: Optional[int] = None


class OptimizeRequest(BaseModel):
    recipes: List[RecipeIn] = Field(default_factory=list)
    ingredients: List[IngredientIn] = Field(default_factory=list)


def _load_settings() -> OptimizerSettings:
    """Settings from config_path when present, defaults otherwise."""
    if Path(config_path).exists():
        return OptimizerSettingsLoader(config_path).load()
    return OptimizerSettings()


def _to_recipe(recipe_in: RecipeIn) -> Recipe:
    return Recipe(
        name=recipe_in.name,
        serving_size=recipe_in.serving_size,
        requirements=tuple(
            Requirement(ingredient_name=r.ingredient, quantity=r.quantity)
            for r in recipe_in.requirements
        ),
        id=recipe_in.id,
    )


def _to_ingredient(ingredient_in: IngredientIn) -> Ingredient:
    return Ingredient(
        name=ingredient_in.name,
        available_quantity=ingredient_in.available_quantity,
        id=ingredient_in.id,
    )


def _optimize(recipes: List[Recipe], ingredients: List[Ingredient]) -> Dict[str, Any]:
    try:
        settings = _load_settings()
    except (ValueError, yaml.YAMLError) as exc:
        raise HTTPException(
            status_code=500,
            detail={
                "error_code": "INVALID_SETTINGS",
                "message": f"Invalid optimizer settings in {config_path}: {exc}",
                "context": {"path": str(config_path)},
            },
        ) from exc
    try:
        result = Allocator(settings).optimize(recipes, ingredients)
    except CatalogValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc
    return format_result_json(result)


@app.get("/api/optimize")
def optimize_catalog() -> Dict[str, Any]:
    """Optimize the configured catalog file."""
    try:
        provider = LocalCatalogProvider.from_path(catalog_path)
        catalog = provider.get_catalog()
    except CatalogValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return _optimize(catalog.recipes, catalog.ingredients)


@app.post("/api/optimize")
def optimize_request(request: OptimizeRequest) -> Dict[str, Any]:
    """Optimize a catalog supplied in the request body."""
    recipes = [_to_recipe(r) for r in request.recipes]
    ingredients = [_to_ingredient(i) for i in request.ingredients]
    return _optimize(recipes, ingredients)


@app.get("/api/recipes")
def list_recipes() -> List[Dict[str, Any]]:
    try:
        provider = LocalCatalogProvider.from_path(catalog_path)
        return [
            {
                "id": r.id,
                "name": r.name,
                "serving_size": r.serving_size,
                "requirements": [
                    {"ingredient": req.ingredient_name, "quantity": req.quantity}
                    for req in r.requirements
                ],
            }
            for r in provider.get_recipes()
        ]
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.get("/api/ingredients")
def list_ingredients() -> List[Dict[str, Any]]:
    try:
        provider = LocalCatalogProvider.from_path(catalog_path)
        return [
            {"id": i.id, "name": i.name, "available_quantity": i.available_quantity}
            for i in provider.get_ingredients()
        ]
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


if __name__ == "__main__":
    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)
