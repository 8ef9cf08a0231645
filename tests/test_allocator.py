"""Tests for the Allocator ensemble."""
import logging
import pytest
from pathlib import Path

from src.allocation import Allocator, optimize
from src.allocation.inventory import build_inventory, check_mass_balance
from src.allocation.search import SearchStats
from src.catalog.catalog_db import CatalogDB
from src.catalog.exceptions import CatalogErrorCode, CatalogValidationError, UnknownStrategyError
from src.catalog.models import Ingredient, Recipe, Requirement
from src.catalog.settings import OptimizerSettings

SCENARIO_PATH = Path(__file__).parent.parent / "data" / "catalog.json"


def _scenario():
    db = CatalogDB(str(SCENARIO_PATH))
    return db.get_all_recipes(), db.get_all_ingredients()


def _make_recipe(name, serving_size, *requirements):
    return Recipe(
        name=name,
        serving_size=serving_size,
        requirements=tuple(Requirement(ing, qty) for ing, qty in requirements),
    )


class TestOptimizeScenario:
    """End-to-end behaviour on the bundled catalog."""

    def test_best_plan_serves_twelve(self):
        recipes, ingredients = _scenario()
        result = optimize(recipes, ingredients)

        assert result.total_people_served == 12
        # First strategy to reach the best total wins the tie
        assert result.strategy == "efficiency"
        assert result.count_for("Pizza") == 2

    def test_result_is_mass_balanced(self):
        recipes, ingredients = _scenario()
        result = optimize(recipes, ingredients)
        assert check_mass_balance(result, build_inventory(ingredients)) == []
        assert all(q >= 0 for q in result.remaining_ingredients.values())
        assert set(result.remaining_ingredients) == {i.name for i in ingredients}

    def test_caller_objects_unchanged(self):
        recipes, ingredients = _scenario()
        recipes_before = list(recipes)
        ingredients_before = list(ingredients)
        optimize(recipes, ingredients)
        assert recipes == recipes_before
        assert ingredients == ingredients_before

    def test_repeated_calls_agree(self):
        recipes, ingredients = _scenario()
        allocator = Allocator()
        first = allocator.optimize(recipes, ingredients)
        second = allocator.optimize(recipes, ingredients)
        assert first.total_people_served == second.total_people_served
        assert first.strategy == second.strategy
        assert [(e.recipe.name, e.count) for e in first.entries] == [
            (e.recipe.name, e.count) for e in second.entries
        ]
        assert first.remaining_ingredients == second.remaining_ingredients

    def test_more_stock_never_serves_fewer(self):
        recipes, ingredients = _scenario()
        baseline = optimize(recipes, ingredients).total_people_served
        richer = [Ingredient(i.name, i.available_quantity + 1, i.id) for i in ingredients]
        assert optimize(recipes, richer).total_people_served >= baseline

    def test_recipe_order_does_not_change_best_total(self):
        recipes, ingredients = _scenario()
        assert optimize(list(reversed(recipes)), ingredients).total_people_served == 12

    def test_search_stats_collected(self):
        recipes, ingredients = _scenario()
        stats = SearchStats(enabled=True)
        Allocator().optimize(recipes, ingredients, stats=stats)
        assert stats.total_calls > 0
        assert stats.improvements > 0


class TestOptimizeEdgeCases:
    def test_no_recipes(self):
        ingredients = [Ingredient("Meat", 6), Ingredient("Dough", 10)]
        result = optimize([], ingredients)
        assert result.entries == []
        assert result.total_people_served == 0
        assert result.remaining_ingredients == {"Meat": 6, "Dough": 10}
        assert result.strategy is None

    def test_no_ingredients(self):
        result = optimize([_make_recipe("Pie", 1, ("Meat", 2))], [])
        assert result.entries == []
        assert result.total_people_served == 0
        assert result.remaining_ingredients == {}

    def test_nothing_makeable(self):
        ingredients = [Ingredient("Meat", 1)]
        result = optimize([_make_recipe("Pie", 1, ("Meat", 2))], ingredients)
        assert result.total_people_served == 0
        assert result.remaining_ingredients == {"Meat": 1}
        assert result.strategy == "serving_size"

    def test_dangling_reference_warns_and_is_infeasible(self, caplog):
        recipes = [
            _make_recipe("Paella", 5, ("Saffron", 1), ("Rice", 1)),
            _make_recipe("Rice Bowl", 1, ("Rice", 1)),
        ]
        ingredients = [Ingredient("Rice", 2)]
        with caplog.at_level(logging.WARNING, logger="recipe_optimizer.allocator"):
            result = optimize(recipes, ingredients)
        assert "Saffron" in caplog.text
        assert result.count_for("Paella") == 0
        assert result.count_for("Rice Bowl") == 2
        assert result.remaining_ingredients == {"Rice": 0}

    def test_invalid_catalog_raises(self):
        with pytest.raises(CatalogValidationError) as exc_info:
            optimize([_make_recipe("Pie", 0, ("Meat", 2))], [Ingredient("Meat", 2)])
        assert exc_info.value.code == CatalogErrorCode.NON_POSITIVE_SERVING_SIZE


class TestAllocatorSettings:
    """Tests for strategy selection through OptimizerSettings."""

    def test_strategies_follow_settings_order(self):
        allocator = Allocator(OptimizerSettings(strategies=["backtracking", "serving_size"]))
        assert [name for name, _ in allocator.strategies()] == ["backtracking", "serving_size"]

    def test_single_strategy_subset(self):
        recipes, ingredients = _scenario()
        allocator = Allocator(OptimizerSettings(strategies=["serving_size"]))
        result = allocator.optimize(recipes, ingredients)
        assert result.strategy == "serving_size"
        assert result.total_people_served == 11

    def test_earlier_strategy_wins_tie(self):
        recipes, ingredients = _scenario()
        allocator = Allocator(OptimizerSettings(strategies=["combined_scoring", "efficiency"]))
        assert allocator.optimize(recipes, ingredients).strategy == "combined_scoring"

    def test_search_depth_from_settings(self):
        toast = _make_recipe("Toast", 1, ("Bread", 1))
        allocator = Allocator(OptimizerSettings(max_search_depth=2, strategies=["backtracking"]))
        result = allocator.optimize([toast], [Ingredient("Bread", 9)])
        assert result.total_people_served == 2


class TestRunStrategy:
    def test_run_each_strategy(self):
        recipes, ingredients = _scenario()
        allocator = Allocator()
        totals = {
            name: allocator.run_strategy(name, recipes, ingredients).total_people_served
            for name in ["serving_size", "efficiency", "combined_scoring", "backtracking"]
        }
        assert totals == {
            "serving_size": 11,
            "efficiency": 12,
            "combined_scoring": 12,
            "backtracking": 12,
        }

    def test_unknown_strategy(self):
        recipes, ingredients = _scenario()
        with pytest.raises(UnknownStrategyError):
            Allocator().run_strategy("random", recipes, ingredients)

    def test_run_strategy_validates(self):
        with pytest.raises(CatalogValidationError):
            Allocator().run_strategy("efficiency", [], [Ingredient("Meat", -1)])


class TestMonotonicity:
    @pytest.mark.parametrize(
        "ingredient_name",
        ["Meat", "Lettuce", "Tomato", "Cheese", "Dough", "Cucumber", "Olives"],
    )
    def test_raising_one_ingredient_never_serves_fewer(self, ingredient_name):
        recipes, ingredients = _scenario()
        baseline = optimize(recipes, ingredients).total_people_served
        for extra in range(1, 6):
            richer = [
                Ingredient(i.name, i.available_quantity + extra, i.id)
                if i.name == ingredient_name else i
                for i in ingredients
            ]
            assert optimize(recipes, richer).total_people_served >= baseline

    def test_duplicate_requirement_rejected_before_allocation(self):
        pie = Recipe("Pie", 1, (Requirement("Meat", 1), Requirement("Meat", 1)))
        with pytest.raises(CatalogValidationError) as exc_info:
            optimize([pie], [Ingredient("Meat", 1)])
        assert exc_info.value.code == CatalogErrorCode.DUPLICATE_REQUIREMENT
