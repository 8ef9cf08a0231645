"""Tests for the combined-scoring strategy."""
import pytest
from pathlib import Path

from src.allocation.combined_scoring import (
    INFEASIBLE_SCORE,
    combined_score,
    combined_scoring,
    diversity_bonus,
    pick_best,
    scarcity_bonus,
)
from src.allocation.inventory import build_inventory, check_mass_balance
from src.catalog.catalog_db import CatalogDB
from src.catalog.models import Recipe, Requirement
from src.catalog.settings import ScoringWeights

SCENARIO_PATH = Path(__file__).parent.parent / "data" / "catalog.json"


def _scenario():
    db = CatalogDB(str(SCENARIO_PATH))
    return {r.name: r for r in db.get_all_recipes()}, build_inventory(db.get_all_ingredients())


def _make_recipe(name, serving_size, *requirements):
    return Recipe(
        name=name,
        serving_size=serving_size,
        requirements=tuple(Requirement(ing, qty) for ing, qty in requirements),
    )


class TestScoreComponents:
    """Tests for the individual score terms with default weights."""

    def test_scarcity_counts_near_exhausted_requirements(self):
        recipes, inventory = _scenario()
        weights = ScoringWeights()
        # Cucumber 2 <= 2, Lettuce 3 <= 4, Olives 2 <= 2; Tomato and Cheese are plentiful
        assert scarcity_bonus(recipes["Salad"], inventory, weights) == 15.0
        assert scarcity_bonus(recipes["Pie"], inventory, weights) == 0.0

    def test_scarcity_ignores_exhausted_stock(self):
        recipe = _make_recipe("Snack", 1, ("X", 1))
        assert scarcity_bonus(recipe, {"X": 0}, ScoringWeights()) == 0.0

    def test_diversity_bonus_decays_to_zero(self):
        weights = ScoringWeights()
        assert [diversity_bonus(n, weights) for n in range(7)] == [
            10.0, 8.0, 6.0, 4.0, 2.0, 0.0, 0.0,
        ]

    def test_first_round_scores(self):
        recipes, inventory = _scenario()
        assert combined_score(recipes["Salad"], inventory, 0) == pytest.approx(37.75)
        assert combined_score(recipes["Pizza"], inventory, 0) == pytest.approx(12 + 40 / 9 + 5 + 10)
        assert combined_score(recipes["Sandwich"], inventory, 0) == pytest.approx(23.0)
        assert combined_score(recipes["Burger"], inventory, 0) == pytest.approx(15.0)

    def test_infeasible_scores_negative(self):
        recipe = _make_recipe("Feast", 10, ("X", 100))
        assert combined_score(recipe, {"X": 1}, 0) == INFEASIBLE_SCORE

    def test_custom_weights(self):
        recipe = _make_recipe("Snack", 2, ("X", 4))
        weights = ScoringWeights(
            serving_weight=1,
            efficiency_weight=0,
            scarcity_bonus=0,
            diversity_base=0,
        )
        assert combined_score(recipe, {"X": 10}, 0, weights) == 2.0


class TestPickBest:
    def test_ties_go_to_earliest(self):
        a = _make_recipe("A", 1, ("X", 1))
        b = _make_recipe("B", 1, ("X", 1))
        assert pick_best([(a, 5.0), (b, 5.0)]) is a

    def test_highest_wins(self):
        a = _make_recipe("A", 1, ("X", 1))
        b = _make_recipe("B", 1, ("X", 1))
        assert pick_best([(a, 5.0), (b, 6.0)]) is b

    def test_all_infeasible(self):
        a = _make_recipe("A", 1, ("X", 1))
        assert pick_best([(a, INFEASIBLE_SCORE)]) is None
        assert pick_best([]) is None


class TestCombinedScoring:
    """Tests for the full best-pick loop on the bundled catalog."""

    def test_scenario_result(self):
        recipes, inventory = _scenario()
        initial = dict(inventory)
        result = combined_scoring(list(recipes.values()), inventory)

        assert result.strategy == "combined_scoring"
        assert result.total_people_served == 12
        assert [(e.recipe.name, e.count) for e in result.entries] == [
            ("Salad", 1),
            ("Pizza", 1),
            ("Pasta", 1),
            ("Burger", 1),
            ("Pie", 1),
            ("Sandwich", 1),
        ]
        assert result.remaining_ingredients == {
            "Meat": 2,
            "Lettuce": 0,
            "Tomato": 0,
            "Cheese": 0,
            "Dough": 1,
            "Cucumber": 0,
            "Olives": 0,
        }
        assert check_mass_balance(result, initial) == []

    def test_diversity_spreads_production(self):
        """Without diversity a single recipe would take all the stock."""
        a = _make_recipe("A", 2, ("X", 1))
        b = _make_recipe("B", 1, ("X", 1))
        weights = ScoringWeights(
            serving_weight=1, efficiency_weight=0, scarcity_bonus=0, diversity_base=10, diversity_decay=5
        )
        result = combined_scoring([a, b], {"X": 3}, weights)
        # A scores 12, then 7 vs B's 11, then A 7 vs B 6
        assert [(e.recipe.name, e.count) for e in result.entries] == [("A", 2), ("B", 1)]
        assert result.total_people_served == 5
