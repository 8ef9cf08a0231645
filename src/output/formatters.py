"""Formatters for allocation results (JSON and Markdown)."""

import json
from typing import Any, Dict, List

from src.allocation.models import AllocationEntry, AllocationResult
from src.catalog.models import Recipe


def format_requirement_string(recipe: Recipe) -> str:
    """Format a recipe's requirements as a string (e.g., "2 Meat, 2 Dough").

    Args:
        recipe: Recipe object

    Returns:
        Comma-separated "<quantity> <ingredient>" pairs in recipe order
    """
    return ", ".join(f"{req.quantity} {req.ingredient_name}" for req in recipe.requirements)


def flatten_remaining(result: AllocationResult) -> List[Dict[str, Any]]:
    """Flatten the remaining stock into display rows sorted by ingredient name.

    Args:
        result: AllocationResult from the allocator

    Returns:
        List of {"name": str, "quantity": int}, including ingredients at zero
    """
    return [
        {"name": name, "quantity": quantity}
        for name, quantity in sorted(result.remaining_ingredients.items())
    ]


def format_entry_json(entry: AllocationEntry) -> Dict[str, Any]:
    recipe = entry.recipe
    return {
        "recipe": {
            "id": recipe.id,
            "name": recipe.name,
            "serving_size": recipe.serving_size,
            "requirements": [
                {"ingredient": req.ingredient_name, "quantity": req.quantity}
                for req in recipe.requirements
            ],
        },
        "count": entry.count,
        "people_served": entry.people_served,
    }


def format_result_json(result: AllocationResult) -> Dict[str, Any]:
    """Format an AllocationResult as JSON (for API usage).

    Args:
        result: AllocationResult from the allocator

    Returns:
        Dictionary ready for JSON serialization
    """
    return {
        "recipes": [format_entry_json(entry) for entry in result.entries],
        "total_people_served": result.total_people_served,
        "remaining_ingredients": dict(result.remaining_ingredients),
        "strategy": result.strategy,
    }


def format_result_json_string(result: AllocationResult, indent: int = 2) -> str:
    """Format an AllocationResult as a JSON string.

    Args:
        result: AllocationResult from the allocator
        indent: JSON indentation (default: 2)

    Returns:
        JSON string
    """
    return json.dumps(format_result_json(result), indent=indent)


def format_result_markdown(result: AllocationResult) -> str:
    """Format an AllocationResult as Markdown.

    Args:
        result: AllocationResult from the allocator

    Returns:
        Formatted Markdown string
    """
    lines = []

    lines.append("# Recipe Allocation\n")
    lines.append(f"**People Served:** {result.total_people_served}")
    if result.strategy:
        lines.append(f"**Strategy:** {result.strategy}")
    lines.append("")

    lines.append("## Recipes")
    if not result.entries:
        lines.append("_No recipe can be made with the current stock._")
    for entry in result.entries:
        lines.append(
            f"- **{entry.recipe.name}** x{entry.count} "
            f"({entry.people_served} people; uses {format_requirement_string(entry.recipe)} each)"
        )
    lines.append("")

    lines.append("## Remaining Ingredients")
    lines.append("| Ingredient | Quantity |")
    lines.append("|---|---|")
    for row in flatten_remaining(result):
        lines.append(f"| {row['name']} | {row['quantity']} |")
    lines.append("")

    return "\n".join(lines)
