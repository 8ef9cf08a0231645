#!/usr/bin/env python3
"""Command-line interface for the recipe allocation engine."""

import argparse
import sys
from pathlib import Path

from src.allocation.allocator import Allocator
from src.allocation.search import SearchStats
from src.catalog.exceptions import CatalogValidationError
from src.catalog.settings import DEFAULT_STRATEGY_ORDER, OptimizerSettings, OptimizerSettingsLoader
from src.logging_config import configure_logging
from src.output.formatters import format_result_json_string, format_result_markdown
from src.providers.api_provider import APICatalogProvider, CatalogFetchError
from src.providers.local_provider import LocalCatalogProvider


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Decide how many batches of each recipe to make to serve the most people"
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default="data/catalog.json",
        help="Path to catalog JSON file (default: data/catalog.json)"
    )
    parser.add_argument(
        "--catalog-url",
        type=str,
        help="Base URL of a remote catalog service; overrides --catalog"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/optimizer.yaml",
        help="Path to optimizer settings YAML (default: config/optimizer.yaml; built-in defaults if absent)"
    )
    parser.add_argument(
        "--strategy",
        choices=DEFAULT_STRATEGY_ORDER,
        help="Run a single strategy instead of picking the best of all"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json", "both"],
        default="markdown",
        help="Output format: markdown (default), json, or both"
    )
    parser.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save output (default: print to stdout)"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print backtracking search statistics to stderr"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: LOG_LEVEL env var or WARNING)"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    # Settings are optional; a missing file means defaults
    config_path = Path(args.config)
    try:
        if config_path.exists():
            print(f"Loading optimizer settings from {config_path}...", file=sys.stderr)
            settings = OptimizerSettingsLoader(str(config_path)).load()
        else:
            settings = OptimizerSettings()
    except ValueError as e:
        print(f"Error: invalid settings in {config_path}: {e}", file=sys.stderr)
        sys.exit(1)

    # Catalog provider (local or remote)
    if args.catalog_url:
        print(f"Fetching catalog from {args.catalog_url}...", file=sys.stderr)
        try:
            provider = APICatalogProvider(args.catalog_url)
            provider.refresh()
        except (CatalogFetchError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(3)
    else:
        catalog_path = Path(args.catalog)
        if not catalog_path.exists():
            print(f"Error: Catalog file not found: {catalog_path}", file=sys.stderr)
            sys.exit(1)
        print(f"Loading catalog from {catalog_path}...", file=sys.stderr)
        try:
            provider = LocalCatalogProvider.from_path(str(catalog_path))
        except CatalogValidationError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(2)

    catalog = provider.get_catalog()
    recipes = catalog.recipes
    ingredients = catalog.ingredients
    print(f"Found {len(recipes)} recipes and {len(ingredients)} ingredients", file=sys.stderr)

    allocator = Allocator(settings)
    stats = SearchStats(enabled=args.stats)
    try:
        if args.strategy:
            result = allocator.run_strategy(args.strategy, recipes, ingredients, stats=stats)
        else:
            result = allocator.optimize(recipes, ingredients, stats=stats)
    except CatalogValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.output in ["markdown", "both"]:
        markdown_output = format_result_markdown(result)
        if args.output_file:
            output_path = Path(args.output_file)
            if args.output == "both":
                output_path = output_path.with_suffix(".md")
            output_path.write_text(markdown_output)
            print(f"Markdown output saved to {output_path}", file=sys.stderr)
        else:
            print(markdown_output)

    if args.output in ["json", "both"]:
        json_output = format_result_json_string(result, indent=2)
        if args.output_file:
            output_path = Path(args.output_file)
            if args.output == "both":
                output_path = output_path.with_suffix(".json")
            output_path.write_text(json_output)
            print(f"JSON output saved to {output_path}", file=sys.stderr)
        else:
            if args.output == "both":
                print("\n" + "=" * 80 + "\n", file=sys.stdout)
            print(json_output)

    if stats.enabled:
        print(
            f"Search: {stats.total_calls} calls, max depth {stats.max_depth}, "
            f"{stats.improvements} improvements, {stats.total_runtime():.3f}s",
            file=sys.stderr,
        )

    print(f"\nServes {result.total_people_served} people ({result.strategy})", file=sys.stderr)
    return 0


if __name__ == "__main__":
    main()
