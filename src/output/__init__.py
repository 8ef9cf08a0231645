"""Output formatting for allocation results."""

from src.output.formatters import (
    flatten_remaining,
    format_requirement_string,
    format_result_json,
    format_result_json_string,
    format_result_markdown,
)

__all__ = [
    "flatten_remaining",
    "format_requirement_string",
    "format_result_json",
    "format_result_json_string",
    "format_result_markdown",
]
