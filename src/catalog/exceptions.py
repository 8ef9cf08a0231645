"""Structured error types for catalog input.

Catalog input is validated once, at the boundary, before the allocator runs.
Malformed catalogs are rejected outright: a negative stock level or a
non-positive requirement would let the allocator drive an ingredient below
zero, so no permissive interpretation is attempted.
"""

from enum import Enum
from typing import Any, Dict, Optional


class CatalogErrorCode(Enum):
    """Enumeration of catalog validation error codes.

    Codes are string values for easy serialization and logging.
    """

    NEGATIVE_QUANTITY = "NEGATIVE_QUANTITY"
    NON_POSITIVE_SERVING_SIZE = "NON_POSITIVE_SERVING_SIZE"
    NON_POSITIVE_REQUIREMENT = "NON_POSITIVE_REQUIREMENT"
    EMPTY_REQUIREMENTS = "EMPTY_REQUIREMENTS"
    DUPLICATE_INGREDIENT = "DUPLICATE_INGREDIENT"
    DUPLICATE_RECIPE = "DUPLICATE_RECIPE"
    DUPLICATE_REQUIREMENT = "DUPLICATE_REQUIREMENT"
    MALFORMED_CATALOG = "MALFORMED_CATALOG"


class CatalogValidationError(ValueError):
    """Raised when a catalog snapshot violates an input constraint.

    Attributes:
        code: CatalogErrorCode identifying the violation
        message: Human-readable error description
        context: Dictionary of relevant context (recipe name, ingredient name, value)
    """

    def __init__(
        self,
        code: CatalogErrorCode,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(f"[{code.value}] {message}")

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
        }


class UnknownStrategyError(ValueError):
    """Raised when a strategy name is not one of the registered strategies."""

    def __init__(self, strategy_name: str):
        self.strategy_name = strategy_name
        super().__init__(f"Unknown allocation strategy '{strategy_name}'")
