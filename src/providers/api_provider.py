"""API-backed catalog provider.

Fetches the catalog from a remote recipe service exposing
``GET /api/recipes`` and ``GET /api/ingredients`` and converts the DTO shape
into domain objects, so the allocator (and everything downstream) is unaware
of the remote service.

All network I/O happens inside :meth:`APICatalogProvider.refresh`. After it
returns, :meth:`get_recipes` and :meth:`get_ingredients` are pure in-memory
lookups.

DTO shape (camelCase, as served by the catalog service)::

    GET /api/ingredients -> [{"id": 1, "name": "Meat", "availableQuantity": 6}, ...]
    GET /api/recipes -> [
        {
            "id": 2, "name": "Pie", "servingSize": 1,
            "ingredients": [
                {"requiredQuantity": 2, "ingredient": {"id": 1, "name": "Meat", ...}},
                ...
            ]
        },
        ...
    ]
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from src.catalog.catalog_db import parse_quantity
from src.catalog.models import Ingredient, Recipe, Requirement
from src.providers.catalog_provider import CatalogProvider

log = logging.getLogger("recipe_optimizer.providers")


class CatalogFetchError(Exception):
    """Raised when the remote catalog cannot be fetched or parsed.

    Fail-fast: no partial catalog. The CLI exits with code 3 when this is
    raised.
    """

    def __init__(self, error_code: str, message: str):
        self.error_code = error_code
        self.message = message
        super().__init__(f"{error_code}: {message}")


class APICatalogProvider(CatalogProvider):
    """Provider that reads recipes and stock from a remote catalog service.

    Usage::

        provider = APICatalogProvider("http://localhost:5000")
        # or
        provider = APICatalogProvider.from_env()  # reads RECIPE_CATALOG_URL

        provider.refresh()
        recipes = provider.get_recipes()
    """

    RECIPES_PATH = "/api/recipes"
    INGREDIENTS_PATH = "/api/ingredients"

    def __init__(self, base_url: str, timeout: float = 10.0):
        """Initialize provider with the catalog service base URL.

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url or not base_url.strip():
            raise ValueError("Catalog service base URL is required")
        self.base_url = base_url.strip().rstrip("/")
        self.timeout = timeout
        self._recipes: Optional[List[Recipe]] = None
        self._ingredients: Optional[List[Ingredient]] = None

    @classmethod
    def from_env(cls, env_var: str = "RECIPE_CATALOG_URL") -> "APICatalogProvider":
        """Create provider from environment variable.

        Raises:
            ValueError: If environment variable not set
        """
        base_url = os.environ.get(env_var)
        if not base_url:
            raise ValueError(f"Environment variable {env_var} not set.")
        return cls(base_url=base_url)

    # ------------------------------------------------------------------
    # CatalogProvider interface
    # ------------------------------------------------------------------

    def get_recipes(self) -> List[Recipe]:
        if self._recipes is None:
            self.refresh()
        return list(self._recipes)

    def get_ingredients(self) -> List[Ingredient]:
        if self._ingredients is None:
            self.refresh()
        return list(self._ingredients)

    def refresh(self) -> None:
        """Fetch ingredients and recipes; replaces the in-memory snapshot.

        Both payloads are parsed before either is stored, so a failure never
        leaves a half-updated catalog.

        Raises:
            CatalogFetchError: On any network, HTTP or payload error.
        """
        ingredients_payload = self._make_request(self.INGREDIENTS_PATH)
        recipes_payload = self._make_request(self.RECIPES_PATH)
        try:
            ingredients = [self._ingredient_from_dto(d) for d in ingredients_payload]
            recipes = [self._recipe_from_dto(d) for d in recipes_payload]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise CatalogFetchError("INVALID_PAYLOAD", f"Unexpected catalog payload: {e!r}") from e

        self._ingredients = ingredients
        self._recipes = recipes
        log.info(
            "Fetched catalog from %s: %d recipes, %d ingredients",
            self.base_url,
            len(recipes),
            len(ingredients),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _make_request(self, path: str) -> List[Dict[str, Any]]:
        """GET base_url + path and return the parsed JSON list.

        Raises:
            CatalogFetchError: If the request fails or returns a non-list
        """
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(url, timeout=self.timeout)

            if response.status_code != 200:
                raise CatalogFetchError(
                    "API_ERROR",
                    f"Catalog service returned status {response.status_code} for {path}"
                )

            payload = response.json()

        except requests.exceptions.Timeout:
            raise CatalogFetchError("TIMEOUT", f"Catalog service request to {path} timed out")
        except requests.exceptions.ConnectionError:
            raise CatalogFetchError("CONNECTION_ERROR", f"Failed to connect to {self.base_url}")
        except ValueError as e:
            # requests' JSONDecodeError is both a ValueError and a RequestException
            raise CatalogFetchError("INVALID_PAYLOAD", f"Response from {path} is not JSON: {e}")
        except requests.exceptions.RequestException as e:
            raise CatalogFetchError("API_ERROR", f"Request failed: {str(e)}")

        if not isinstance(payload, list):
            raise CatalogFetchError("INVALID_PAYLOAD", f"Expected a JSON list from {path}")
        return payload

    @staticmethod
    def _ingredient_from_dto(dto: Dict[str, Any]) -> Ingredient:
        return Ingredient(
            name=str(dto["name"]),
            available_quantity=parse_quantity(dto["availableQuantity"], "availableQuantity"),
            id=dto.get("id"),
        )

    @staticmethod
    def _recipe_from_dto(dto: Dict[str, Any]) -> Recipe:
        requirements = tuple(
            Requirement(
                ingredient_name=str(item["ingredient"]["name"]),
                quantity=parse_quantity(item["requiredQuantity"], "requiredQuantity"),
            )
            for item in dto.get("ingredients", [])
        )
        return Recipe(
            name=str(dto["name"]),
            serving_size=parse_quantity(dto["servingSize"], "servingSize"),
            requirements=requirements,
            id=dto.get("id"),
        )
