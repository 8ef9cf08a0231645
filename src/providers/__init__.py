"""Provider abstraction layer for catalog data.

This package decouples the allocator, API server and CLI from concrete
catalog sources (local JSON, in-memory lists, remote catalog service).
"""

from src.providers.catalog_provider import CatalogProvider
from src.providers.local_provider import InMemoryCatalogProvider, LocalCatalogProvider
from src.providers.api_provider import APICatalogProvider, CatalogFetchError

__all__ = [
    "CatalogProvider",
    "LocalCatalogProvider",
    "InMemoryCatalogProvider",
    "APICatalogProvider",
    "CatalogFetchError",
]
