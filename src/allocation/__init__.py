"""Allocation engine: decides how many batches of each recipe to produce."""

from .allocator import Allocator, optimize
from .models import AllocationEntry, AllocationResult
from .search import SearchStats

__all__ = [
    "Allocator",
    "optimize",
    "AllocationEntry",
    "AllocationResult",
    "SearchStats",
]
