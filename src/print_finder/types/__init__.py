"""Type definitions for print-finder.

This module re-exports all types from submodules for convenient imports.
"""

from print_finder.types.api import ErrorResponse, HealthResponse
from print_finder.types.search import SearchResult, SearchSource

__all__ = [
    # Search
    "SearchResult",
    "SearchSource",
    # API
    "ErrorResponse",
    "HealthResponse",
]
