# app/models/__init__.py
"""Data models"""

from .responses import SearchResponse, ErrorResponse
from .internal import SearchResult

__all__ = [
    "SearchResponse",
    "ErrorResponse",
    "SearchResult"
]
