# app/services/__init__.py
"""Service layer modules"""

from .search_engine import SearchClient

__all__ = ["SearchClient"]
