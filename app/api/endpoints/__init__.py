# app/api/endpoints/__init__.py
"""API endpoints"""

from . import search

__all__ = ["search"]
