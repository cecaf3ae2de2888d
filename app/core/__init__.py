# app/core/__init__.py
from .exceptions import (
    CustomHTTPException,
    SearchEngineException,
    ServiceUnavailableException
)

__all__ = [
    "CustomHTTPException",
    "SearchEngineException",
    "ServiceUnavailableException"
]
