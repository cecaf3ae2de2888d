# app/core/exceptions.py
from typing import Optional

from fastapi import HTTPException


class CustomHTTPException(HTTPException):
    def __init__(self, status_code: int, detail: str, error_code: Optional[str] = None):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code


class SearchEngineException(CustomHTTPException):
    """Raised when the upstream search API fails or returns garbage"""

    def __init__(self, detail: str = "Upstream search failed"):
        super().__init__(status_code=502, detail=detail, error_code="UPSTREAM_ERROR")


class ServiceUnavailableException(CustomHTTPException):
    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(status_code=503, detail=detail, error_code="SERVICE_UNAVAILABLE")
