# app/models/responses.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime, timezone

from .internal import SearchResult


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SearchResponse(BaseModel):
    query: str = Field(..., description="Search query as received")
    results: List[SearchResult] = Field(default_factory=list, description="Ranked results")
    total: int = Field(..., ge=0, description="Number of results returned")
    engine: str = Field(..., description="Upstream search provider")
    processing_time: float = Field(..., description="Processing time in seconds")
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    request_id: Optional[str] = Field(None, description="Request ID for tracking")
    timestamp: datetime = Field(default_factory=_utcnow)
