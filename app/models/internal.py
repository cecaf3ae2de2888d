# app/models/internal.py
from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    title: str
    url: str
    snippet: str
    source_engine: str
    relevance_score: float = Field(ge=0.0, le=1.0)
