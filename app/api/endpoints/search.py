# app/api/endpoints/search.py
from fastapi import APIRouter, BackgroundTasks, Depends, Path, Query
import logging
import time
from typing import Optional

from app.api.dependencies import get_app_settings, get_search_client
from app.config.settings import Settings
from app.models.responses import SearchResponse, ErrorResponse
from app.services.search_engine import SearchClient
from app.core.exceptions import CustomHTTPException

router = APIRouter()
logger = logging.getLogger(__name__)

SEARCH_RESPONSES = {
    400: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse}
}


@router.get(
    "/",
    response_model=SearchResponse,
    responses=SEARCH_RESPONSES,
    summary="Search the web",
    description="Forward a query to the upstream search API and return ranked results."
)
async def search_query(
    background_tasks: BackgroundTasks,
    q: str = Query(..., min_length=1, max_length=500, description="The search query"),
    num: Optional[int] = Query(None, ge=1, description="Maximum number of results"),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_app_settings)
):
    """
    Search with the query string.

    - **q**: The search query (1-500 characters)
    - **num**: Maximum number of results, capped by server configuration
    """
    return await _run_search(q, num, client, settings, background_tasks)


@router.get(
    "/{query}",
    response_model=SearchResponse,
    responses=SEARCH_RESPONSES,
    summary="Search the web (query in path)"
)
async def search_query_path(
    background_tasks: BackgroundTasks,
    query: str = Path(..., min_length=1, max_length=500),
    num: Optional[int] = Query(None, ge=1),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_app_settings)
):
    return await _run_search(query, num, client, settings, background_tasks)


async def _run_search(
    query: str,
    num: Optional[int],
    client: SearchClient,
    settings: Settings,
    background_tasks: BackgroundTasks
) -> SearchResponse:
    query = query.strip()
    if not query:
        raise CustomHTTPException(
            status_code=400,
            detail="Query cannot be empty or whitespace only",
            error_code="VALIDATION_ERROR"
        )

    start_time = time.time()
    results = await client.search(query, num or settings.MAX_SEARCH_RESULTS)
    processing_time = time.time() - start_time

    background_tasks.add_task(
        log_search_request,
        query=query,
        result_count=len(results),
        response_time=processing_time
    )

    return SearchResponse(
        query=query,
        results=results,
        total=len(results),
        engine=client.engine,
        processing_time=processing_time
    )


async def log_search_request(query: str, result_count: int, response_time: float):
    """Background task to log search requests"""
    logger.info(
        f"Search completed - Query: '{query[:50]}', "
        f"Results: {result_count}, Time: {response_time:.2f}s"
    )
