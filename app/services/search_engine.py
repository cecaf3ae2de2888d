# app/services/search_engine.py
import asyncio
import aiohttp
import logging
from typing import Any, Dict, List, Optional

from app.config.settings import Settings
from app.models.internal import SearchResult
from app.core.exceptions import SearchEngineException, ServiceUnavailableException

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search"
BRAVE_URL = "https://api.search.brave.com/res/v1/web/search"


class SearchClient:
    """Thin async client for the upstream web search API.

    One client (and one HTTP session) is shared by the whole application;
    the session is created on first use and released by ``close()``.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine = settings.SEARCH_ENGINE
        self.session: Optional[aiohttp.ClientSession] = None
        self.search_engines = {
            "serpapi": self._serpapi_search,
            "brave": self._brave_search
        }

    async def _get_session(self) -> aiohttp.ClientSession:
        """Lazy initialization of HTTP session"""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.SEARCH_TIMEOUT)
            )
        return self.session

    async def search(self, query: str, max_results: int) -> List[SearchResult]:
        """Run ``query`` against the configured engine and return ranked results"""
        if not self.settings.SEARCH_API_KEY:
            raise ServiceUnavailableException("Search API key is not configured")

        max_results = max(1, min(max_results, self.settings.MAX_SEARCH_RESULTS))
        search_func = self.search_engines[self.engine]

        try:
            items = await search_func(query, max_results)
        except asyncio.TimeoutError:
            logger.error(f"{self.engine} search timed out for query '{query[:50]}'")
            raise SearchEngineException(f"{self.engine} search timed out")
        except aiohttp.ClientError as e:
            logger.error(f"{self.engine} search error: {e}")
            raise SearchEngineException(f"{self.engine} search failed: {e}")

        results = [
            SearchResult(
                title=item["title"],
                url=item["url"],
                snippet=item["snippet"],
                source_engine=self.engine,
                relevance_score=calculate_relevance_score(item, query)
            )
            for item in items
            if item["url"]
        ]
        ranked = deduplicate_and_rank(results, max_results)

        logger.info(f"{self.engine} search returned {len(ranked)} results for: {query[:30]}...")
        return ranked

    async def _get_json(self, url: str, params: Dict[str, Any],
                        headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        session = await self._get_session()
        async with session.get(url, params=params, headers=headers) as response:
            if response.status != 200:
                error_text = await response.text()
                logger.warning(
                    f"{self.engine} returned status {response.status}: {error_text[:200]}"
                )
                raise SearchEngineException(
                    f"{self.engine} returned status {response.status}"
                )
            try:
                data = await response.json(content_type=None)
            except ValueError:
                raise SearchEngineException(f"{self.engine} returned invalid JSON")

        if not isinstance(data, dict):
            raise SearchEngineException(f"{self.engine} returned an unexpected payload")
        return data

    async def _serpapi_search(self, query: str, max_results: int) -> List[Dict[str, Any]]:
        """Search using SerpApi (Google results)"""
        params = {
            "q": query,
            "api_key": self.settings.SEARCH_API_KEY,
            "engine": "google",
            "num": max_results,
            "output": "json"
        }
        data = await self._get_json(self.settings.SEARCH_API_URL or SERPAPI_URL, params)

        return [
            {
                "title": item.get("title", ""),
                "url": item.get("link", ""),
                "snippet": item.get("snippet", ""),
                "position": item.get("position")
            }
            for item in data.get("organic_results", [])
        ]

    async def _brave_search(self, query: str, max_results: int) -> List[Dict[str, Any]]:
        """Search using Brave Search API"""
        headers = {
            "Accept": "application/json",
            "X-Subscription-Token": self.settings.SEARCH_API_KEY
        }
        params = {
            "q": query,
            "count": min(max_results, 20)  # Brave API max is 20
        }
        data = await self._get_json(self.settings.SEARCH_API_URL or BRAVE_URL, params, headers)

        return [
            {
                "title": item.get("title", ""),
                "url": item.get("url", ""),
                "snippet": item.get("description", ""),
                "position": index + 1
            }
            for index, item in enumerate(data.get("web", {}).get("results", []))
        ]

    async def close(self):
        """Close HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None


def calculate_relevance_score(item: Dict[str, Any], query: str) -> float:
    """Score a normalised result item against the query, in [0, 1]"""
    score = 0.5

    title = (item.get("title") or "").lower()
    snippet = (item.get("snippet") or "").lower()
    query_lower = query.lower()

    if query_lower in title:
        score += 0.3

    if query_lower in snippet:
        score += 0.2

    # Query term coverage
    query_terms = query_lower.split()
    title_snippet = f"{title} {snippet}"
    if query_terms:
        matching_terms = sum(1 for term in query_terms if term in title_snippet)
        score += matching_terms / len(query_terms) * 0.2

    position = item.get("position")
    if isinstance(position, int):
        if position <= 3:
            score += 0.1
        elif position <= 5:
            score += 0.05

    return min(max(score, 0.0), 1.0)


def deduplicate_and_rank(results: List[SearchResult], max_results: int) -> List[SearchResult]:
    """Drop repeated URLs (first wins) and sort by relevance, best first"""
    seen_urls = set()
    unique_results = []

    for result in results:
        if result.url not in seen_urls:
            seen_urls.add(result.url)
            unique_results.append(result)

    unique_results.sort(key=lambda x: x.relevance_score, reverse=True)
    return unique_results[:max_results]
