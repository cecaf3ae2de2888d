# app/main.py
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.endpoints import search
from app.api.middleware import RequestLoggingMiddleware
from app.config.settings import Settings, get_settings
from app.core.exceptions import CustomHTTPException
from app.models.responses import ErrorResponse
from app.services.search_engine import SearchClient

logger = logging.getLogger(__name__)

SEARCH_PREFIX = "/api/search"


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the upstream search client for the lifetime of the app"""
    app.state.search_client = SearchClient(app.state.settings)
    try:
        yield
    finally:
        await app.state.search_client.close()
        app.state.search_client = None


def create_app(settings: Optional[Settings] = None,
               search_router: Optional[APIRouter] = None) -> FastAPI:
    """Build the application.

    ``search_router`` replaces the built-in search handler under
    ``/api/search``; everything else about the app stays the same.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Search Proxy",
        description="CORS-enabled proxy to an external web search API",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)
    # Outermost user middleware, so default 404s get CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(search_router or search.router, prefix=SEARCH_PREFIX, tags=["search"])

    @app.exception_handler(CustomHTTPException)
    async def custom_exception_handler(request: Request, exc: CustomHTTPException):
        error = ErrorResponse(
            error=exc.detail,
            error_code=exc.error_code,
            request_id=getattr(request.state, "request_id", None)
        )
        return JSONResponse(status_code=exc.status_code, content=error.model_dump(mode="json"))

    return app


class SearchServer(uvicorn.Server):
    """uvicorn server that announces the bound port with a single log line"""

    def _log_started_message(self, listeners) -> None:
        # Replaces uvicorn's "Uvicorn running on ..." banner
        port = self.config.port
        for sock in listeners:
            sockname = sock.getsockname()
            if isinstance(sockname, tuple):
                port = sockname[1]
            break
        logger.info(f"Server running on port {port}")

    @property
    def bound_port(self) -> int:
        for server in self.servers:
            for sock in server.sockets:
                return sock.getsockname()[1]
        return self.config.port


def build_server(settings: Settings, app: Optional[FastAPI] = None) -> SearchServer:
    config = uvicorn.Config(
        app or create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
    return SearchServer(config)


def run():
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    try:
        build_server(settings).run()
    except KeyboardInterrupt:
        pass


app = create_app()

if __name__ == "__main__":
    run()
