# app/api/dependencies.py
from fastapi import Request

from app.config.settings import Settings
from app.services.search_engine import SearchClient


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with"""
    return request.app.state.settings


def get_search_client(request: Request) -> SearchClient:
    """Shared upstream client, created and closed by the application lifespan"""
    return request.app.state.search_client
