# app/config/settings.py
from functools import lru_cache
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode
import logging

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000


class Settings(BaseSettings):
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = DEFAULT_PORT
    LOG_LEVEL: str = "INFO"

    # CORS policy, "*" allows any origin
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # Upstream search API
    SEARCH_ENGINE: str = "serpapi"
    SEARCH_API_KEY: str = ""
    SEARCH_API_URL: str = ""
    SEARCH_TIMEOUT: int = 10
    MAX_SEARCH_RESULTS: int = 10

    @field_validator("PORT", mode="before")
    @classmethod
    def parse_port(cls, v):
        if v is None:
            return DEFAULT_PORT
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return DEFAULT_PORT
            try:
                return int(v)
            except ValueError:
                logger.warning(f"Invalid PORT value {v!r}, using {DEFAULT_PORT}")
                return DEFAULT_PORT
        return v

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            origins = [origin.strip() for origin in v.split(",") if origin.strip()]
            return origins or ["*"]
        return v

    @field_validator("SEARCH_ENGINE")
    @classmethod
    def validate_engine(cls, v):
        engine = v.strip().lower()
        if engine not in ("serpapi", "brave"):
            raise ValueError(f"Unsupported search engine: {v}")
        return engine

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Load settings from the environment (once per process)"""
    return Settings()
