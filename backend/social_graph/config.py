"""Settings — everything deployment-specific, read once from the environment.

Invariants:
    - get_settings() is cached: one Settings instance per process
    - exclusion_variant is fixed for the life of the process; main.py turns it
      into the single ExclusionPolicy every request uses
    - jwt_secret must be overridden outside local development

Design Decisions:
    - pydantic-settings: env vars and an optional .env file, validated and typed
    - Defaults match the docker-compose database so `uvicorn social_graph.main:app`
      runs without configuration
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from social_graph.core.domain_types import ExclusionVariant


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    database_url: str = "postgresql+asyncpg://social:social@db:5432/social_graph"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_auto_create: bool = True

    # Bearer tokens (verified here, issued elsewhere)
    jwt_secret: str = "dev-secret-change-me-to-32-bytes-or-more"
    jwt_algorithm: str = "HS256"

    # block: exclusions gate requests both ways; avoid: they only flag profiles
    exclusion_variant: ExclusionVariant = ExclusionVariant.BLOCK

    cors_origins: list[str] = ["http://localhost:5173"]

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        """Managed Postgres hands out postgresql:// URLs; the engine needs asyncpg."""
        if isinstance(v, str) and v.startswith(("postgresql://", "postgres://")):
            return "postgresql+asyncpg://" + v.split("://", 1)[1]
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
