"""Application settings loaded from environment variables.

Every setting can be overridden with an ``INVENTORY_``-prefixed
environment variable or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from inventory.domain.model.product import DEFAULT_IMAGE_URI


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: str = "data/inventory.db"
    default_image_uri: str = DEFAULT_IMAGE_URI
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    return Settings()
