"""Harness configuration using Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TestkitSettings(BaseSettings):
    """Harness configuration loaded from environment variables."""

    __test__ = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ETK_",
        extra="ignore",
    )

    environment: Literal["local", "test", "ci"] = Field(default="test")
    service_name: str = Field(default="event-testkit")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
    database_url: str = Field(default="sqlite:///:memory:")
    event_store_urls: Dict[str, str] = Field(default_factory=dict)
    sql_echo: bool = Field(default=False)
    cache_backend: Literal["memory", "file", "redis"] = Field(default="file")
    cache_directory: str = Field(default="./data/cache")
    cache_namespace: str = Field(default="event_testkit_allowed_listeners")
    redis_url: str | None = Field(default=None)
    redis_token: str | None = Field(default=None)
    redis_cache_prefix: str = Field(default="etk")
    redis_cache_ttl: int = Field(default=0)
    default_queue_name: str = Field(default="neos-eventsourcing")
    # event store identifier -> listener import path -> mapping options
    listeners: Dict[str, Dict[str, Dict[str, Any]]] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("redis_url", "redis_token", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: str | None) -> str | None:
        if value == "":
            return None
        return value

    @field_validator("redis_cache_ttl", mode="before")
    @classmethod
    def ensure_int_ttl(cls, value: int | str | None) -> int | str | None:
        if value in (None, ""):
            return 0
        return value

    def event_store_url(self, identifier: str) -> str:
        """Database URL for one event store, falling back to ``database_url``."""

        return self.event_store_urls.get(identifier, self.database_url)


@lru_cache
def get_settings() -> TestkitSettings:
    """Return cached harness settings instance."""

    return TestkitSettings()
