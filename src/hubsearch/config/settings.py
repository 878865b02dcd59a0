"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (HUBSEARCH_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from hubsearch.models.query import EntityType


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class SearchSettings(BaseModel):
    """Search and suggestion behavior."""

    adapter_timeout_seconds: float | None = Field(
        default=5.0,
        gt=0,
        description="Per-adapter timeout; None waits indefinitely",
    )
    enabled_types: list[EntityType] = Field(
        default_factory=lambda: list(EntityType),
        description="Entity types with an active adapter",
    )
    suggestion_window: int = Field(default=10, ge=1, le=10, description="Records sampled per type for suggestions")
    max_suggestions: int = Field(default=10, ge=1, description="Maximum suggestions returned")
    min_suggestion_length: int = Field(default=2, ge=1, description="Minimum partial-term length for suggestions")
    debounce_ms: int = Field(default=300, ge=0, description="Recommended keystroke debounce for callers")


class StoreSettings(BaseModel):
    """Persistence collaborator configuration."""

    backend: Literal["memory", "http"] = Field(default="memory", description="Record store backend")
    base_url: str = Field(default="http://localhost:8090", description="Document-store gateway URL (http backend)")
    api_key: str | None = Field(default=None, description="Gateway bearer token")
    timeout: float = Field(default=10.0, gt=0, description="Gateway request timeout in seconds")
    collections: dict[EntityType, str] = Field(
        default_factory=lambda: {
            EntityType.CONTENT: "posts",
            EntityType.GROUP: "communities",
            EntityType.PROFILE: "users",
        },
        description="Collection name per entity type",
    )
    seed_path: str | None = Field(default=None, description="YAML/JSON seed file for the memory backend")


class CacheSettings(BaseModel):
    """Cache configuration (recent searches, search history, result cache)."""

    backend: Literal["memory", "redis"] = Field(default="memory", description="Cache backend")
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    key_prefix: str = Field(default="hubsearch", description="Prefix for every cache key")
    result_ttl_seconds: int = Field(default=60, ge=0, description="Search result cache TTL; 0 disables")
    recent_limit: int = Field(default=5, ge=1, description="Recent searches kept per user")
    history_limit: int = Field(default=50, ge=1, description="Tracked searches kept per user")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")
    track_searches: bool = Field(default=True, description="Send search telemetry")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the HUBSEARCH_ prefix.
    Nested settings use double underscores: HUBSEARCH_SERVER__PORT=9090

    Example:
        HUBSEARCH_STORES__BACKEND=http
        HUBSEARCH_STORES__BASE_URL=http://docstore:8090
        HUBSEARCH_CACHE__BACKEND=redis
    """

    model_config = {
        "env_prefix": "HUBSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="HubSearch", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    server: ServerSettings = Field(default_factory=ServerSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    stores: StoreSettings = Field(default_factory=StoreSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file override environment variables; anything
        the file leaves out is still read from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
