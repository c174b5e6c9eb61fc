"""
Configuration management using pydantic-settings.
All settings loaded from environment variables (12-factor app).
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    api_reload: bool = Field(default=True, description="Enable hot reload")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins (comma-separated)",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")

    # Graph data source
    graph_data_path: Optional[str] = Field(
        default=None,
        description="JSON graph file; the built-in sample graph is used when unset",
    )

    # Propagation engine
    propagation_default_depth: int = Field(
        default=3, ge=0, le=10, description="Default propagation depth (hops)"
    )
    propagation_max_depth: int = Field(
        default=10, ge=0, le=50, description="Largest depth accepted by the API"
    )
    propagation_max_visits: Optional[int] = Field(
        default=None, ge=1, description="Node-visit budget per propagation call"
    )

    # Search and tree views
    search_result_limit: int = Field(default=8, ge=1, description="Max search results")
    search_min_query_length: int = Field(
        default=2, ge=0, description="Shortest query that triggers a search"
    )
    default_tree_root: str = Field(
        default="org_mtl", description="Root node for the dependency tree view"
    )

    # Development
    dev_mode: bool = Field(default=True, description="Development mode")

    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, v: str) -> List[str]:
        """Parse comma-separated CORS origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @model_validator(mode="after")
    def validate_depth_limits(self) -> "Settings":
        """The default propagation depth must be accepted by the depth cap."""
        if self.propagation_default_depth > self.propagation_max_depth:
            raise ValueError(
                "propagation_default_depth must be <= propagation_max_depth"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
