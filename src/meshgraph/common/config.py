"""Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from meshgraph.common.exceptions import ConfigurationError


class GraphSettings(BaseSettings):
    """Traffic graph construction configuration."""

    model_config = SettingsConfigDict(env_prefix="GRAPH_")

    default_graph_type: str = "versionedApp"

    # Malformed telemetry handling
    skip_malformed: bool = Field(
        default=True,
        description="Log and skip telemetry that cannot be resolved to a node instead of failing the pass",
    )

    @field_validator("default_graph_type", mode="before")
    @classmethod
    def validate_graph_type(cls, v: Any) -> str:
        """Ensure the graph type is one of the supported variants."""
        # imported here, meshgraph.graph depends on this module
        from meshgraph.graph.types import GraphType

        return GraphType(v).value


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"
    include_timestamp: bool = True
    include_caller: bool = True


class Settings(BaseSettings):
    """Main application settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application info
    app_name: str = "MeshGraph"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # Sub-configurations
    graph: GraphSettings = Field(default_factory=GraphSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings singleton.

    Raises:
        ConfigurationError: If the environment holds invalid settings.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            message="Invalid MeshGraph settings",
            details={"errors": [
                {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]},
            cause=e,
        ) from e
