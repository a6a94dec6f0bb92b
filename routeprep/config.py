"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for the values that sit
outside the problem document itself:
- which routing backend to attach and where its servers live
- the defaults applied while validating documents (profile name,
  priority ceiling, unrestricted time window)
- logging

Configuration can be overridden via environment variables:
- ROUTEPREP_ROUTING_ROUTER=ors
- ROUTEPREP_ROUTING_SERVERS='{"bike": {"host": "localhost", "port": "5001"}}'
- ROUTEPREP_PARSING_MAX_PRIORITY=50
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RouterKind = Literal["osrm", "libosrm", "ors"]


class Server(BaseModel):
    """Address of an HTTP routing server."""

    host: str = "0.0.0.0"
    port: str = "5000"

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


class RoutingConfig(BaseSettings):
    """Routing backend configuration.

    Environment variables prefixed with ROUTEPREP_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="ROUTEPREP_ROUTING_")

    router: RouterKind = "osrm"
    servers: Dict[str, Server] = Field(default_factory=lambda: {"car": Server()})
    geometry: bool = False
    timeout_seconds: float = 10.0


class ParsingConfig(BaseSettings):
    """Defaults applied while validating a problem document.

    Environment variables prefixed with ROUTEPREP_PARSING_.
    """

    model_config = SettingsConfigDict(env_prefix="ROUTEPREP_PARSING_")

    default_profile: str = "car"
    max_priority: int = 100
    time_window_end: int = 2**32 - 1


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with ROUTEPREP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ROUTEPREP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.routing.router)
        print(config.parsing.default_profile)

    Environment variables prefixed with ROUTEPREP_.
    """

    model_config = SettingsConfigDict(env_prefix="ROUTEPREP_")

    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
