"""Configuration package for the interview practice service."""
from .routes import AppConfig, LlmRoute, default_routes, load_config, resolve_api_key, resolve_route
from .settings import Settings, settings

__all__ = [
    "AppConfig",
    "LlmRoute",
    "default_routes",
    "load_config",
    "resolve_api_key",
    "resolve_route",
    "Settings",
    "settings",
]
