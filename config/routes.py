"""Language-backend route configuration."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field

from .settings import Settings

Provider = Literal["gemini", "openai"]


class LlmRoute(BaseModel):
    """LLM endpoint configuration."""

    name: str
    provider: Provider = "gemini"
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(default=30.0, ge=0.1)
    api_key_env: Optional[str] = None
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=1024, ge=1)
    extra_headers: Dict[str, str] = Field(default_factory=dict)


class AppConfig(BaseModel):
    """Application configuration root."""

    llm_routes: Dict[str, LlmRoute]
    interviewer_route: str = "gemini"


def load_config(path: Path) -> AppConfig:
    """Load configuration from disk."""

    data = path.read_text(encoding="utf-8")
    return AppConfig.model_validate_json(data)


def default_routes() -> Dict[str, LlmRoute]:
    """Routes available without a config file."""

    return {
        "gemini": LlmRoute(
            name="gemini",
            provider="gemini",
            base_url="https://generativelanguage.googleapis.com",
            endpoint="/v1beta/models/gemini-2.5-flash:generateContent",
            model="gemini-2.5-flash",
            api_key_env="GEMINI_API_KEY",
        ),
        "groq": LlmRoute(
            name="groq",
            provider="openai",
            base_url="https://api.groq.com",
            endpoint="/openai/v1/chat/completions",
            model="llama3-70b-8192",
            api_key_env="GROQ_API_KEY",
        ),
    }


def resolve_route(cfg: Settings) -> LlmRoute:
    """Pick the interviewer route from the config file or the built-in defaults.

    Raises:
        KeyError: If the selected route is not defined.
    """

    routes = default_routes()
    route_id = cfg.LLM_ROUTE
    if cfg.LLM_CONFIG_PATH:
        app_config = load_config(Path(cfg.LLM_CONFIG_PATH))
        routes.update(app_config.llm_routes)
        route_id = app_config.interviewer_route
    if route_id not in routes:
        raise KeyError(f"Route '{route_id}' missing for interviewer")
    route = routes[route_id]
    if "LLM_TIMEOUT_S" in cfg.model_fields_set:
        route = route.model_copy(update={"timeout_s": cfg.LLM_TIMEOUT_S})
    return route


def resolve_api_key(route: LlmRoute, cfg: Settings) -> Optional[str]:
    """Look up the route credential in settings first, then the process environment."""

    if not route.api_key_env:
        return None
    value = getattr(cfg, route.api_key_env, None)
    if value:
        return str(value)
    return os.getenv(route.api_key_env) or None
