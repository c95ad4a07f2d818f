"""Application settings and configuration management."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/interview.db")

    LLM_CONFIG_PATH: Optional[str] = None
    LLM_ROUTE: str = "gemini"
    LLM_TIMEOUT_S: float = Field(default=30.0, ge=0.1)
    GEMINI_API_KEY: Optional[str] = None

    ALLOW_REEVALUATION: bool = True
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_assignment=True)


settings = Settings()
