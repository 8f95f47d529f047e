"""Configuration management for Scout.

Uses pydantic-settings to load configuration from environment variables.
Only collaborator factories read these settings; the forensic core
(normalize, evidence, identity, merge) takes no configuration.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_env_file() -> Path | None:
    """Search for .env file in the working directory and its parents."""
    check_dir = Path.cwd()
    for _ in range(5):
        if (check_dir / ".env").exists():
            return check_dir / ".env"
        parent = check_dir.parent
        if parent == check_dir:
            break
        check_dir = parent

    return None


_env_file = _find_env_file()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_env_file) if _env_file else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================
    # Environment
    # =========================
    environment: Literal["development", "staging", "production"] = "development"

    # =========================
    # Apollo.io enrichment
    # =========================
    apollo_api_key: str = Field(default="", repr=False)
    apollo_base_url: str = "https://api.apollo.io/api/v1"
    apollo_timeout_seconds: float = 30.0
    apollo_people_limit: int = 5
    apollo_decision_maker_titles: list[str] = Field(
        default_factory=lambda: [
            "CEO",
            "CMO",
            "VP Marketing",
            "Marketing Director",
            "Brand Manager",
        ]
    )

    # =========================
    # Website scraper
    # =========================
    scraper_timeout_seconds: float = 10.0
    scraper_proxy_url: str = "https://api.allorigins.win/raw?url="
    scraper_proxy_timeout_seconds: float = 15.0
    scraper_user_agent: str = "Mozilla/5.0 (compatible; ScoutBot/1.0)"

    # =========================
    # Enrichment pipeline
    # =========================
    # Order is merge order: earlier layers win over later ones.
    enrichment_layers: list[str] = Field(default_factory=lambda: ["apollo", "scraper"])
    enrichment_concurrency: int = Field(default=5, ge=1)

    # =========================
    # Logging
    # =========================
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
