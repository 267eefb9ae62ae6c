# app/config.py
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env sits next to pyproject.toml (project root = parent of app/)
ENV_FILE = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(ENV_FILE, override=False)


class Settings(BaseSettings):
    # ---- App / Infra ----
    APP_VERSION: str = "1.0.0"
    SERVICE_NAME: str = "trends-aggregator"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    # ---- Upstream HTTP ----
    HTTP_USER_AGENT: str = "TrendsAggregator/1.0 (AI Agent)"
    SOCIAL_USER_AGENT: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    # None = no timeout; a hung upstream blocks the request.
    HTTP_TIMEOUT_S: Optional[float] = None

    # ---- Sources ----
    SOCIAL_TRENDS_URL: str = "https://x.com/explore/tabs/trending"
    SOCIAL_TRENDS_PARSER: Literal["pattern", "soup"] = "pattern"
    HACKERNEWS_API_URL: str = "https://hacker-news.firebaseio.com/v0"
    COINGECKO_TRENDING_URL: str = "https://api.coingecko.com/api/v3/search/trending"

    # Ceiling for the per-story detail fan-out (callers never ask for more than 50).
    NEWS_DETAIL_MAX_CONCURRENCY: int = Field(default=50, ge=1)

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
