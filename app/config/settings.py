# app/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_GECKO_API_URL = "https://api.coingecko.com/api/v3"


def parse_str(value: str | None, default: Optional[str]) -> Optional[str]:
    if value is None or value.strip() == "":
        return default
    return value.strip()


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_timeout(value: str | None) -> Optional[float]:
    """
    Seconds as a positive float. Empty / unset / "none" / "0" means no deadline.
    """
    if value is None:
        return None

    v = value.strip().lower()
    if v in {"", "none", "off", "0"}:
        return None

    seconds = float(v)
    if seconds < 0:
        raise ValueError(f"Bad HTTP_TIMEOUT_S: {value}")
    return seconds


@dataclass(frozen=True)
class Settings:
    GECKO_API_URL: str
    GECKO_API_KEY: Optional[str]
    OPENAI_API_KEY: Optional[str]
    OPENAI_MODEL: str
    TOKEN_CATEGORY: str
    VS_CURRENCY: str
    TOKENS_PER_PAGE: int
    HTTP_TIMEOUT_S: Optional[float]
    LOG_LEVEL: str

    @staticmethod
    def from_env() -> "Settings":
        per_page = parse_int(os.getenv("TOKENS_PER_PAGE"), 100)
        if per_page < 1:
            raise ValueError(f"Bad TOKENS_PER_PAGE: {per_page}")

        return Settings(
            GECKO_API_URL=parse_str(os.getenv("GECKO_API_URL"), DEFAULT_GECKO_API_URL).rstrip("/"),
            GECKO_API_KEY=parse_str(os.getenv("GECKO_API_KEY"), None),
            OPENAI_API_KEY=parse_str(os.getenv("OPENAI_API_KEY"), None),
            OPENAI_MODEL=parse_str(os.getenv("OPENAI_MODEL"), "gpt-4o"),
            TOKEN_CATEGORY=parse_str(os.getenv("TOKEN_CATEGORY"), "ai-agents"),
            VS_CURRENCY=parse_str(os.getenv("VS_CURRENCY"), "usd").lower(),
            TOKENS_PER_PAGE=per_page,
            HTTP_TIMEOUT_S=parse_timeout(os.getenv("HTTP_TIMEOUT_S")),
            LOG_LEVEL=parse_str(os.getenv("LOG_LEVEL"), "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
