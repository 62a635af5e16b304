"""Run settings loaded from environment variables (optionally via a .env file)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigError
from .guard import DEFAULT_FIRST_WORD_CAP
from .history import DEFAULT_HISTORY_LIMIT
from .summarizers import GenerateOptions

DEFAULT_RSS_URL = "https://www.boston.com/feed/bdc-msn-rss"
DEFAULT_OUTPUT_PATH = "data/summaries.json"


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if value < 0:
        raise ConfigError(f"{name} must be >= 0, got {value}")
    return value


@dataclass
class Settings:
    provider: str = "openai"
    model: Optional[str] = None
    api_key: Optional[str] = None
    rss_url: str = DEFAULT_RSS_URL
    max_articles: int = 16
    pacing_sec: float = 0.3
    history_limit: int = DEFAULT_HISTORY_LIMIT
    first_word_cap: int = DEFAULT_FIRST_WORD_CAP
    output_path: str = DEFAULT_OUTPUT_PATH
    fetch_timeout: float = 10.0
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        provider = (os.getenv("GENERATION_PROVIDER") or "openai").strip().lower()
        if provider == "openai":
            model = os.getenv("OPENAI_MODEL", "gpt-4o")
            api_key = os.getenv("OPENAI_API_KEY")
        elif provider in {"gemini", "google", "googleai"}:
            model = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
            api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
        else:
            model, api_key = None, None

        seed_raw = os.getenv("TEASER_SEED")
        seed = _env_int("TEASER_SEED", 0) if seed_raw and seed_raw.strip() else None

        return cls(
            provider=provider,
            model=model,
            api_key=api_key,
            rss_url=os.getenv("RSS_URL") or DEFAULT_RSS_URL,
            max_articles=_env_int("MAX_ARTICLES", 16, minimum=1),
            pacing_sec=_env_float("PACING_SECONDS", 0.3),
            history_limit=_env_int("HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT),
            first_word_cap=_env_int("FIRST_WORD_CAP", DEFAULT_FIRST_WORD_CAP, minimum=1),
            output_path=os.getenv("OUTPUT_PATH") or DEFAULT_OUTPUT_PATH,
            fetch_timeout=_env_float("FETCH_TIMEOUT", 10.0),
            seed=seed,
        )

    def validate(self) -> None:
        """Raise ConfigError for anything that must abort the run up front."""
        if self.provider == "openai" and not self.api_key:
            raise ConfigError("Missing OPENAI_API_KEY env var.")
        if self.provider in {"gemini", "google", "googleai"} and not self.api_key:
            raise ConfigError("Missing GOOGLE_API_KEY (or GEMINI_API_KEY) env var.")
        if self.provider not in {"openai", "gemini", "google", "googleai", "none", "null", "offline"}:
            raise ConfigError(f"Unknown GENERATION_PROVIDER: {self.provider}")
        if not self.rss_url:
            raise ConfigError("RSS_URL is empty.")

    def generate_options(self) -> GenerateOptions:
        return GenerateOptions(provider=self.provider, model=self.model, api_key=self.api_key)
