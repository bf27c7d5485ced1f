from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


@dataclass(frozen=True)
class Settings:
    # Fetch collaborator
    advocates_api_url: str
    advocates_file: str
    advocate_source: str  # advocates_api | advocates_file
    request_timeout_seconds: int

    # Search tuning
    search_debounce_ms: int
    search_threshold: float
    search_min_match_chars: int

    log_level: str

    # Core/runtime
    run_env: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    threshold = float(os.getenv("SEARCH_THRESHOLD", "0.3"))
    if not 0.0 <= threshold <= 1.0:
        raise ValueError("SEARCH_THRESHOLD must be between 0 and 1")
    return Settings(
        advocates_api_url=os.getenv("ADVOCATES_API_URL", "http://localhost:3000/api/advocates"),
        advocates_file=os.getenv("ADVOCATES_FILE", "advocates.json"),
        advocate_source=os.getenv("ADVOCATE_SOURCE", "advocates_api"),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT", "30")),
        search_debounce_ms=int(os.getenv("SEARCH_DEBOUNCE_MS", "300")),
        search_threshold=threshold,
        search_min_match_chars=int(os.getenv("SEARCH_MIN_MATCH_CHARS", "2")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
    )
