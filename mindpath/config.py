"""Runtime settings loaded from the environment (and `.env` when present)."""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-3-pro-preview"
DEFAULT_TIMEOUT = 90


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    timeout: int = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def load_settings(use_dotenv: bool = True) -> Settings:
    """Build settings from environment variables.

    GEMINI_API_KEY is preferred; API_KEY is accepted as a fallback.
    """
    if use_dotenv:
        load_dotenv()

    timeout_raw = os.environ.get("MINDPATH_TIMEOUT", "")
    try:
        timeout = int(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError:
        raise ValueError(f"MINDPATH_TIMEOUT must be an integer, got {timeout_raw!r}") from None

    return Settings(
        api_key=os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or None,
        model=os.environ.get("MINDPATH_MODEL") or DEFAULT_MODEL,
        timeout=timeout,
        log_level=os.environ.get("MINDPATH_LOG_LEVEL", "INFO").upper(),
    )
