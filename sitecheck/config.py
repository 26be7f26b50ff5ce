"""Process-wide settings for the site-check service.

Values are read once from environment variables (optionally seeded from a
``.env`` file in the project root) and frozen for the lifetime of the
process.  Routers receive them through ``Depends(get_settings)``.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() == "true"


@dataclass(frozen=True)
class Settings:
    # ------------------------------------------------------------------
    # AI summarization
    # ------------------------------------------------------------------
    use_ai: bool = field(default_factory=lambda: _env_flag("USE_AI"))
    openai_api_key: str = field(
        default_factory=lambda: os.environ.get("OPENAI_API_KEY", ""), repr=False
    )
    openai_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_MODEL", "gpt-3.5-turbo")
    )
    openai_base_url: str = field(
        default_factory=lambda: os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1")
    )

    # ------------------------------------------------------------------
    # Time budgets (seconds)
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "12"))
    )
    fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("FETCH_TIMEOUT", "10"))
    )
    ai_timeout: float = field(
        default_factory=lambda: float(os.environ.get("AI_TIMEOUT", "8"))
    )

    rate_limit: str = field(
        default_factory=lambda: os.environ.get("RATE_LIMIT", "10/minute")
    )


@lru_cache
def get_settings() -> Settings:
    """Return the settings singleton, built on first use."""
    return Settings()


def mask_key(key: str) -> str:
    """Shorten *key* to its first and last four characters for logging."""
    if len(key) <= 8:
        return key
    return f"{key[:4]}…{key[-4:]}"
