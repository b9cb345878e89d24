"""Configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


# API keys: never hardcode
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")
LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.2"))

# Root level for get_logger when no explicit level is passed
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Cache backend: empty REDIS_URL keeps specs in process memory
REDIS_URL: str = os.getenv("REDIS_URL", "")
SEARCH_SPEC_CACHE_TTL_SECONDS: Optional[int] = _optional_int("SEARCH_SPEC_CACHE_TTL_SECONDS")

# Generation retry policy (attempts = retries + 1)
SEARCH_SPEC_MAX_RETRIES: int = int(os.getenv("SEARCH_SPEC_MAX_RETRIES", "2"))
SEARCH_SPEC_BACKOFF_BASE_SECONDS: float = float(os.getenv("SEARCH_SPEC_BACKOFF_BASE_SECONDS", "1.0"))

# Search spec limits
MAX_RESULTS_PER_PLATFORM: int = 100

# Normalization limits
PRIMARY_SKILL_LIMIT: int = 10
MAX_HIGHLIGHTS_PER_EXPERIENCE: int = 10
MIN_HIGHLIGHT_LENGTH: int = 6

# LLM input bounds
LLM_SECONDARY_SKILL_LIMIT: int = 10
LLM_EXPERIENCE_LIMIT: int = 5

# Preference defaults
DEFAULT_PLATFORMS: list = ["linkedin", "upwork"]
DEFAULT_CURRENCY: str = "USD"
DEFAULT_TIGHTNESS: int = 3
