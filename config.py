import logging
import os

from dotenv import load_dotenv
from rich.logging import RichHandler

load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    return float(value) if value else default


OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "")

OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")
OPENAI_TEMPERATURE: float = _env_float("OPENAI_TEMPERATURE", 0.3)
OPENAI_MAX_TOKENS: int = _env_int("OPENAI_MAX_TOKENS", 2000)
APP_URL: str = os.getenv("APP_URL", "http://localhost:5000")
APP_TITLE = "YouTube Copyright Risk Analyzer"

# The YouTube search endpoint refuses maxResults above 50.
MAX_PAGE_SIZE = 50
MIN_PAGE_DELAY = 0.5
MIN_BATCH_DELAY = 1.0

TARGET_RESULTS: int = _env_int("TARGET_RESULTS", 100)
SEARCH_PAGE_SIZE: int = min(_env_int("SEARCH_PAGE_SIZE", MAX_PAGE_SIZE), MAX_PAGE_SIZE)
SEARCH_PAGE_DELAY: float = max(_env_float("SEARCH_PAGE_DELAY", MIN_PAGE_DELAY), MIN_PAGE_DELAY)
BATCH_SIZE: int = _env_int("BATCH_SIZE", 10)
BATCH_DELAY: float = max(_env_float("BATCH_DELAY", MIN_BATCH_DELAY), MIN_BATCH_DELAY)

TOP_PRIORITY_LIMIT: int = _env_int("TOP_PRIORITY_LIMIT", 10)
DEFAULT_DISCLAIMER: str = os.getenv(
    "DEFAULT_DISCLAIMER",
    "This is an automated risk-assessment, not legal advice; "
    "consult counsel before taking legal action.",
)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
PORT: int = _env_int("PORT", 5000)

_NOISY_LOGGERS = (
    "googleapiclient.discovery_cache",
    "httpx",
    "openai",
    "urllib3.connectionpool",
)


def has_youtube_api() -> bool:
    return bool(YOUTUBE_API_KEY)


def has_openai_api() -> bool:
    return bool(OPENAI_API_KEY)


def has_credentials() -> bool:
    """Both keys are needed for the live pipeline; anything less runs on mock data."""
    return has_youtube_api() and has_openai_api()


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.root.handlers.clear()
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True, markup=False)],
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
