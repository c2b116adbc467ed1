"""Configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import NamedTuple

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# Structuring service (OpenRouter speaks the OpenAI chat-completions protocol)
OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")
OPENROUTER_BASE_URL: str = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
MODEL_NAME: str = os.getenv("MODEL_NAME", "anthropic/claude-3.5-sonnet")
APP_REFERER: str = os.getenv("APP_REFERER", "http://localhost:8501")
APP_TITLE: str = os.getenv("APP_TITLE", "Job Data Extractor")

# HTTP / fetch settings
FETCH_TIMEOUT_SECONDS: float = float(os.getenv("FETCH_TIMEOUT_SECONDS", "10"))
USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# Structuring call
STRUCTURING_TIMEOUT_SECONDS: float = float(os.getenv("STRUCTURING_TIMEOUT_SECONDS", "60"))
STRUCTURING_TEMPERATURE: float = 0.3  # extraction, not generation
STRUCTURING_MAX_TOKENS: int = 2000
PROBE_MAX_TOKENS: int = 1
MAX_CONTENT_CHARS: int = 4000  # prompt input limit

# Job-introduction generation
GENERATION_TEMPERATURE: float = 0.7
GENERATION_MAX_TOKENS: int = 1000
GENERATION_TITLE: str = os.getenv("GENERATION_TITLE", "Job Description Generator")
FALLBACK_EXCERPT_CHARS: int = 1000  # raw content kept on degraded records

# Batch pacing
BATCH_DELAY_SECONDS: float = float(os.getenv("BATCH_DELAY_SECONDS", "1.0"))

# Report
REPORT_TIMEZONE: str = os.getenv("REPORT_TIMEZONE", "Asia/Tokyo")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


class ContentSelector(NamedTuple):
    """A named candidate region for the main text of a page."""

    name: str
    css: str


# Removed before any text is read. Order is irrelevant.
NOISE_SELECTORS: tuple = (
    "script",
    "style",
    "nav",
    "header",
    "footer",
    "aside",
    ".advertisement",
    ".ads",
    ".sidebar",
)

# Evaluated in order; the longest text wins, ties keep the earlier entry.
CONTENT_SELECTORS: tuple = (
    ContentSelector("main", "main"),
    ContentSelector("content", ".content"),
    ContentSelector("main_content", ".main-content"),
    ContentSelector("job_description", ".job-description"),
    ContentSelector("job_detail", ".job-detail"),
    ContentSelector("post_content", ".post-content"),
    ContentSelector("article", "article"),
    ContentSelector("entry_content", ".entry-content"),
)

MAX_SUB_HEADINGS: int = 5
