"""
============================================================
 JOBSCOUT • core/config.py
 ------------------------------------------------------------
 Global configuration for backend constants, environment
 variables, and directory paths.

 Version : 1.0.0
============================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv


# ============================================================
# 🌍 Environment Setup
# ============================================================

_env_loaded = (
    load_dotenv(dotenv_path=Path(__file__).resolve().parents[2] / ".env")
    or load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")
    or load_dotenv()
)


def _clean_env(val: str | None, default: str = "") -> str:
    v = (val if val is not None else default)
    return str(v).strip().strip('"').strip("'")


def _getenv_clean(name: str, default: str = "") -> str:
    return _clean_env(os.getenv(name), default)


def _getenv_int(name: str, default: int) -> int:
    try:
        return int(_getenv_clean(name, str(default)))
    except ValueError:
        return default


def _getenv_float(name: str, default: float) -> float:
    try:
        return float(_getenv_clean(name, str(default)))
    except ValueError:
        return default


# ============================================================
# 📁 Directory Structure (portable / any machine)
# ============================================================

BASE_DIR = Path(__file__).resolve().parents[2]
if not (BASE_DIR / "backend").exists():
    candidate = Path(__file__).resolve().parents[1]
    BASE_DIR = candidate if (candidate / "backend").exists() else Path.cwd()

BACKEND_DIR = BASE_DIR / "backend"


# Default to project-local backend/data/*; allow absolute overrides via .env
def _resolve_env_path(var_name: str, default_path: Path) -> Path:
    raw = _getenv_clean(var_name, "")
    if not raw:
        return default_path
    p = Path(os.path.expanduser(raw))
    if not p.is_absolute():
        p = BASE_DIR / p
    return p


DATA_DIR = _resolve_env_path("DATA_DIR", BACKEND_DIR / "data")
LOGS_DIR = DATA_DIR / "logs"

# Rendered cover letters; this directory is served at /download.
ARTIFACT_DIR = _resolve_env_path("ARTIFACT_DIR", DATA_DIR / "artifacts")
# Short-lived CV uploads; never served.
UPLOAD_DIR = _resolve_env_path("UPLOAD_DIR", DATA_DIR / "uploads")

for d in (DATA_DIR, LOGS_DIR, ARTIFACT_DIR, UPLOAD_DIR):
    d.mkdir(parents=True, exist_ok=True)

LOG_PATH = LOGS_DIR / "events.jsonl"
LOG_PATH.touch(exist_ok=True)


# ============================================================
# ⚙️ Core Settings
# ============================================================

APP_NAME = "JOBSCOUT"
APP_VERSION = "1.0.0"
DEBUG_MODE = _getenv_clean("DEBUG", "false").lower() == "true"

HOST = _getenv_clean("JOBSCOUT_HOST", "127.0.0.1")
PORT = _getenv_int("JOBSCOUT_PORT", 3000)
# Overrides the request base URL when building download links.
PUBLIC_BASE_URL = _getenv_clean("PUBLIC_BASE_URL", "")

MAX_UPLOAD_MB = _getenv_int("MAX_UPLOAD_MB", 10)
ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx", ".txt", ".md"}

DEFAULT_MAX_JOBS = _getenv_int("DEFAULT_MAX_JOBS", 50)
DEFAULT_SCORE_THRESHOLD = _getenv_int("DEFAULT_SCORE_THRESHOLD", 60)


# ============================================================
# 🤖 Completion service (OpenAI)
# ============================================================

OPENAI_API_KEY = _getenv_clean("OPENAI_API_KEY", "")

DEFAULT_MODEL = _getenv_clean("DEFAULT_MODEL", "gpt-4o-mini")
PROFILE_MODEL = _getenv_clean("PROFILE_MODEL", DEFAULT_MODEL)
SCORING_MODEL = _getenv_clean("SCORING_MODEL", DEFAULT_MODEL)
COVERLETTER_MODEL = _getenv_clean("COVERLETTER_MODEL", DEFAULT_MODEL)

# Prompt input limits (characters)
CV_TEXT_LIMIT = 10_000
JOB_DESC_LIMIT = 3_000
COVER_DESC_LIMIT = 1_000

# Max completion calls in flight while scoring one analysis
SCORE_CONCURRENCY = max(1, _getenv_int("SCORE_CONCURRENCY", 5))

# Lower edges of the scoring bands; anything below "potential" is a poor match
SCORE_RUBRIC = {
    "perfect": _getenv_int("SCORE_RUBRIC_PERFECT", 90),
    "good": _getenv_int("SCORE_RUBRIC_GOOD", 70),
    "potential": _getenv_int("SCORE_RUBRIC_POTENTIAL", 50),
}


# ============================================================
# 🕸️ Listing source (Apify)
# ============================================================

APIFY_API_TOKEN = _getenv_clean("APIFY_API_TOKEN", "")
APIFY_ACTOR_SLUG = _getenv_clean("APIFY_ACTOR_SLUG", "curious_coder~linkedin-jobs-scraper")
APIFY_BASE_URL = _getenv_clean("APIFY_BASE_URL", "https://api.apify.com/v2").rstrip("/")

APIFY_MAX_ITEMS = _getenv_int("APIFY_MAX_ITEMS", 100)
APIFY_POLL_INTERVAL_SEC = _getenv_float("APIFY_POLL_INTERVAL_SEC", 5.0)
APIFY_POLL_MAX_ATTEMPTS = _getenv_int("APIFY_POLL_MAX_ATTEMPTS", 120)
APIFY_POLL_TIMEOUT_SEC = _getenv_float("APIFY_POLL_TIMEOUT_SEC", 900.0)
APIFY_TIMEOUT_SEC = _getenv_float("APIFY_TIMEOUT_SEC", 60.0)


# ============================================================
# 📄 Cover letter artifacts
# ============================================================

PDF_TTL_SECONDS = _getenv_int("PDF_TTL_SECONDS", 3600)
ARTIFACT_SWEEP_INTERVAL_SEC = _getenv_int("ARTIFACT_SWEEP_INTERVAL_SEC", 300)


if DEBUG_MODE:
    if not OPENAI_API_KEY:
        print("[JOBSCOUT] ⚠️ OPENAI_API_KEY not found in environment.")
    if not APIFY_API_TOKEN:
        print("[JOBSCOUT] ⚠️ APIFY_API_TOKEN not set. Callers must supply apifyToken per request.")


# ============================================================
# 📊 Diagnostics
# ============================================================

if __name__ == "__main__":
    print("=========== JOBSCOUT CONFIG ===========")
    print(f"APP_NAME              : {APP_NAME}")
    print(f"VERSION               : {APP_VERSION}")
    print(f"BASE_DIR              : {BASE_DIR}")
    print(f"OPENAI_API_KEY_LEN    : {len(OPENAI_API_KEY) if OPENAI_API_KEY else 0}")
    print(f"APIFY_API_TOKEN_LEN   : {len(APIFY_API_TOKEN) if APIFY_API_TOKEN else 0}")
    print(f"APIFY_ACTOR_SLUG      : {APIFY_ACTOR_SLUG}")
    print(f"DEFAULT_MODEL         : {DEFAULT_MODEL}")
    print(f"SCORE_CONCURRENCY     : {SCORE_CONCURRENCY}")
    print(f"ARTIFACT_DIR          : {ARTIFACT_DIR}")
    print(f"PDF_TTL_SECONDS       : {PDF_TTL_SECONDS}")
