# ============================================================
#  JOBSCOUT v1.0.0 — Utility & Diagnostics API
#  ------------------------------------------------------------
#  Endpoints:
#   • Ping (distinct from /health)
#   • Version + model defaults
#   • Safe config subset (no secrets, only whether they are set)
# ============================================================

from __future__ import annotations

import platform
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter

from backend.core import config
from backend.core.utils import utc_now_iso

router = APIRouter(prefix="/api/utils", tags=["utils"])


@router.get("/ping")
async def ping():
    """Lightweight liveness probe (distinct from /health)."""
    return {
        "status": "ok",
        "service": "JobScout Core API",
        "time": utc_now_iso(),
        "platform": platform.system(),
        "python": platform.python_version(),
    }


@router.get("/version")
async def get_version():
    """Return the current version and model defaults."""
    return {
        "version": config.APP_VERSION,
        "default_model": config.DEFAULT_MODEL,
        "profile_model": config.PROFILE_MODEL,
        "scoring_model": config.SCORING_MODEL,
        "coverletter_model": config.COVERLETTER_MODEL,
    }


@router.get("/config")
async def get_config():
    """Expose a safe subset of configuration variables for frontend diagnostics."""
    safe_keys = [
        "APP_VERSION",
        "DEFAULT_MODEL",
        "APIFY_ACTOR_SLUG",
        "APIFY_MAX_ITEMS",
        "APIFY_POLL_INTERVAL_SEC",
        "APIFY_POLL_MAX_ATTEMPTS",
        "SCORE_CONCURRENCY",
        "SCORE_RUBRIC",
        "DEFAULT_MAX_JOBS",
        "DEFAULT_SCORE_THRESHOLD",
        "PDF_TTL_SECONDS",
        "MAX_UPLOAD_MB",
    ]
    safe_data: Dict[str, Any] = {}
    for k in safe_keys:
        v = getattr(config, k, None)
        safe_data[k] = str(v) if isinstance(v, Path) else v
    safe_data["OPENAI_API_KEY_SET"] = bool(config.OPENAI_API_KEY)
    safe_data["APIFY_API_TOKEN_SET"] = bool(config.APIFY_API_TOKEN)
    return {"config": safe_data}
