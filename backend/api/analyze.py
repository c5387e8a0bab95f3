"""
============================================================
 JOBSCOUT v1.0.0 — api/analyze.py
 ------------------------------------------------------------
 POST /api/analyze  (multipart)
   cvFile, searchUrl, maxJobs, scoreThreshold,
   apifyToken?, apifyActor?

 The CV upload lives in a scoped temp file for the duration of
 extraction only. Any pipeline failure is answered with
 502 {"error": message}.
============================================================
"""

from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import urlparse

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import JSONResponse

from backend.core import config
from backend.core.artifacts import temporary_upload
from backend.core.extractor import extract_text
from backend.core.pipeline import run_analysis
from backend.core.security import validate_file
from backend.core.utils import log_event

router = APIRouter(prefix="/api", tags=["analyze"])


def _parse_int(raw: Optional[str], default: int, allow_zero: bool = False) -> int:
    """Lenient form-int parsing: blank or garbage (and zero, unless allowed) fall back to the default."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    if value == 0 and not allow_zero:
        return default
    return value


def _is_search_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/analyze")
async def analyze_endpoint(
    cvFile: Optional[UploadFile] = File(None),
    searchUrl: str = Form(""),
    maxJobs: Optional[str] = Form(None),
    scoreThreshold: Optional[str] = Form(None),
    apifyToken: Optional[str] = Form(None),
    apifyActor: Optional[str] = Form(None),
):
    if cvFile is None:
        return _error("No CV file uploaded.", 400)

    content = await cvFile.read()
    try:
        validate_file(cvFile.filename or "", content)
    except ValueError as e:
        return _error(str(e), 400)

    search_url = (searchUrl or "").strip()
    if not _is_search_url(search_url):
        return _error("searchUrl must be an http(s) job search URL.", 400)

    max_jobs = _parse_int(maxJobs, config.DEFAULT_MAX_JOBS)
    threshold = min(100, max(0, _parse_int(scoreThreshold, config.DEFAULT_SCORE_THRESHOLD, allow_zero=True)))

    log_event("analyze_start", {
        "file": cvFile.filename,
        "mime": cvFile.content_type,
        "search_url": search_url,
        "max_jobs": max_jobs,
        "threshold": threshold,
        "own_token": bool(apifyToken),
    })

    try:
        with temporary_upload(content, cvFile.filename or "") as cv_path:
            cv_text = await asyncio.to_thread(extract_text, cv_path, cvFile.content_type)

        result = await run_analysis(
            cv_text,
            search_url,
            max_jobs,
            threshold,
            api_token=apifyToken,
            actor_slug=apifyActor,
        )
    except Exception as e:
        log_event("analyze_failed", {"error_type": type(e).__name__, "error": str(e)})
        return _error(str(e) or type(e).__name__, 502)

    log_event("analyze_done", {"jobs": len(result.jobs)})
    return result.model_dump(by_alias=True)
