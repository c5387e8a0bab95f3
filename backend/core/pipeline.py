"""
JOBSCOUT • core/pipeline.py
Analysis orchestration: scrape -> normalize -> profile -> score.
"""

from __future__ import annotations

from typing import Optional

from backend.core.apify import scrape_jobs
from backend.core.models import AnalyzedResponse
from backend.core.normalize import normalize_jobs
from backend.core.profiler import profile_cv
from backend.core.scorer import score_jobs
from backend.core.utils import log_event


async def run_analysis(
    cv_text: str,
    search_url: str,
    max_jobs: int,
    threshold: float,
    api_token: Optional[str] = None,
    actor_slug: Optional[str] = None,
) -> AnalyzedResponse:
    raw_jobs = await scrape_jobs(search_url, max_jobs, api_token, actor_slug)
    jobs = normalize_jobs(raw_jobs)
    log_event("jobs_normalized", {"raw": len(raw_jobs), "jobs": len(jobs)})

    profile = await profile_cv(cv_text)
    ranked = await score_jobs(jobs, profile, threshold)

    return AnalyzedResponse(
        skills=profile.skills,
        profile_summary=profile.profile_summary,
        experience_highlights=profile.experience_highlights,
        jobs=ranked,
    )
