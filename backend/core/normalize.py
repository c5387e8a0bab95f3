"""
JOBSCOUT • core/normalize.py
Maps provider-specific listing records onto the canonical Job shape.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set

from backend.core.models import Job
from backend.core.utils import log_event, utc_today_iso

# First truthy alias wins.
FIELD_ALIASES: Dict[str, Sequence[str]] = {
    "job_id": ("id", "jobId", "job_id"),
    "company_name": ("companyName", "company", "company_name"),
    "company_logo": ("companyLogo", "logo", "company_logo"),
    "job_title": ("title", "jobTitle", "job_title"),
    "job_url": ("url", "jobUrl", "link"),
    "apply_url": ("applyUrl", "apply_url"),
    "description": ("description", "descriptionText", "text"),
    "scraped_at": ("postedAt", "postedDate", "publishedAt"),
}


def _pick(raw: Mapping[str, Any], field: str) -> Optional[str]:
    for key in FIELD_ALIASES[field]:
        value = raw.get(key)
        if value:
            return str(value)
    return None


def normalize_job(raw: Mapping[str, Any]) -> Job:
    """Build a Job from one raw listing, filling every missing field with its default."""
    job_url = _pick(raw, "job_url") or ""
    return Job(
        job_id=_pick(raw, "job_id") or str(uuid.uuid4()),
        company_name=_pick(raw, "company_name") or "Unknown Company",
        company_logo=_pick(raw, "company_logo"),
        job_title=_pick(raw, "job_title") or "Untitled Role",
        job_url=job_url,
        apply_url=_pick(raw, "apply_url") or job_url,
        description=_pick(raw, "description") or "",
        scraped_at=_pick(raw, "scraped_at") or utc_today_iso(),
    )


def normalize_jobs(raws: Iterable[Any]) -> List[Job]:
    """Normalize a batch, skipping non-mapping records and repeated job ids."""
    jobs: List[Job] = []
    seen: Set[str] = set()
    skipped = 0
    for raw in raws:
        if not isinstance(raw, Mapping):
            skipped += 1
            continue
        job = normalize_job(raw)
        if job.job_id in seen:
            skipped += 1
            continue
        seen.add(job.job_id)
        jobs.append(job)
    if skipped:
        log_event("normalize_skipped", {"skipped": skipped, "kept": len(jobs)})
    return jobs
