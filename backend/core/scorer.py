"""
JOBSCOUT • core/scorer.py
Scores each job's fit against a CV profile with bounded concurrency.

A failure on one job (network, bad JSON, schema mismatch) drops that
job only. Survivors below the threshold are discarded and the rest are
returned sorted by descending score (stable on input order).
"""

from __future__ import annotations

import asyncio
import json
from typing import List, Optional, Sequence

from backend.core import config
from backend.core.llm import chat_json
from backend.core.models import CvProfile, Job, ScoreResult
from backend.core.utils import benchmark, log_event, truncate

SCORE_SCHEMA = {
    "type": "object",
    "properties": {
        "score": {"type": "number"},
        "verdict": {"type": "string"},
    },
    "required": ["score", "verdict"],
    "additionalProperties": False,
}


def _rubric_text() -> str:
    r = config.SCORE_RUBRIC
    return (
        f"- {r['perfect']}-100: Perfect match (skills, seniority, industry).\n"
        f"- {r['good']}-{r['perfect'] - 1}: Good match (missing minor skills).\n"
        f"- {r['potential']}-{r['good'] - 1}: Potential match (transferable skills).\n"
        f"- <{r['potential']}: Poor match."
    )


def build_scoring_prompt(job: Job, profile: CvProfile) -> str:
    return f"""You are a recruiter. Compare this candidate's profile to the job description.

CANDIDATE SKILLS: {json.dumps(profile.skills, ensure_ascii=False)}
CANDIDATE SUMMARY: {profile.profile_summary}

JOB TITLE: {job.job_title}
JOB DESCRIPTION: {truncate(job.description, config.JOB_DESC_LIMIT)}

Rubric:
{_rubric_text()}

Return JSON:
{{
  "score": number (0-100),
  "verdict": string (2-4 sentences explaining the score)
}}
"""


async def score_job(job: Job, profile: CvProfile) -> Job:
    """Score one job; returns a copy carrying score and verdict."""
    data = await chat_json(build_scoring_prompt(job, profile), SCORE_SCHEMA, "job_score", config.SCORING_MODEL)
    result = ScoreResult.model_validate(data)
    return job.model_copy(update={"score": result.score, "verdict": result.verdict})


async def score_jobs(
    jobs: Sequence[Job],
    profile: CvProfile,
    threshold: float,
    concurrency: Optional[int] = None,
) -> List[Job]:
    limit = max(1, int(concurrency or config.SCORE_CONCURRENCY))
    sem = asyncio.Semaphore(limit)

    async def _bounded(job: Job) -> Optional[Job]:
        async with sem:
            try:
                return await score_job(job, profile)
            except Exception as e:
                log_event("job_score_failed", {"job_id": job.job_id, "error": str(e)})
                return None

    log_event("job_scoring_start", {"jobs": len(jobs), "concurrency": limit, "threshold": threshold})
    with benchmark("score_jobs"):
        results = await asyncio.gather(*[_bounded(j) for j in jobs])

    scored = [j for j in results if j is not None]
    kept = [j for j in scored if j.score is not None and j.score >= threshold]
    kept.sort(key=lambda j: j.score, reverse=True)

    log_event("job_scoring_done", {
        "scored": len(scored),
        "failed": len(jobs) - len(scored),
        "kept": len(kept),
    })
    return kept
