"""
JOBSCOUT • core/models.py
Wire models shared by the pipeline and the routers.

Python code uses snake_case; JSON uses the camelCase aliases
(jobId, companyName, profileSummary, ...).
"""

from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CvProfile(_Wire):
    skills: List[str]
    profile_summary: str
    experience_highlights: List[str]


class Job(_Wire):
    job_id: str = ""
    company_name: str = "Unknown Company"
    company_logo: Optional[str] = None
    job_title: str = "Untitled Role"
    job_url: str = ""
    apply_url: Optional[str] = None
    description: str = ""
    scraped_at: str = ""
    score: Optional[float] = None
    verdict: Optional[str] = None


class ScoreResult(_Wire):
    score: float
    verdict: str

    @field_validator("score")
    @classmethod
    def _clamp(cls, v: float) -> float:
        v = float(v)
        if not math.isfinite(v):
            raise ValueError("score must be a finite number")
        return max(0.0, min(100.0, v))


class AnalyzedResponse(_Wire):
    skills: List[str]
    profile_summary: str
    experience_highlights: List[str]
    jobs: List[Job] = Field(default_factory=list)


class CvContext(_Wire):
    skills: List[str] = Field(default_factory=list)
    experience_highlights: List[str] = Field(default_factory=list)


class CoverLetterRequest(_Wire):
    job: Job
    cv_context: Optional[CvContext] = None


class CoverLetterResponse(_Wire):
    cover_letter_url: str
