"""
JOBSCOUT • core/profiler.py
Turns extracted CV text into a structured CvProfile.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from backend.core import config
from backend.core.errors import ProfileParseError
from backend.core.llm import chat_json
from backend.core.models import CvProfile
from backend.core.utils import log_event, truncate

PROFILE_SCHEMA = {
    "type": "object",
    "properties": {
        "skills": {"type": "array", "items": {"type": "string"}},
        "profileSummary": {"type": "string"},
        "experienceHighlights": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["skills", "profileSummary", "experienceHighlights"],
    "additionalProperties": False,
}


def build_profile_prompt(cv_text: str) -> str:
    return f"""Extract the following from this CV text:
1. A list of top technical/professional skills (array of strings).
2. A brief profile summary (string).
3. Three key experience highlights (array of strings).

CV TEXT:
{truncate(cv_text, config.CV_TEXT_LIMIT)}
"""


async def profile_cv(cv_text: str) -> CvProfile:
    """Profile a CV. Raises ProfileParseError if the reply does not match the schema."""
    try:
        data = await chat_json(build_profile_prompt(cv_text), PROFILE_SCHEMA, "cv_profile", config.PROFILE_MODEL)
        profile = CvProfile.model_validate(data)
    except (json.JSONDecodeError, ValueError, ValidationError) as e:
        log_event("cv_profile_parse_fail", {"error": str(e)})
        raise ProfileParseError("Failed to parse CV profile from the completion service.") from e

    log_event("cv_profiled", {
        "skills": len(profile.skills),
        "highlights": len(profile.experience_highlights),
    })
    return profile
