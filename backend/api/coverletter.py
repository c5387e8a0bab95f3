# ============================================================
#  JOBSCOUT v1.0.0 — Cover Letter Generation
#  ------------------------------------------------------------
#   • One free-text completion per job (hook → relevance → CTA)
#   • Letter rendered to a styled HTML page, then PDF (Chromium)
#   • PDF stored under the /download directory with a unique name
#   • CV context is re-supplied by the caller; nothing is kept
# ============================================================

from __future__ import annotations

import asyncio
from typing import List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from backend.core import config
from backend.core.artifacts import ArtifactStore
from backend.core.compiler import render_pdf
from backend.core.errors import CoverLetterError
from backend.core.llm import chat_text
from backend.core.models import CoverLetterRequest, CoverLetterResponse, CvContext, Job
from backend.core.utils import html_escape, log_event, truncate

router = APIRouter(prefix="/api", tags=["coverletter"])


# ============================================================
# ✍️ Prompt
# ============================================================

def build_cover_prompt(job: Job, cv_context: Optional[CvContext]) -> str:
    ctx = cv_context or CvContext()
    return f"""Write a professional cover letter for the following job application.

JOB: {job.job_title} at {job.company_name}
JOB CONTEXT: {truncate(job.description, config.COVER_DESC_LIMIT)}...

APPLICANT SKILLS: {', '.join(ctx.skills)}
APPLICANT EXPERIENCE: {'; '.join(ctx.experience_highlights)}

Tone: Professional, concise, enthusiastic. Max 300 words.
Structure:
1. Hook (why this company).
2. Relevance (skills match).
3. Call to Action.

Do not include placeholders like [Your Name] - use "The Applicant".
"""


# ============================================================
# 📄 HTML Document
# ============================================================

_LETTER_CSS = """
body { font-family: Helvetica, Arial, sans-serif; line-height: 1.6; padding: 40px; color: #333; }
h1 { font-size: 18px; margin-bottom: 20px; }
p { margin-bottom: 15px; }
.header { margin-bottom: 40px; border-bottom: 1px solid #eee; padding-bottom: 20px; }
"""


def letter_paragraphs(text: str) -> List[str]:
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


def build_letter_html(job: Job, letter_text: str) -> str:
    body = "\n".join(f"    <p>{html_escape(p)}</p>" for p in letter_paragraphs(letter_text))
    return f"""<html>
  <head>
    <meta charset="utf-8"/>
    <style>{_LETTER_CSS}</style>
  </head>
  <body>
    <div class="header">
      <strong>Application for {html_escape(job.job_title)}</strong><br/>
      {html_escape(job.company_name)}
    </div>
{body}
  </body>
</html>
"""


# ============================================================
# 🚀 Generation
# ============================================================

async def generate_cover_letter(
    job: Job,
    cv_context: Optional[CvContext],
    base_url: str,
    store: Optional[ArtifactStore] = None,
) -> str:
    """Generate, render and store a cover letter; returns its download URL."""
    store = store or ArtifactStore()
    try:
        await asyncio.to_thread(store.sweep_expired)
    except OSError as e:
        log_event("artifact_sweep_failed", {"error": str(e)})

    try:
        letter = await chat_text(build_cover_prompt(job, cv_context), config.COVERLETTER_MODEL)
    except Exception as e:
        log_event("coverletter_completion_fail", {"job_id": job.job_id, "error": str(e)})
        raise CoverLetterError() from e
    if not letter_paragraphs(letter):
        log_event("coverletter_empty", {"job_id": job.job_id})
        raise CoverLetterError()

    pdf_bytes = await render_pdf(build_letter_html(job, letter))
    if not pdf_bytes:
        raise CoverLetterError()

    name = store.write(f"cover_letter_{job.company_name}", pdf_bytes)
    root = (config.PUBLIC_BASE_URL or base_url or "").rstrip("/")
    url = f"{root}/download/{name}"

    log_event("coverletter_generated", {
        "job_id": job.job_id,
        "company": job.company_name,
        "role": job.job_title,
        "chars": len(letter),
        "file": name,
    })
    return url


# ============================================================
# 🌐 Endpoint
# ============================================================

@router.post("/generate-cover")
async def generate_cover_endpoint(payload: CoverLetterRequest, request: Request):
    try:
        url = await generate_cover_letter(payload.job, payload.cv_context, str(request.base_url))
    except Exception as e:
        log_event("coverletter_failed", {"job_id": payload.job.job_id, "error": str(e)})
        return JSONResponse({"error": "Failed to generate cover letter."}, status_code=500)
    return CoverLetterResponse(cover_letter_url=url).model_dump(by_alias=True)
