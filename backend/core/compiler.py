"""
JOBSCOUT • core/compiler.py
HTML → PDF renderer backed by headless Chromium (playwright).
Returns PDF bytes on success, None on failure (details go to the event log).
"""

from __future__ import annotations

import asyncio

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from backend.core.utils import log_event

RENDER_TIMEOUT_SEC = 90
PDF_MARGIN = {"top": "0.5in", "right": "0.5in", "bottom": "0.5in", "left": "0.5in"}


async def _render(html: str) -> bytes:
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=["--no-sandbox"])
        try:
            page = await browser.new_page()
            await page.set_content(html, wait_until="load")
            return await page.pdf(format="Letter", margin=PDF_MARGIN, print_background=True)
        finally:
            await browser.close()


# ============================================================
# 🧩 Safe PDF Rendering Utility
# ============================================================
async def render_pdf(html: str) -> bytes | None:
    """
    Render an HTML document into PDF bytes.

    - Launches a fresh sandbox-less headless Chromium per call
    - Bounded by RENDER_TIMEOUT_SEC
    - Browser is always closed, even when rendering fails
    """
    log_event("pdf_render_start", {"html_chars": len(html or "")})
    try:
        pdf_bytes = await asyncio.wait_for(_render(html), timeout=RENDER_TIMEOUT_SEC)
    except asyncio.TimeoutError:
        log_event("pdf_render_timeout", {"limit_seconds": RENDER_TIMEOUT_SEC})
        return None
    except PlaywrightError as e:
        log_event("pdf_render_error", {"error": str(e)})
        return None

    if not pdf_bytes:
        log_event("pdf_render_empty", {})
        return None

    log_event("pdf_built", {"size_kb": round(len(pdf_bytes) / 1024, 1)})
    return pdf_bytes
