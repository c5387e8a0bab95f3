"""
JOBSCOUT • core/apify.py
Listing source adapter for Apify actors.

Starts an actor run for a job-search URL, polls it until it leaves
the RUNNING/READY states (bounded by attempts and wall clock), then
returns the run's dataset items verbatim.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import httpx

from backend.core import config
from backend.core.errors import (
    MissingCredentialError,
    SourceRequestError,
    SourceRunFailedError,
    SourceStartError,
    SourceTimeoutError,
)
from backend.core.utils import log_event

PENDING_STATUSES = {"RUNNING", "READY"}
SUCCEEDED = "SUCCEEDED"

Sleep = Callable[[float], Awaitable[Any]]


def resolve_credentials(api_token: Optional[str] = None, actor_slug: Optional[str] = None) -> Tuple[str, str]:
    """Caller-supplied credentials win; fall back to process configuration."""
    token = (api_token or "").strip() or config.APIFY_API_TOKEN
    actor = (actor_slug or "").strip() or config.APIFY_ACTOR_SLUG
    if not token:
        raise MissingCredentialError(
            "Missing Apify API Token. Provide it in the UI settings or .env (APIFY_API_TOKEN)."
        )
    return token, actor


def effective_item_count(max_items: int) -> int:
    return max(1, min(int(max_items), config.APIFY_MAX_ITEMS))


def _auth(token: str) -> Dict[str, str]:
    # Header, not query string: URLs end up in httpx error messages.
    return {"Authorization": f"Bearer {token}"}


def _check(resp: httpx.Response, what: str) -> None:
    if not resp.is_success:
        log_event("apify_request_failed", {"what": what, "status": resp.status_code})
        raise SourceRequestError(what, resp.status_code, resp.text)


def _run_data(resp: httpx.Response) -> Dict[str, Any]:
    body = resp.json()
    data = body.get("data") if isinstance(body, dict) else None
    return data if isinstance(data, dict) else {}


async def _wait_for_run(
    client: httpx.AsyncClient,
    actor: str,
    run_id: str,
    token: str,
    status: str,
    sleep: Sleep,
) -> str:
    attempts = 0
    deadline = time.monotonic() + config.APIFY_POLL_TIMEOUT_SEC
    while status in PENDING_STATUSES:
        if attempts >= config.APIFY_POLL_MAX_ATTEMPTS or time.monotonic() >= deadline:
            log_event("apify_poll_timeout", {"run_id": run_id, "attempts": attempts, "status": status})
            raise SourceTimeoutError(
                f"Apify run {run_id} did not finish after {attempts} polls (last status: {status})."
            )
        await sleep(config.APIFY_POLL_INTERVAL_SEC)
        attempts += 1
        resp = await client.get(f"/acts/{actor}/runs/{run_id}", headers=_auth(token))
        _check(resp, "run status")
        status = str(_run_data(resp).get("status") or "")
        log_event("apify_run_status", {"run_id": run_id, "status": status, "attempt": attempts})
    return status


async def _scrape(
    client: httpx.AsyncClient,
    search_url: str,
    items: int,
    token: str,
    actor: str,
    sleep: Sleep,
) -> List[Dict[str, Any]]:
    log_event("apify_run_start", {"actor": actor, "search_url": search_url, "max_items": items})
    start = await client.post(
        f"/acts/{actor}/runs",
        headers=_auth(token),
        json={"startUrls": [{"url": search_url}], "maxItems": items, "limit": items},
    )
    if not start.is_success:
        raise SourceStartError(start.text)

    run = _run_data(start)
    run_id = str(run.get("id") or "")
    dataset_id = str(run.get("defaultDatasetId") or "")
    log_event("apify_run_started", {"run_id": run_id, "dataset_id": dataset_id})

    status = await _wait_for_run(client, actor, run_id, token, str(run.get("status") or "RUNNING"), sleep)
    if status != SUCCEEDED:
        raise SourceRunFailedError(status)

    resp = await client.get(
        f"/datasets/{dataset_id}/items",
        params={"limit": config.APIFY_MAX_ITEMS},
        headers=_auth(token),
    )
    _check(resp, "dataset items")
    records = resp.json()
    if not isinstance(records, list):
        log_event("apify_items_unexpected", {"dataset_id": dataset_id, "type": type(records).__name__})
        return []
    log_event("apify_items_fetched", {"dataset_id": dataset_id, "count": len(records)})
    return records


async def scrape_jobs(
    search_url: str,
    max_items: int,
    api_token: Optional[str] = None,
    actor_slug: Optional[str] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    sleep: Sleep = asyncio.sleep,
) -> List[Dict[str, Any]]:
    """
    Scrape raw listing records for `search_url`.

    Raises MissingCredentialError, SourceStartError, SourceRequestError,
    SourceRunFailedError or SourceTimeoutError. A caller-provided client
    must already point at the Apify API base URL.
    """
    token, actor = resolve_credentials(api_token, actor_slug)
    items = effective_item_count(max_items)

    if client is not None:
        return await _scrape(client, search_url, items, token, actor, sleep)

    async with httpx.AsyncClient(
        base_url=config.APIFY_BASE_URL,
        timeout=httpx.Timeout(config.APIFY_TIMEOUT_SEC),
        headers={"Accept": "application/json"},
    ) as own_client:
        return await _scrape(own_client, search_url, items, token, actor, sleep)
