"""
JOBSCOUT • core/llm.py
Thin async wrapper around the OpenAI chat-completions API.

  • chat_text(prompt, model)                 -> str
  • chat_json(prompt, schema, name, model)   -> dict (strict JSON schema)
"""

from __future__ import annotations

import json
import threading
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from backend.core import config
from backend.core.errors import MissingCredentialError

_openai_lock = threading.Lock()
_openai_client: Optional[AsyncOpenAI] = None


def _get_openai_client() -> AsyncOpenAI:
    global _openai_client
    if _openai_client is not None:
        return _openai_client
    if not (config.OPENAI_API_KEY or "").strip():
        raise MissingCredentialError("OPENAI_API_KEY missing.")
    with _openai_lock:
        if _openai_client is None:
            _openai_client = AsyncOpenAI(api_key=config.OPENAI_API_KEY)
    return _openai_client


async def chat_text(prompt: str, model: str) -> str:
    client = _get_openai_client()
    resp = await client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
    )
    return (resp.choices[0].message.content or "").strip()


async def chat_json(prompt: str, schema: Dict[str, Any], name: str, model: str) -> Dict[str, Any]:
    """
    Request a reply constrained to `schema` and decode it.
    Raises json.JSONDecodeError / ValueError when the reply is not a JSON object.
    """
    client = _get_openai_client()
    resp = await client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        response_format={
            "type": "json_schema",
            "json_schema": {"name": name, "schema": schema, "strict": True},
        },
    )
    content = (resp.choices[0].message.content or "").strip()
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object from {name}, got {type(data).__name__}.")
    return data
