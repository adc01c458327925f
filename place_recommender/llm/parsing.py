from __future__ import annotations

import json
import re
from typing import Any

from ..errors import MalformedResponseError

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n(.*?)\n?```", re.DOTALL)
_BOUNDS = {dict: ("{", "}"), list: ("[", "]")}


def extract_json_payload(text: str | None, expect: type = dict) -> Any:
    """
    Decode the JSON object (or array) embedded in a model reply.

    A fenced code block is preferred; otherwise the text between the
    outermost braces (brackets for ``expect=list``) is used, which strips
    conversational prose around the payload.
    """
    raw = (text or "").strip()
    if not raw:
        raise MalformedResponseError()

    match = _FENCE_RE.search(raw)
    candidate = match.group(1) if match else raw

    opening, closing = _BOUNDS[expect]
    start = candidate.find(opening)
    end = candidate.rfind(closing)
    if start != -1 and end > start:
        candidate = candidate[start : end + 1]

    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError() from exc

    if not isinstance(payload, expect):
        raise MalformedResponseError()
    return payload
