"""Parses the model reply into a summary and a bounded tag list."""

import json
from typing import Any

from techdoc.enrichment.exceptions import EnrichmentResponseError

MAX_TAGS = 7


def parse_enrichment_reply(raw: str) -> tuple[str, list[str]]:
    """Decode the outermost {...} span of a reply.

    Missing fields default to empty. Tags are stripped, de-duplicated
    case-insensitively and capped at MAX_TAGS.

    Raises:
        EnrichmentResponseError: when no JSON object can be decoded.
    """
    start = raw.find("{")
    end = raw.rfind("}")
    if start < 0 or end <= start:
        raise EnrichmentResponseError("No JSON object found in AI response")

    try:
        parsed = json.loads(raw[start : end + 1])
    except json.JSONDecodeError as exc:
        raise EnrichmentResponseError(f"Invalid JSON response: {exc}") from exc
    if not isinstance(parsed, dict):
        raise EnrichmentResponseError("JSON response must be an object")

    summary = parsed.get("summary")
    summary = summary.strip() if isinstance(summary, str) else ""
    return summary, _clean_tags(parsed.get("tags"))


def _clean_tags(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    seen: set[str] = set()
    tags: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        tag = item.strip()
        if not tag or tag.lower() in seen:
            continue
        seen.add(tag.lower())
        tags.append(tag)
        if len(tags) == MAX_TAGS:
            break
    return tags
