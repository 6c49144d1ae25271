"""Formatting of search results into readable text."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from better_qdrant.core.constants import (
    K_CONTENT,
    K_METADATA,
    K_SOURCE,
    K_TEXT,
    NO_RESULTS_MESSAGE,
)
from better_qdrant.core.models import SearchResult


def extract_text(payload: Mapping[str, Any]) -> str:
    """Return ``text``, else ``content``, else the payload rendered as JSON."""
    for key in (K_TEXT, K_CONTENT):
        value = payload.get(key)
        if value:
            return str(value)
    return json.dumps(payload, ensure_ascii=False, default=str)


def extract_source(payload: Mapping[str, Any]) -> str:
    """Return the payload source, looking under ``metadata`` as a fallback."""
    source = payload.get(K_SOURCE)
    if not source:
        metadata = payload.get(K_METADATA)
        if isinstance(metadata, Mapping):
            source = metadata.get(K_SOURCE)
    return str(source) if source else ""


def format_result(rank: int, result: SearchResult) -> str:
    """Render one result; ``rank`` is 1-based."""
    entry = f"Result {rank} (Score: {result.score:.2f}):\n{extract_text(result.payload)}\n"
    source = extract_source(result.payload)
    if source:
        entry += f"Source: {source}\n"
    return entry


def format_results(results: Sequence[SearchResult]) -> list[str]:
    """Render results in store order, or a single no-results entry."""
    if not results:
        return [NO_RESULTS_MESSAGE]
    return [format_result(rank, result) for rank, result in enumerate(results, start=1)]


def render_results(entries: Sequence[str]) -> str:
    """Join formatted entries into one text block."""
    if list(entries) == [NO_RESULTS_MESSAGE]:
        return NO_RESULTS_MESSAGE
    return "".join(f"{entry}\n" for entry in entries)
