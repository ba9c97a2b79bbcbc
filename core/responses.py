"""Read the loosely shaped replies of the calculate, snapshot and guideline endpoints."""
from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from core.models import GuidelineCitation

ANSWER_KEYS = ("answer", "response", "result", "text", "message")
CITATION_KEYS = ("citations", "guideline_citations", "sources")


def _dump(payload: Any) -> str:
    return json.dumps(payload, indent=2, default=str)


def extract_missing_inputs(payload: Any) -> Optional[List[str]]:
    """Inputs the calculator reported as missing, or ``None`` if it said nothing."""
    if not isinstance(payload, Mapping):
        return None
    missing = payload.get("missing_inputs")
    if isinstance(missing, list):
        return [str(m) for m in missing]
    if isinstance(missing, Mapping):
        return [f"{k}: {v}" for k, v in missing.items()]
    if isinstance(payload.get("missing"), list):
        return [str(m) for m in payload["missing"]]
    return None


def extract_answer(payload: Any) -> str:
    if not payload:
        return ""
    if isinstance(payload, Mapping):
        for key in ANSWER_KEYS:
            if payload.get(key):
                return str(payload[key])
    return _dump(payload)


def extract_citations(payload: Any) -> List[GuidelineCitation]:
    """Guideline citations from a guideline or snapshot reply.

    Entries that are not citation-shaped are skipped.
    """
    if not isinstance(payload, Mapping):
        return []
    raw = None
    for key in CITATION_KEYS:
        if payload.get(key):
            raw = payload[key]
            break
    if raw is None and isinstance(payload.get("copilot"), Mapping):
        raw = payload["copilot"].get("guideline_citations")
    citations = []
    for item in raw if isinstance(raw, list) else []:
        try:
            citations.append(GuidelineCitation.model_validate(item))
        except ValidationError:
            continue
    return citations


def build_snapshot_text(payload: Any) -> str:
    """Plain-text snapshot suitable for copying into notes."""
    if not payload:
        return ""
    if not isinstance(payload, Mapping):
        return _dump(payload)
    parts = []
    if payload.get("snapshot"):
        parts.append(str(payload["snapshot"]))
    if isinstance(payload.get("questions"), list):
        parts.append("Questions\n" + "\n".join(f"- {q}" for q in payload["questions"]))
    if isinstance(payload.get("checklist"), list):
        parts.append("Checklist\n" + "\n".join(f"- {c}" for c in payload["checklist"]))
    return "\n\n".join(parts).strip() or _dump(payload)
