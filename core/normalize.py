"""Locate case records inside case-service responses.

List and detail endpoints have wrapped their payload differently across
service versions (``{"cases": [...]}``, ``{"data": {"items": [...]}}``,
``{"case": {...}}``, a bare record, ...). These helpers find the meaningful
part without trusting any single envelope shape.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

RECORD_KEY = "case_id"

# Checked in this order at every level before any other child is searched.
CASE_LIST_KEYS = ("cases", "items", "results", "data")
CASE_RECORD_KEYS = ("case", "item", "result", "data", "case_detail", "payload")
MAX_SEARCH_DEPTH = 5


class ShapeError(ValueError):
    """A detail-style response did not contain a recognisable case record."""

    def __init__(self, payload: Any):
        self.payload = payload
        if isinstance(payload, Mapping):
            found = ", ".join(sorted(str(k) for k in payload)) or "no keys"
            shape = f"object with {found}"
        else:
            shape = type(payload).__name__
        super().__init__(f"Unexpected case detail response shape ({shape})")


def looks_like_record(value: Any) -> bool:
    return isinstance(value, Mapping) and RECORD_KEY in value


def _find_list(
    value: Any, depth: int, max_depth: int, container_keys: Sequence[str]
) -> Optional[List[Any]]:
    if depth > max_depth:
        return None
    if isinstance(value, list):
        return value
    if not isinstance(value, Mapping):
        return None

    for key in container_keys:
        if key in value:
            found = _find_list(value[key], depth + 1, max_depth, container_keys)
            if found is not None:
                return found

    # Heuristic: an object whose values are all record-like is read as a
    # keyed collection. A single record holding several case-shaped children
    # would also match; kept for compatibility with older list endpoints.
    values = list(value.values())
    if values and all(looks_like_record(v) for v in values):
        return values

    for child in values:
        found = _find_list(child, depth + 1, max_depth, container_keys)
        if found is not None:
            return found
    return None


def extract_case_list(
    payload: Any,
    *,
    max_depth: int = MAX_SEARCH_DEPTH,
    container_keys: Sequence[str] = CASE_LIST_KEYS,
) -> List[Any]:
    """Return the first list found in ``payload``, or ``[]`` if there is none.

    An empty result is a normal state (no cases yet), not an error.
    """
    found = _find_list(payload, 0, max_depth, container_keys)
    return list(found) if found is not None else []


def extract_case_record(
    payload: Any, *, wrapper_keys: Sequence[str] = CASE_RECORD_KEYS
) -> Dict[str, Any]:
    """Return the single case record in a detail/create/update response.

    Raises :class:`ShapeError` rather than guessing: returning the wrong
    object here would silently load someone else's data into the form.
    """
    if looks_like_record(payload):
        return dict(payload)
    if isinstance(payload, Mapping):
        for key in wrapper_keys:
            inner = payload.get(key)
            if looks_like_record(inner):
                return dict(inner)
    raise ShapeError(payload)
