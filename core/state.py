"""Tenant and user identity for requests to the case service.

The identity lives in ``st.session_state`` for the running session and is
persisted to ``IDENTITY_FILE`` so it survives restarts. Call
``ensure_identity_defaults`` once at startup; read it back with
``get_tenant_id`` / ``get_user_id``.
"""
import json
import os
from typing import Optional

import streamlit as st

from core.config import get_settings

IDENTITY_FILE: Optional[str] = None

# Only these keys are read from or written to the identity file.
PERSISTED_KEYS = {"tenant_id", "user_id"}


def _identity_file() -> str:
    return IDENTITY_FILE or get_settings().IDENTITY_FILE


def load_identity() -> None:
    """Restore identity keys from the identity file if it exists."""
    path = _identity_file()
    if not os.path.exists(path):
        return
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return
    if not isinstance(data, dict):
        return
    for key, val in data.items():
        if key in PERSISTED_KEYS and isinstance(val, str) and val.strip():
            st.session_state.setdefault(key, val.strip())


def ensure_identity_defaults() -> None:
    """Load the saved identity and fill anything missing with the defaults."""
    settings = get_settings()
    load_identity()
    if not st.session_state.get("tenant_id"):
        st.session_state["tenant_id"] = settings.DEFAULT_TENANT_ID
    if not st.session_state.get("user_id"):
        st.session_state["user_id"] = settings.DEFAULT_USER_ID


def get_tenant_id() -> str:
    return st.session_state.get("tenant_id") or get_settings().DEFAULT_TENANT_ID


def get_user_id() -> str:
    return st.session_state.get("user_id") or get_settings().DEFAULT_USER_ID


def save_identity(tenant_id: str, user_id: str) -> None:
    """Store the identity for this session and persist it; blanks mean default."""
    settings = get_settings()
    st.session_state["tenant_id"] = tenant_id.strip() or settings.DEFAULT_TENANT_ID
    st.session_state["user_id"] = user_id.strip() or settings.DEFAULT_USER_ID
    data = {k: st.session_state[k] for k in PERSISTED_KEYS}
    with open(_identity_file(), "w", encoding="utf-8") as f:
        json.dump(data, f)
