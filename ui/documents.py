"""Document checklist returned by the copilot."""
from __future__ import annotations
import re
import streamlit as st


def _slug(label: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", label.lower()).strip("_")


def render_document_checklist(docs):
    """Tick-off list of requested documents; ticks live only in this session."""
    st.session_state.setdefault("doc_checklist_state", {})
    with st.expander("Documentation Checklist", expanded=bool(docs)):
        if not docs:
            st.caption("No documents requested yet.")
        for doc in docs:
            checked = st.session_state["doc_checklist_state"].get(doc, False)
            st.session_state["doc_checklist_state"][doc] = st.checkbox(
                doc, value=checked, key=f"doc_{_slug(doc)}"
            )
