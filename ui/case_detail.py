"""Case detail page: header, risk flags, intake editor, copilot and export."""
import logging

import streamlit as st

from core.api import ApiError
from core.forms import validate_intake_form
from core.mapper import to_form_state, to_persisted_record
from core.normalize import ShapeError
from export.pdf_export import build_case_summary_pdf
from ui.components import flash, render_error_state, request_reload, show_flash
from ui.copilot import render_copilot_tabs
from ui.dashboard import render_case_header, render_risk_flags
from ui.forms import render_intake_form

logger = logging.getLogger(__name__)

# Cleared whenever a different case is loaded.
CASE_SCOPED_KEYS = ("calc_missing", "guideline_result", "snapshot_text", "doc_checklist_state")


def _store_case(case):
    st.session_state["case_record"] = case
    st.session_state["intake_form"] = to_form_state(case)
    # New widget keys so the inputs pick up the stored values.
    st.session_state["form_nonce"] = st.session_state.get("form_nonce", 0) + 1


def load_case(client, case_id: str):
    """Fetch ``case_id`` into session state; failures are kept for the error state."""
    if st.session_state.get("case_record") is not None and st.session_state["case_record"].case_id != case_id:
        for key in CASE_SCOPED_KEYS:
            st.session_state.pop(key, None)
    st.session_state["loaded_case_id"] = case_id
    try:
        case = client.get_case(case_id)
    except (ShapeError, ApiError) as exc:
        logger.warning("Could not load case %s: %s", case_id, exc)
        st.session_state["case_load_error"] = str(exc)
        st.session_state.pop("case_record", None)
        return
    st.session_state.pop("case_load_error", None)
    _store_case(case)


def save_case(client, case_id: str):
    form = st.session_state["intake_form"]
    errors = validate_intake_form(form)
    if errors:
        for e in errors:
            st.error(e)
        return
    record = to_persisted_record(form, base=st.session_state["case_record"])
    try:
        saved = client.patch_case(case_id, record)
    except (ShapeError, ApiError) as exc:
        st.error(f"Save failed: {exc}")
        return
    _store_case(saved)
    flash("Case saved")
    st.rerun()


def render_case_detail(client, case_id):
    if not case_id:
        st.info("Open a case from the Cases page.")
        return
    if st.session_state.get("loaded_case_id") != case_id:
        load_case(client, case_id)
    error = st.session_state.get("case_load_error")
    if error:
        if render_error_state(f"Could not load case {case_id}: {error}", key="retry_case"):
            request_reload()
        return

    case = st.session_state["case_record"]
    show_flash()
    render_case_header(case)
    render_risk_flags(case.risk_flags)

    st.subheader("Intake")
    render_intake_form("intake_form", prefix=f"intake_{case.case_id}_{st.session_state['form_nonce']}")
    c1, c2 = st.columns(2)
    if c1.button("Save Changes", key="save_case", type="primary"):
        save_case(client, case.case_id)
    if c2.button("Reload", key="reload_case"):
        request_reload()

    st.subheader("Copilot")
    render_copilot_tabs(client, case)

    st.divider()
    st.download_button(
        "Download PDF Summary",
        data=build_case_summary_pdf(case),
        file_name=f"case_{case.case_id}.pdf",
        mime="application/pdf",
        key="download_pdf",
    )
