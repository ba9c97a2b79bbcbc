"""Copilot tabs of the case detail page.

Calculations, snapshots and guideline retrieval all run in the case service;
these tabs only trigger them and display what comes back.
"""
import streamlit as st

from core.api import ApiError
from core.forms import OutcomeForm
from core.mapper import form_to_outcome, outcome_to_form
from core.models import Case
from core.presets import AUS_OPTIONS, DECISION_OPTIONS, GUIDELINE_QUERY_BACKENDS
from core.responses import (
    build_snapshot_text,
    extract_answer,
    extract_citations,
    extract_missing_inputs,
)
from core.utils import format_confidence, pretty_label
from ui.components import flash, lines_input, request_reload, select_option
from ui.dashboard import render_ratios
from ui.documents import render_document_checklist


def render_citations(citations):
    if not citations:
        st.caption("No guideline citations.")
        return
    for c in citations:
        backend = c.retriever_backend or "unknown backend"
        st.markdown(f"**{c.doc_id or 'Guideline'}** {c.section}")
        if c.quote:
            st.markdown(f"> {c.quote}")
        st.caption(f"Confidence {format_confidence(c.retrieval_confidence)} • {backend}")


def render_calculations_tab(client, case: Case):
    render_ratios(case.calculations)
    missing = st.session_state.get("calc_missing")
    if missing:
        st.warning("Missing inputs: " + ", ".join(missing))
    if st.button("Recalculate", key="recalculate"):
        try:
            result = client.calculate(case.case_id)
        except ApiError as exc:
            st.error(str(exc))
            return
        st.session_state["calc_missing"] = extract_missing_inputs(result)
        request_reload()


def render_guidelines_tab(client, case: Case):
    question = st.text_area("Question", key="guideline_question")
    c1, c2 = st.columns(2)
    backend = c1.selectbox("Retriever", list(GUIDELINE_QUERY_BACKENDS), key="guideline_backend")
    by_state = c2.checkbox(f"Limit to {case.deal.state}", key="guideline_by_state")
    if st.button("Ask", key="guideline_ask", disabled=not question.strip()):
        filters = {"state": case.deal.state} if by_state else None
        try:
            st.session_state["guideline_result"] = client.guidelines_query(
                case.case_id, question.strip(), backend=backend, filters=filters
            )
        except ApiError as exc:
            st.error(str(exc))
    result = st.session_state.get("guideline_result")
    if result is not None:
        st.markdown(extract_answer(result))
        render_citations(extract_citations(result))
    st.divider()
    st.markdown("**Citations on file**")
    render_citations(case.copilot.guideline_citations)


def render_snapshot_tab(client, case: Case):
    if st.button("Generate Snapshot", key="generate_snapshot"):
        try:
            st.session_state["snapshot_text"] = build_snapshot_text(client.snapshot(case.case_id))
        except ApiError as exc:
            st.error(str(exc))
    text = st.session_state.get("snapshot_text")
    if text:
        st.code(text, language=None)
    copilot = case.copilot
    if copilot.suggested_directions:
        st.markdown("**Suggested Directions**")
        for d in copilot.suggested_directions:
            st.markdown(f"- **{d.option}** ({format_confidence(d.confidence)})")
            for why in d.why:
                st.caption(why)
    if copilot.questions_to_ask_next:
        st.markdown("**Questions to Ask Next**")
        for q in copilot.questions_to_ask_next:
            st.markdown(f"- {q}")
    render_document_checklist(copilot.doc_checklist)


def render_outcome_tab(client, case: Case):
    form = outcome_to_form(case.outcome)
    k = f"outcome_{case.case_id}"
    c1, c2 = st.columns(2)
    with c1:
        aus = select_option("AUS", AUS_OPTIONS, form.aus, f"{k}_aus")
        decision = select_option("Decision", DECISION_OPTIONS, form.decision, f"{k}_decision")
    with c2:
        lender = st.text_input("Final Lender", value=form.final_lender, key=f"{k}_lender")
        closed = st.text_input(
            "Closed Date", value=form.closed_date, placeholder="YYYY-MM-DD", key=f"{k}_closed"
        )
    conditions = lines_input("Conditions", form.conditions, f"{k}_conditions")
    denials = lines_input("Denial Reasons", form.denial_reasons, f"{k}_denials")
    if st.button("Save Outcome", key="save_outcome"):
        edited = OutcomeForm(
            aus=aus,
            decision=decision,
            conditions=conditions,
            denial_reasons=denials,
            final_lender=lender,
            closed_date=closed,
        )
        try:
            outcome = form_to_outcome(edited)
        except ValueError:
            st.error("Closed date must be a date in YYYY-MM-DD format")
            return
        try:
            client.update_outcome(case.case_id, outcome)
        except ApiError as exc:
            st.error(str(exc))
            return
        flash(f"Outcome saved: {pretty_label(outcome.decision)}")
        request_reload()


def render_copilot_tabs(client, case: Case):
    calc_tab, guide_tab, snap_tab, outcome_tab = st.tabs(
        ["Calculations", "Guidelines", "Snapshot", "Outcome"]
    )
    with calc_tab:
        render_calculations_tab(client, case)
    with guide_tab:
        render_guidelines_tab(client, case)
    with snap_tab:
        render_snapshot_tab(client, case)
    with outcome_tab:
        render_outcome_tab(client, case)
