"""New scenario wizard."""
import streamlit as st

from core.api import ApiError
from core.borrowers import normalize_primary
from core.forms import IntakeForm, validate_deal, validate_intake_form
from core.mapper import to_persisted_record
from core.models import new_case
from core.normalize import ShapeError
from core.state import get_user_id
from ui.borrowers import render_borrower_inputs
from ui.components import go_to
from ui.forms import (
    render_assets_inputs,
    render_deal_inputs,
    render_income_inputs,
    render_liabilities_inputs,
    render_property_inputs,
)

STEPS = ["Deal", "Primary Borrower", "Income", "Assets", "Liabilities", "Property"]


def reset_wizard():
    st.session_state["wizard_step"] = 0
    st.session_state["wizard_nonce"] = st.session_state.get("wizard_nonce", 0) + 1
    st.session_state["wizard_form"] = IntakeForm(borrowers=normalize_primary([]))


def _step_errors(step: str, form: IntakeForm):
    if step == "Deal":
        return validate_deal(form.deal)
    return []


def create_case(client, form: IntakeForm):
    """Create the scenario; returns the new case id or ``None`` on failure."""
    errors = validate_intake_form(form)
    if errors:
        for e in errors:
            st.error(e)
        return None
    record = to_persisted_record(form, base=new_case(user_id=get_user_id()))
    try:
        created = client.create_case(record)
    except (ShapeError, ApiError) as exc:
        st.error(f"Could not create case: {exc}")
        return None
    return created.case_id


def render_wizard(client):
    if "wizard_form" not in st.session_state:
        reset_wizard()
    step_idx = st.session_state["wizard_step"]
    step = STEPS[step_idx]
    form = st.session_state["wizard_form"]
    prefix = f"wizard_{st.session_state['wizard_nonce']}"

    st.header("New Scenario")
    st.progress((step_idx + 1) / len(STEPS), text=f"Step {step_idx + 1} of {len(STEPS)}: {step}")

    if step == "Deal":
        form = form.model_copy(update={"deal": render_deal_inputs(form.deal, prefix)})
    elif step == "Primary Borrower":
        primary = render_borrower_inputs(form.borrowers[0], prefix)
        form = form.model_copy(update={"borrowers": [primary] + form.borrowers[1:]})
    elif step == "Income":
        form = form.model_copy(update={"income": render_income_inputs(form.income, prefix)})
    elif step == "Assets":
        form = form.model_copy(update={"assets": render_assets_inputs(form.assets, prefix)})
    elif step == "Liabilities":
        form = form.model_copy(update={"liabilities": render_liabilities_inputs(form.liabilities, prefix)})
    elif step == "Property":
        form = form.model_copy(update={"property": render_property_inputs(form.property, prefix)})
    st.session_state["wizard_form"] = form
    st.caption("Leave a number blank if it is not known yet.")

    c1, c2, c3 = st.columns(3)
    if step_idx > 0 and c1.button("Back", key="wizard_back"):
        st.session_state["wizard_step"] = step_idx - 1
        st.rerun()
    if step_idx < len(STEPS) - 1:
        if c2.button("Next", key="wizard_next", type="primary"):
            errors = _step_errors(step, form)
            if errors:
                for e in errors:
                    st.error(e)
            else:
                st.session_state["wizard_step"] = step_idx + 1
                st.rerun()
    elif c2.button("Create Case", key="wizard_create", type="primary"):
        case_id = create_case(client, form)
        if case_id:
            reset_wizard()
            go_to("Case Detail", case_id=case_id)
    if c3.button("Start Over", key="wizard_reset"):
        reset_wizard()
        st.rerun()
