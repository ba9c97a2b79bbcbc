import streamlit as st

from core.borrowers import add_borrower, index_of, remove_borrower, set_primary
from core.forms import BorrowerForm
from core.presets import CITIZENSHIP_OPTIONS, INCOME_TYPE_OPTIONS
from ui.components import number_text, select_option


def render_borrower_inputs(b: BorrowerForm, prefix: str) -> BorrowerForm:
    """Inputs for one borrower. Keys follow the borrower id, not its position."""
    k = f"{prefix}_borrower_{b.borrower_id}"
    c1, c2 = st.columns(2)
    with c1:
        credit = number_text("Credit Score (mid)", b.credit_score_mid, f"{k}_credit")
        citizenship = select_option("Citizenship", CITIZENSHIP_OPTIONS, b.citizenship, f"{k}_citizenship")
    with c2:
        income_type = select_option("Income Type", INCOME_TYPE_OPTIONS, b.income_type, f"{k}_income_type")
        job = number_text("Time at Job (months)", b.job_time_months, f"{k}_job_months")
        se = number_text("Time Self-employed (months)", b.self_employed_time_months, f"{k}_se_months")
    return b.model_copy(
        update={
            "credit_score_mid": credit,
            "citizenship": citizenship,
            "income_type": income_type,
            "job_time_months": job,
            "self_employed_time_months": se,
        }
    )


def render_borrowers_editor(form_key: str = "intake_form", prefix: str = "intake"):
    """Borrower cards for the form held in ``st.session_state[form_key]``.

    Add, remove and make-primary go through ``core.borrowers`` so the form
    always has exactly one primary borrower. Actions are applied after all
    cards have rendered, then the page reruns.
    """
    form = st.session_state[form_key]
    borrowers = list(form.borrowers)
    action = None
    updated = []
    for idx, b in enumerate(borrowers):
        title = f"Borrower #{idx+1}" + (" (primary)" if b.is_primary else "")
        with st.expander(title, expanded=b.is_primary):
            b = render_borrower_inputs(b, prefix)
            c1, c2 = st.columns(2)
            if b.is_primary:
                c1.caption("Primary borrower")
            elif c1.button("Make primary", key=f"{prefix}_make_primary_{b.borrower_id}"):
                action = ("primary", b.borrower_id)
            if c2.button(
                "Remove",
                key=f"{prefix}_remove_borrower_{b.borrower_id}",
                disabled=len(borrowers) <= 1,
            ):
                action = ("remove", b.borrower_id)
        updated.append(b)
    if st.button("Add Borrower", key=f"{prefix}_add_borrower"):
        action = ("add", None)

    if action is None:
        st.session_state[form_key] = form.model_copy(update={"borrowers": updated})
        return
    kind, borrower_id = action
    if kind == "add":
        updated = add_borrower(updated)
    else:
        idx = index_of(updated, borrower_id)
        if idx is not None:
            updated = set_primary(updated, idx) if kind == "primary" else remove_borrower(updated, idx)
    st.session_state[form_key] = form.model_copy(update={"borrowers": updated})
    st.rerun()
