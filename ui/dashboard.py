import streamlit as st

from core.models import Calculations, Case
from core.utils import format_money, pretty_label, show_unknown


def render_case_header(case: Case):
    """Case id, status and timestamps."""
    st.header(f"Case {case.case_id}")
    cols = st.columns(4)
    cols[0].metric("Status", pretty_label(case.status))
    cols[1].metric("Loan Amount", format_money(case.property.loan_amount))
    cols[2].metric("Purpose", pretty_label(case.deal.purpose))
    cols[3].metric("State", case.deal.state)
    st.caption(f"Created {case.created_at or 'Unknown'} • Updated {case.updated_at or 'Unknown'}")


def render_ratios(calc: Calculations):
    cols = st.columns(3)
    cols[0].metric("LTV", show_unknown(calc.ltv))
    cols[1].metric("Front DTI", show_unknown(calc.front_dti))
    cols[2].metric("Back DTI", show_unknown(calc.back_dti))
    if calc.math is not None:
        for label, text in (("LTV", calc.math.ltv), ("Front DTI", calc.math.front_dti), ("Back DTI", calc.math.back_dti)):
            if text:
                st.caption(f"{label}: {text}")


def render_risk_flags(flags):
    """One message per flag, coloured by severity."""
    st.subheader("Risk Flags")
    if not flags:
        st.caption("No risk flags.")
        return
    for f in flags:
        text = f"[{f.code}] {f.details}"
        if f.severity == "high":
            st.error(text)
        elif f.severity == "medium":
            st.warning(text)
        else:
            st.info(text)
