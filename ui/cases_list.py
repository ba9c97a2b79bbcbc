from typing import List

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.models import Case
from core.presets import CASE_STATUSES
from core.utils import format_money, pretty_label, show_unknown
from ui.components import go_to, render_error_state

CASE_COLUMNS = ["Case ID", "Status", "Purpose", "State", "Primary Credit", "Loan Amount", "Updated"]


def cases_frame(cases: List[Case]) -> pd.DataFrame:
    """Table rows for the cases list, most recently updated first."""
    rows = []
    for c in cases:
        primary = c.primary_borrower()
        rows.append(
            {
                "Case ID": c.case_id,
                "Status": pretty_label(c.status),
                "Purpose": pretty_label(c.deal.purpose),
                "State": c.deal.state,
                "Primary Credit": show_unknown(primary.credit_score_mid) if primary else "Unknown",
                "Loan Amount": format_money(c.property.loan_amount),
                "Updated": c.updated_at,
            }
        )
    df = pd.DataFrame(rows, columns=CASE_COLUMNS)
    return df.sort_values("Updated", ascending=False, kind="stable").reset_index(drop=True)


def filter_cases(cases: List[Case], search: str) -> List[Case]:
    term = search.strip().lower()
    if not term:
        return list(cases)
    return [c for c in cases if term in c.case_id.lower()]


def render_cases_list(client):
    st.header("Cases")
    c1, c2, c3 = st.columns([1, 2, 1])
    status = c1.selectbox(
        "Status", ["all", *CASE_STATUSES], format_func=pretty_label, key="cases_status"
    )
    search = c2.text_input("Search case id", key="cases_search")
    if c3.button("New Scenario", key="cases_new"):
        go_to("New Scenario")

    try:
        cases = client.list_cases(None if status == "all" else status)
    except ApiError as exc:
        if render_error_state(f"Could not load cases: {exc}", key="retry_cases"):
            st.rerun()
        return

    cases = filter_cases(cases, search)
    if not cases:
        st.caption("No cases found.")
        return
    df = cases_frame(cases)
    st.dataframe(df, hide_index=True)
    c1, c2 = st.columns([3, 1])
    selected = c1.selectbox("Case", list(df["Case ID"]), key="cases_pick")
    if c2.button("Open", key="cases_open"):
        go_to("Case Detail", case_id=selected)
