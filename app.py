import logging

import streamlit as st

from core.api import CasesClient
from core.config import get_settings
from core.state import ensure_identity_defaults, get_tenant_id, get_user_id
from core.version import __version__
from ui.case_detail import render_case_detail
from ui.cases_list import render_cases_list
from ui.components import PAGES
from ui.settings import render_settings
from ui.wizard import render_wizard

st.set_page_config(page_title="Case Desk", layout="wide")

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

ensure_identity_defaults()

st.markdown(
    """
    <style>
    @media (max-width: 600px) {
        div[class^='stColumn'] {flex: 1 1 100% !important;}
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# Pages other than the sidebar itself ask for navigation through ``nav_request``.
if "nav_request" in st.session_state:
    st.session_state["nav"] = st.session_state.pop("nav_request")
nav = st.sidebar.radio("Navigate", PAGES, key="nav")
st.sidebar.caption(f"Tenant {get_tenant_id()} • User {get_user_id()}")
st.sidebar.caption(f"v{__version__}")

st.title("CASE DESK")
st.caption("Mortgage scenario intake • Unknowns stay unknown • Copilot from the case service")

with CasesClient(get_tenant_id(), get_user_id(), settings) as client:
    if nav == "Cases":
        render_cases_list(client)
    elif nav == "New Scenario":
        render_wizard(client)
    elif nav == "Case Detail":
        render_case_detail(client, st.session_state.get("selected_case_id"))
    elif nav == "Settings":
        render_settings()
