from typing import List, Mapping, Optional

import streamlit as st

# Page names shown in the sidebar; ``go_to`` requests one for the next run.
PAGES = ["Cases", "New Scenario", "Case Detail", "Settings"]


def go_to(page: str, case_id: Optional[str] = None):
    """Switch page on the next run (the sidebar radio cannot be set after it renders)."""
    st.session_state["nav_request"] = page
    if case_id is not None:
        st.session_state["selected_case_id"] = case_id
    st.rerun()


def request_reload():
    """Fetch the open case again on the next run."""
    st.session_state.pop("loaded_case_id", None)
    st.rerun()


def render_error_state(message: str, key: str) -> bool:
    """Show a failed load with a retry button; True when retry was clicked."""
    st.error(message)
    return st.button("Retry", key=key)


def select_option(label: str, options: Mapping[str, str], value: str, key: str) -> str:
    """Selectbox over an enumeration dict (value -> label)."""
    keys = list(options.keys())
    index = keys.index(value) if value in keys else 0
    return st.selectbox(label, keys, index=index, format_func=lambda k: options[k], key=key)


def number_text(label: str, value: str, key: str) -> str:
    """Free-text number; blank means Unknown."""
    return st.text_input(label, value=value, key=key, placeholder="Unknown", help="Leave blank if unknown")


def lines_input(label: str, values: List[str], key: str, height: int = 100) -> List[str]:
    """Editable list of short strings, one per line."""
    text = st.text_area(label, value="\n".join(values), key=key, height=height, help="One per line")
    return [line.strip() for line in text.splitlines() if line.strip()]


def flash(message: str):
    """Queue a success message that survives the next rerun."""
    st.session_state["flash"] = message


def show_flash():
    msg = st.session_state.pop("flash", None)
    if msg:
        st.success(msg)
