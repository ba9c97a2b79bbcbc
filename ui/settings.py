import streamlit as st

from core.config import get_settings
from core.state import get_tenant_id, get_user_id, save_identity
from core.version import __version__


def render_settings():
    """Tenant/user identity sent with every request."""
    st.header("Settings")
    settings = get_settings()
    tenant = st.text_input("Tenant ID", value=get_tenant_id(), key="settings_tenant")
    user = st.text_input("User ID", value=get_user_id(), key="settings_user")
    if st.button("Save Identity", key="settings_save"):
        save_identity(tenant, user)
        st.success(f"Requests now use tenant {get_tenant_id()} as {get_user_id()}")
    st.divider()
    st.caption(f"Case service: {settings.api_base_url or 'not configured (set API_BASE_URL)'}")
    st.caption(f"Version {__version__}")
