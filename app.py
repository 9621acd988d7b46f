import streamlit as st
import datetime as dt
import logging
from urllib.parse import unquote

from domain.constants import DEFAULT_LOCALE, LOCALES, LOG_LEVEL
from services import persistence
from utils.log import configure_logging, log_context

# Import the page rendering functions from the view modules
from views import cases, clients, invoices, data

logger = logging.getLogger(__name__)

# --- Page Registry ---
# Maps a page key to its label, rendering function and admin status.
PAGE_REGISTRY = {
    "cases": {
        "label": "⚖️ Cases / القضايا",
        "render_func": cases.view,
        "admin": False,
    },
    "clients": {
        "label": "👥 Clients / العملاء",
        "render_func": clients.view,
        "admin": False,
    },
    "invoices": {
        "label": "🧾 Invoices / الفواتير",
        "render_func": invoices.view,
        "admin": False,
    },
    "data": {
        "label": "💾 Data / البيانات",
        "render_func": data.view,
        "admin": True,
    },
}


def main():
    """
    Main application router.

    Controls the sidebar navigation (locale toggle, admin mode, page radio)
    and renders the selected page.
    """
    configure_logging(LOG_LEVEL)
    st.set_page_config(page_title="Legal Practice Tables", layout="wide")

    # --- Sidebar ---
    st.sidebar.title("Navigation")

    if 'locale' not in st.session_state:
        st.session_state.locale = DEFAULT_LOCALE
    st.sidebar.radio("Language / اللغة", LOCALES, key="locale", horizontal=True,
                     format_func=lambda code: "English" if code == 'en' else "العربية")
    if st.session_state.locale == 'ar':
        st.markdown("<style>.main .block-container {direction: rtl;}</style>", unsafe_allow_html=True)

    is_admin = st.sidebar.checkbox("Admin Mode", key="admin_mode")
    visible_pages = {k: v for k, v in PAGE_REGISTRY.items() if is_admin or not v["admin"]}
    page_keys = list(visible_pages.keys())
    page_labels = [v["label"] for v in visible_pages.values()]

    # Query param persistence
    qs = st.query_params
    if 'page' in qs and 'navigation_radio' not in st.session_state:
        raw_param = qs.get('page')
        raw = unquote(raw_param) if isinstance(raw_param, str) else ''
        if raw in page_labels:
            st.session_state.navigation_radio = raw
    if st.session_state.get('navigation_radio') not in page_labels:
        st.session_state.pop('navigation_radio', None)

    selected_page_label = st.sidebar.radio(
        "Menu",
        page_labels,
        key="navigation_radio"
    )
    st.query_params['page'] = selected_page_label
    selected_page_key = page_keys[page_labels.index(selected_page_label)]
    logger.debug("app.page.render", extra=log_context(page=selected_page_key))

    # --- Page Rendering ---
    visible_pages[selected_page_key]["render_func"]()

    # --- Footer ---
    st.sidebar.markdown("---")
    st.sidebar.caption(
        f"Data dir: {persistence.DATA_DIR} | {dt.datetime.now(dt.timezone.utc).strftime('%H:%M:%S')}Z"
    )


if __name__ == "__main__":
    main()
