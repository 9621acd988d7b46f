import streamlit as st

from domain.constants import COLLECTIONS
from services import records as records_svc


def view():
    """Provides data management functions: sample seeding and reset."""
    st.header("💾 Data management")

    with st.container(border=True):
        st.subheader("Sample data")
        if st.button("Regenerate sample cases, clients and invoices"):
            counts = records_svc.seed_all()
            st.success(", ".join(f"{k}: {v}" for k, v in counts.items()))
            st.rerun()

    with st.expander("🚨 Danger Zone: reset a collection"):
        key = st.selectbox("Collection", COLLECTIONS, key="data_reset_key")
        st.warning("The collection will be emptied; it is re-seeded from sample data on next load.")
        if st.text_input("Type RESET to confirm") == "RESET":
            if st.button("Reset", type="primary"):
                records_svc.reset_collection(key)
                st.session_state.pop(f"table_engine_{key}", None)
                st.success(f"{key} reset")
                st.rerun()
