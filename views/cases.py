import streamlit as st

from domain.columns import CASE_COLUMNS
from domain.constants import CASE_PRIORITIES, CASE_STATUSES, DEFAULT_LOCALE
from services import records as records_svc
from ui.components import render_data_table


def view():
    locale = st.session_state.get('locale', DEFAULT_LOCALE)
    st.header("القضايا" if locale == 'ar' else "Cases")

    cases = records_svc.load_records('cases')

    c1, c2 = st.columns(2)
    statuses = c1.multiselect("الحالة" if locale == 'ar' else "Status", CASE_STATUSES, key="cases_status_filter")
    priorities = c2.multiselect("الأولوية" if locale == 'ar' else "Priority", CASE_PRIORITIES,
                                key="cases_priority_filter")

    def matches(r):
        return ((not statuses or r.get('status') in statuses)
                and (not priorities or r.get('priority') in priorities))

    predicate = matches if (statuses or priorities) else None
    render_data_table("cases", cases, CASE_COLUMNS, locale=locale,
                      collection_key='cases', predicate=predicate)
