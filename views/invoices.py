import streamlit as st

from domain.columns import INVOICE_COLUMNS, format_currency
from domain.constants import DEFAULT_LOCALE, INVOICE_STATUSES
from services import records as records_svc
from ui.components import render_data_table


def view():
    locale = st.session_state.get('locale', DEFAULT_LOCALE)
    st.header("الفواتير" if locale == 'ar' else "Invoices")

    invoices = records_svc.load_records('invoices')

    # Headline totals over the whole collection (not the current filter)
    c1, c2, c3 = st.columns(3)
    paid = sum(float(i.get('total_amount') or 0) for i in invoices if i.get('status') == 'paid')
    outstanding = sum(float(i.get('total_amount') or 0) for i in invoices
                      if i.get('status') in {'pending', 'overdue'})
    c1.metric("Invoices", len(invoices))
    c2.metric("Paid", format_currency(paid))
    c3.metric("Outstanding", format_currency(outstanding))

    statuses = st.multiselect("الحالة" if locale == 'ar' else "Status", INVOICE_STATUSES,
                              key="invoices_status_filter")
    predicate = (lambda r: r.get('status') in statuses) if statuses else None

    render_data_table("invoices", invoices, INVOICE_COLUMNS, locale=locale,
                      collection_key='invoices', predicate=predicate)
