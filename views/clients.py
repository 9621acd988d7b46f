import streamlit as st

from domain.columns import CLIENT_COLUMNS
from domain.constants import CLIENT_TYPES, DEFAULT_LOCALE
from services import records as records_svc
from ui.components import render_data_table


def view():
    locale = st.session_state.get('locale', DEFAULT_LOCALE)
    st.header("العملاء" if locale == 'ar' else "Clients")

    clients = records_svc.load_records('clients')
    client_type = st.radio("النوع" if locale == 'ar' else "Type", ["all"] + CLIENT_TYPES,
                           horizontal=True, key="clients_type_filter")
    predicate = None if client_type == "all" else (lambda r: r.get('type') == client_type)

    render_data_table("clients", clients, CLIENT_COLUMNS, locale=locale,
                      collection_key='clients', predicate=predicate)
