"""Streamlit data table bound to a TabularViewEngine.

One engine per table lives in `st.session_state`; widgets map one-to-one onto
engine operations (search box, sort select, page size, pager, row checkboxes,
select all). The engine is only handed a new collection when the fetched
records actually changed, so paging survives reruns.
"""
import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import streamlit as st

from domain.constants import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from domain.errors import TableError
from domain.models import ColumnDescriptor, RecordPredicate, SelectAllState, SortDirection, record_id
from services import export, records as records_svc
from services.table_engine import TabularViewEngine
from utils.i18n import displayed_rows_label, selected_count_label, t
from utils.log import log_context
from .base import inject_base_css, status_badge

SELECT_COL = "✓"

logger = logging.getLogger(__name__)


def get_engine(table_key: str, records: List[Dict[str, Any]],
               columns: Sequence[ColumnDescriptor]) -> Optional[TabularViewEngine]:
    """Session engine for `table_key`, or None (after showing the error) when the records are unusable."""
    state_key = f"table_engine_{table_key}"
    engine = st.session_state.get(state_key)
    try:
        if engine is None:
            engine = TabularViewEngine(records, columns, page_size=DEFAULT_PAGE_SIZE)
            st.session_state[state_key] = engine
        elif list(engine.records) != list(records):
            engine.replace_collection(records)
    except TableError as e:
        logger.warning("table.collection.rejected", extra=log_context(table=table_key, error=str(e)))
        st.error(e)
        return None
    return engine


def page_frame(engine: TabularViewEngine, rows: Sequence[Dict[str, Any]], locale: str) -> pd.DataFrame:
    """Visible rows as a DataFrame: selection flag first, then formatted columns."""
    labels = [c.label_for(locale) for c in engine.columns]
    data = []
    for row in rows:
        entry = {SELECT_COL: engine.is_selected(record_id(row))}
        for column, label in zip(engine.columns, labels):
            entry[label] = column.display_value(row)
        data.append(entry)
    return pd.DataFrame(data, columns=[SELECT_COL] + labels)


def sync_page_selection(engine: TabularViewEngine, rows: Sequence[Dict[str, Any]], flags: Sequence[bool]) -> int:
    """Toggle rows whose checkbox differs from the engine's selection. Returns the number toggled."""
    toggled = 0
    for row, flag in zip(rows, flags):
        rid = record_id(row)
        if bool(flag) != engine.is_selected(rid):
            engine.toggle_row_selection(rid)
            toggled += 1
    return toggled


def status_summary(rows: Sequence[Dict[str, Any]], key: str = 'status') -> str:
    counts = Counter(str(r.get(key)) for r in rows if r.get(key))
    return " ".join(status_badge(s, n) for s, n in sorted(counts.items()))


def _guard(table_key: str, op, *args):
    try:
        op(*args)
    except ValueError as e:
        st.session_state[f"{table_key}_error"] = str(e)


def _on_search(engine: TabularViewEngine, table_key: str):
    _guard(table_key, engine.set_search_text, st.session_state.get(f"{table_key}_search", ""))


def _on_sort(engine: TabularViewEngine, table_key: str, keys_by_label: Dict[str, str]):
    label = st.session_state.get(f"{table_key}_sort")
    if label not in keys_by_label:
        if engine.state.sort_key is not None:
            engine.clear_sort()
        return
    desc = st.session_state.get(f"{table_key}_desc", False)
    direction = SortDirection.DESC if desc else SortDirection.ASC
    _guard(table_key, engine.set_sort, keys_by_label[label], direction)


def _on_page_size(engine: TabularViewEngine, table_key: str):
    _guard(table_key, engine.set_page_size, st.session_state.get(f"{table_key}_page_size"))


def delete_selected(engine: TabularViewEngine, table_key: str, collection_key: str, locale: str = 'en') -> bool:
    """Delete the selected rows from the store; the outcome is kept for the next run."""
    try:
        remaining = records_svc.delete_records(collection_key, engine.selected_ids)
    except ValueError as e:
        st.session_state[f"{table_key}_error"] = str(e)
        return False
    deleted = len(engine.records) - len(remaining)
    engine.replace_collection(remaining)
    engine.clear_selection()
    st.session_state[f"{table_key}_notice"] = f"{t('deleted', locale)}: {deleted}"
    return True


def render_data_table(table_key: str, records: List[Dict[str, Any]],
                      columns: Sequence[ColumnDescriptor], title: Optional[str] = None,
                      locale: str = 'en', collection_key: Optional[str] = None,
                      predicate: Optional[RecordPredicate] = None):
    inject_base_css()
    engine = get_engine(table_key, records, columns)
    if engine is None:
        return None
    engine.apply_filter(predicate)

    error = st.session_state.pop(f"{table_key}_error", None)
    if error:
        st.error(error)
    notice = st.session_state.pop(f"{table_key}_notice", None)
    if notice:
        st.success(notice)

    if title:
        css = "table-title rtl" if locale == 'ar' else "table-title"
        st.markdown(f"<div class='{css}'>{title}</div>", unsafe_allow_html=True)

    # --- Toolbar: search / sort / page size ---
    c1, c2, c3, c4 = st.columns([4, 3, 1, 2])
    c1.text_input(t('search', locale), value=engine.state.search_text, key=f"{table_key}_search",
                  on_change=_on_search, args=(engine, table_key), label_visibility="collapsed",
                  placeholder=t('search', locale))

    keys_by_label = {c.label_for(locale): c.key for c in engine.columns if c.sortable}
    sort_options = ["-"] + list(keys_by_label)
    current = next((lbl for lbl, k in keys_by_label.items() if k == engine.state.sort_key), "-")
    c2.selectbox(t('sort_by', locale), sort_options, index=sort_options.index(current),
                 key=f"{table_key}_sort", on_change=_on_sort, args=(engine, table_key, keys_by_label))
    c3.checkbox(t('descending', locale), value=engine.state.direction is SortDirection.DESC,
                key=f"{table_key}_desc", on_change=_on_sort, args=(engine, table_key, keys_by_label))
    c4.selectbox(t('rows_per_page', locale), PAGE_SIZE_OPTIONS,
                 index=PAGE_SIZE_OPTIONS.index(engine.state.page_size)
                 if engine.state.page_size in PAGE_SIZE_OPTIONS else 0,
                 key=f"{table_key}_page_size", on_change=_on_page_size, args=(engine, table_key))

    page = engine.get_visible_page()
    filtered = engine.filtered_records()
    if filtered and any('status' in r for r in filtered):
        st.markdown(status_summary(filtered), unsafe_allow_html=True)

    # --- Selection bar ---
    selected = engine.selected_ids
    s1, s2, s3 = st.columns([3, 2, 2])
    s1.caption(selected_count_label(len(selected), locale))
    all_state = engine.select_all_state()
    s2.button(t('clear_selection', locale) if all_state is SelectAllState.ALL else t('select_all', locale),
              key=f"{table_key}_select_all", on_click=_guard, args=(table_key, engine.toggle_select_all),
              disabled=not filtered)
    s3.button(t('clear_selection', locale), key=f"{table_key}_clear", on_click=_guard,
              args=(table_key, engine.clear_selection), disabled=not selected)

    # --- Page body ---
    if not page.rows:
        st.info(t('no_data', locale))
    else:
        df = page_frame(engine, page.rows, locale)
        # Key follows the visible rows and their selection so the editor re-seeds after engine-side changes.
        page_ids = tuple(str(record_id(r)) for r in page.rows)
        page_sel = tuple(rid for rid, flag in zip(page_ids, df[SELECT_COL]) if flag)
        edited = st.data_editor(
            df,
            key=f"{table_key}_editor_{hash((page_ids, page_sel))}",
            hide_index=True,
            disabled=[c for c in df.columns if c != SELECT_COL],
            column_config={SELECT_COL: st.column_config.CheckboxColumn(SELECT_COL, width="small")},
        )
        if sync_page_selection(engine, page.rows, list(edited[SELECT_COL])):
            st.rerun()

    # --- Pager ---
    p1, p2, p3 = st.columns([1, 3, 1])
    p1.button(t('previous', locale), key=f"{table_key}_prev", disabled=page.page_index <= 0,
              on_click=_guard, args=(table_key, engine.set_page, max(page.page_index - 1, 0)))
    p2.caption(f"{displayed_rows_label(page, locale)} · {t('page', locale)} "
               f"{page.page_index + 1 if page.total_pages else 0}/{page.total_pages}")
    p3.button(t('next', locale), key=f"{table_key}_next", disabled=page.page_index >= page.total_pages - 1,
              on_click=_guard, args=(table_key, engine.set_page, page.page_index + 1))

    # --- Export / bulk actions ---
    e1, e2, e3 = st.columns(3)
    e1.download_button(t('export_view', locale), export.rows_to_csv(filtered, engine.columns, locale),
                       f"{table_key}.csv", "text/csv", key=f"{table_key}_export_view", disabled=not filtered)
    chosen = engine.selected_records()
    e2.download_button(t('export_selection', locale), export.rows_to_csv(chosen, engine.columns, locale),
                       f"{table_key}_selection.csv", "text/csv", key=f"{table_key}_export_sel",
                       disabled=not chosen)
    if collection_key and e3.button(f"{t('delete', locale)} ({len(chosen)})", key=f"{table_key}_delete",
                                    disabled=not chosen, type="primary"):
        delete_selected(engine, table_key, collection_key, locale)
        st.rerun()
    return engine
