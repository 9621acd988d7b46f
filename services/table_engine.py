"""Client-side table engine: search, sort, paginate and select over an
in-memory record collection.

`derive_view` is the pure derivation (filter -> sort -> paginate, always from
the full collection). `TabularViewEngine` owns a `ViewState` for one table and
replaces it whole on every call, so a rejected call never leaves a partially
updated state behind.
"""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from domain.constants import DEFAULT_PAGE_SIZE
from domain.errors import InvalidArgument, InvalidColumn, OutOfRange
from domain.models import (ColumnDescriptor, Record, RecordPredicate, SelectAllState,
                           SortDirection, ViewState, VisiblePage, record_id)
from utils.log import log_context

logger = logging.getLogger(__name__)


def _leaf_texts(value: Any) -> Iterator[str]:
    if value is None:
        return
    if isinstance(value, bool):
        yield 'true' if value else 'false'
    elif isinstance(value, dict):
        for v in value.values():
            yield from _leaf_texts(v)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for v in value:
            yield from _leaf_texts(v)
    else:
        yield str(value)


def _text(value: Any) -> str:
    return ' '.join(_leaf_texts(value))


def matches_search(record: Record, search_text: str) -> bool:
    """Case-insensitive substring match over every own field value."""
    if not search_text:
        return True
    needle = search_text.lower()
    return any(needle in _text(v).lower() for v in record.values())


def filter_records(records: Iterable[Record], search_text: str = '',
                   predicate: Optional[RecordPredicate] = None) -> List[Record]:
    return [r for r in records
            if matches_search(r, search_text) and (predicate is None or predicate(r))]


def _numeric_key(value: Any) -> Tuple[int, float]:
    # Non-numeric and missing values sort lowest.
    try:
        number = float(value)
    except (TypeError, ValueError):
        return (0, 0.0)
    except OverflowError:
        # Integers beyond float range.
        return (1, math.copysign(math.inf, value))
    if math.isnan(number):
        return (0, 0.0)
    return (1, number)


def sort_key_for(column: ColumnDescriptor):
    if column.numeric:
        return lambda r: _numeric_key(column.value_of(r))

    def _string_key(r: Record) -> str:
        raw = column.value_of(r)
        if isinstance(raw, (dict, list)) and column.format is not None:
            return _text(column.format(raw, r))
        return _text(raw)
    return _string_key


def sort_records(records: Sequence[Record], column: Optional[ColumnDescriptor],
                 direction: SortDirection = SortDirection.ASC) -> List[Record]:
    """Stable sort; `reverse=True` keeps equal keys in their original order."""
    if column is None:
        return list(records)
    return sorted(records, key=sort_key_for(column),
                  reverse=direction is SortDirection.DESC)


def count_pages(total: int, page_size: int) -> int:
    return (total + page_size - 1) // page_size


def clamp_page(page_index: int, total: int, page_size: int) -> int:
    last = max(count_pages(total, page_size) - 1, 0)
    return min(max(page_index, 0), last)


def derive_view(records: Sequence[Record], state: ViewState,
                columns: Sequence[ColumnDescriptor]) -> VisiblePage:
    """Materialize the visible page for `state`. Pure: no state is touched."""
    by_key = {c.key: c for c in columns}
    filtered = filter_records(records, state.search_text, state.predicate)
    ordered = sort_records(filtered, by_key.get(state.sort_key), state.direction)
    total = len(ordered)
    page_index = clamp_page(state.page_index, total, state.page_size)
    start = page_index * state.page_size
    return VisiblePage(
        rows=tuple(ordered[start:start + state.page_size]),
        total_count=total,
        page_index=page_index,
        page_size=state.page_size,
        total_pages=count_pages(total, state.page_size),
    )


def _index(records: Iterable[Record]) -> Tuple[Tuple[Record, ...], FrozenSet[Any]]:
    rows = tuple(records)
    ids = []
    for position, row in enumerate(rows):
        rid = record_id(row)
        if rid is None:
            raise InvalidArgument(f"Record at position {position} has no 'id' or '_id'")
        ids.append(rid)
    unique = frozenset(ids)
    if len(unique) != len(ids):
        raise InvalidArgument("Record identifiers must be unique")
    return rows, unique


def _check_page_size(size: Any) -> int:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidArgument(f"Page size must be a positive integer, got {size!r}")
    return size


def _coerce_direction(direction: Union[SortDirection, str]) -> SortDirection:
    try:
        return SortDirection(direction)
    except ValueError:
        raise InvalidArgument(f"Sort direction must be 'asc' or 'desc', got {direction!r}") from None


class TabularViewEngine:
    """Owns the view state of one table over one record collection.

    Usage:
        engine = TabularViewEngine(cases, CASE_COLUMNS, page_size=10)
        engine.set_search_text('riyadh')
        engine.set_sort('date', 'desc')
        page = engine.get_visible_page()
    """

    def __init__(self, records: Iterable[Record] = (),
                 columns: Sequence[ColumnDescriptor] = (),
                 page_size: int = DEFAULT_PAGE_SIZE):
        self._columns: Tuple[ColumnDescriptor, ...] = tuple(columns)
        self._by_key: Dict[str, ColumnDescriptor] = {c.key: c for c in self._columns}
        self._records, self._ids = _index(records)
        self._state = ViewState(page_size=_check_page_size(page_size))

    # --- reads -----------------------------------------------------------

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    @property
    def columns(self) -> Tuple[ColumnDescriptor, ...]:
        return self._columns

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def selected_ids(self) -> FrozenSet[Any]:
        return self._state.selected_ids

    def is_selected(self, rid: Any) -> bool:
        return rid in self._state.selected_ids

    def selected_records(self) -> List[Record]:
        """Selected rows in collection order, regardless of the current filter."""
        return [r for r in self._records if record_id(r) in self._state.selected_ids]

    def filtered_records(self) -> List[Record]:
        """Filtered and sorted rows, unpaginated."""
        filtered = filter_records(self._records, self._state.search_text, self._state.predicate)
        return sort_records(filtered, self._by_key.get(self._state.sort_key), self._state.direction)

    def select_all_state(self) -> SelectAllState:
        ids = [record_id(r) for r in
               filter_records(self._records, self._state.search_text, self._state.predicate)]
        chosen = sum(1 for rid in ids if rid in self._state.selected_ids)
        if chosen == 0:
            return SelectAllState.NONE
        if chosen == len(ids):
            return SelectAllState.ALL
        return SelectAllState.SOME

    def get_visible_page(self) -> VisiblePage:
        return derive_view(self._records, self._state, self._columns)

    # --- mutations -------------------------------------------------------

    def _commit(self, state: ViewState) -> None:
        total = len(filter_records(self._records, state.search_text, state.predicate))
        page_index = clamp_page(state.page_index, total, state.page_size)
        if page_index != state.page_index:
            logger.debug("table.page.clamped",
                         extra=log_context(requested=state.page_index, page=page_index, total=total))
        self._state = replace(state, page_index=page_index)

    def set_search_text(self, text: str) -> None:
        text = text or ''
        logger.debug("table.search.set", extra=log_context(search=text))
        self._commit(replace(self._state, search_text=text))

    def apply_filter(self, predicate: Optional[RecordPredicate]) -> None:
        self._commit(replace(self._state, predicate=predicate))

    def clear_filter(self) -> None:
        self.apply_filter(None)

    def set_sort(self, field_key: str, direction: Optional[Union[SortDirection, str]] = None) -> None:
        column = self._by_key.get(field_key)
        if column is None:
            raise InvalidColumn(field_key)
        if not column.sortable:
            raise InvalidColumn(field_key, 'column is not sortable')
        if direction is not None:
            new_direction = _coerce_direction(direction)
        elif field_key == self._state.sort_key:
            new_direction = self._state.direction.flipped()
        else:
            new_direction = SortDirection.ASC
        logger.debug("table.sort.set", extra=log_context(key=field_key, direction=new_direction.value))
        self._commit(replace(self._state, sort_key=field_key, direction=new_direction))

    def clear_sort(self) -> None:
        """Back to collection order."""
        logger.debug("table.sort.cleared")
        self._commit(replace(self._state, sort_key=None, direction=SortDirection.ASC))

    def set_page(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgument(f"Page index must be an integer, got {index!r}")
        if index < 0:
            raise OutOfRange(f"Page index must not be negative, got {index}")
        self._commit(replace(self._state, page_index=index))

    def set_page_size(self, size: int) -> None:
        self._commit(replace(self._state, page_size=_check_page_size(size)))

    def toggle_row_selection(self, rid: Any) -> None:
        if rid not in self._ids:
            logger.debug("table.selection.unknown_id", extra=log_context(id=rid))
            return
        self._commit(replace(self._state, selected_ids=self._state.selected_ids ^ {rid}))

    def toggle_select_all(self) -> None:
        """Select every filtered row, or clear them if all are already selected.

        Rows hidden by the current search/filter keep their selection.
        """
        ids = frozenset(record_id(r) for r in
                        filter_records(self._records, self._state.search_text, self._state.predicate))
        if not ids:
            return
        selected = self._state.selected_ids
        if ids <= selected:
            selected = selected - ids
        else:
            selected = selected | ids
        self._commit(replace(self._state, selected_ids=selected))

    def clear_selection(self) -> None:
        self._commit(replace(self._state, selected_ids=frozenset()))

    def replace_collection(self, records: Iterable[Record]) -> None:
        """Swap the collection, go back to the first page and drop stale selections."""
        rows, ids = _index(records)
        kept = self._state.selected_ids & ids
        dropped = len(self._state.selected_ids) - len(kept)
        logger.debug("table.collection.replaced",
                     extra=log_context(rows=len(rows), dropped_selection=dropped or None))
        self._records, self._ids = rows, ids
        self._commit(replace(self._state, page_index=0, selected_ids=kept))
