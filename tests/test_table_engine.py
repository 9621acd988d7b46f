import pytest

from domain.errors import InvalidArgument, InvalidColumn, OutOfRange, TableError
from domain.models import ColumnDescriptor, SelectAllState, SortDirection, ViewState
from services.table_engine import TabularViewEngine, derive_view

COLUMNS = [
    ColumnDescriptor('id', 'ID', numeric=True),
    ColumnDescriptor('name', 'Name'),
    ColumnDescriptor('fees', 'Fees', numeric=True),
    ColumnDescriptor('notes', 'Notes', sortable=False),
]


def make_records(n):
    return [{'id': i, 'name': f"Case {i:02d}"} for i in range(n)]


def ids(rows):
    return [r['id'] for r in rows]


def test_pages_over_25_records():
    records = make_records(25)
    engine = TabularViewEngine(records, COLUMNS, page_size=10)

    page = engine.get_visible_page()
    assert page.rows == tuple(records[0:10])
    assert page.total_count == 25
    assert page.total_pages == 3

    engine.set_page(2)
    page = engine.get_visible_page()
    assert page.rows == tuple(records[20:25])
    assert len(page.rows) == 5

    engine.set_page(3)
    assert engine.state.page_index == 2
    assert engine.get_visible_page().rows == tuple(records[20:25])


def test_sort_ties_keep_original_order():
    records = [{'id': 1, 'name': 'B'}, {'id': 2, 'name': 'A'}, {'id': 3, 'name': 'A'}]
    engine = TabularViewEngine(records, COLUMNS)
    engine.set_sort('name', 'asc')
    assert ids(engine.get_visible_page().rows) == [2, 3, 1]


def test_descending_sort_keeps_ties_in_original_order():
    records = [{'id': 1, 'name': 'A'}, {'id': 2, 'name': 'B'}, {'id': 3, 'name': 'A'}]
    engine = TabularViewEngine(records, COLUMNS)
    engine.set_sort('name', SortDirection.DESC)
    assert ids(engine.get_visible_page().rows) == [2, 1, 3]


def test_search_without_matches_yields_empty_first_page():
    engine = TabularViewEngine(make_records(25), COLUMNS, page_size=10)
    engine.set_page(2)
    engine.set_search_text('xyz')
    page = engine.get_visible_page()
    assert page.rows == ()
    assert page.page_index == 0
    assert page.total_count == 0
    assert page.total_pages == 0
    assert engine.state.page_index == 0


def test_sort_on_unsortable_column_is_rejected():
    engine = TabularViewEngine(make_records(3), COLUMNS)
    engine.set_sort('name', 'desc')
    with pytest.raises(InvalidColumn) as exc:
        engine.set_sort('notes')
    assert exc.value.key == 'notes'
    assert engine.state.sort_key == 'name'
    assert engine.state.direction is SortDirection.DESC


def test_sort_on_unknown_column_is_rejected():
    engine = TabularViewEngine(make_records(3), COLUMNS)
    with pytest.raises(InvalidColumn):
        engine.set_sort('missing')
    assert engine.state.sort_key is None


def test_select_all_only_touches_filtered_rows():
    records = [{'id': 1, 'name': 'Ahmed'}, {'id': 2, 'name': 'Ahlam'},
               {'id': 3, 'name': 'Ahmad'}, {'id': 4, 'name': 'Sara'}]
    engine = TabularViewEngine(records, COLUMNS)
    engine.set_search_text('ah')
    engine.toggle_select_all()
    assert engine.selected_ids == {1, 2, 3}

    engine.set_search_text('ahlam')
    assert engine.select_all_state() is SelectAllState.ALL
    engine.toggle_select_all()
    assert engine.selected_ids == {1, 3}


def test_invalid_page_size_leaves_state_unchanged():
    engine = TabularViewEngine(make_records(5), COLUMNS, page_size=10)
    for bad in (0, -1, 2.5, True, None):
        with pytest.raises(InvalidArgument):
            engine.set_page_size(bad)
    assert engine.state.page_size == 10


def test_constructor_rejects_bad_page_size():
    with pytest.raises(InvalidArgument):
        TabularViewEngine(make_records(2), COLUMNS, page_size=0)


def test_negative_page_is_out_of_range():
    engine = TabularViewEngine(make_records(25), COLUMNS, page_size=10)
    engine.set_page(1)
    with pytest.raises(OutOfRange):
        engine.set_page(-1)
    assert engine.state.page_index == 1


def test_errors_are_value_errors():
    assert issubclass(TableError, ValueError)
    for cls in (InvalidArgument, InvalidColumn, OutOfRange):
        assert issubclass(cls, TableError)


def test_set_sort_toggles_direction_on_same_column():
    engine = TabularViewEngine(make_records(3), COLUMNS)
    engine.set_sort('name')
    assert engine.state.direction is SortDirection.ASC
    engine.set_sort('name')
    assert engine.state.direction is SortDirection.DESC
    engine.set_sort('name')
    assert engine.state.direction is SortDirection.ASC
    engine.set_sort('id')
    assert engine.state.sort_key == 'id'
    assert engine.state.direction is SortDirection.ASC


def test_set_sort_rejects_unknown_direction():
    engine = TabularViewEngine(make_records(3), COLUMNS)
    with pytest.raises(InvalidArgument):
        engine.set_sort('name', 'up')
    assert engine.state.sort_key is None


def test_numeric_sort_puts_missing_and_non_numeric_lowest():
    records = [{'id': 1, 'fees': 300}, {'id': 2, 'fees': None},
               {'id': 3, 'fees': 'abc'}, {'id': 4, 'fees': 50}, {'id': 5, 'fees': '1200'}]
    engine = TabularViewEngine(records, COLUMNS)
    engine.set_sort('fees', 'asc')
    assert ids(engine.get_visible_page().rows) == [2, 3, 4, 1, 5]
    engine.set_sort('fees', 'desc')
    assert ids(engine.get_visible_page().rows) == [5, 1, 4, 2, 3]


def test_numeric_sort_handles_integers_beyond_float_range():
    records = [{'id': 1, 'fees': 10 ** 400}, {'id': 2, 'fees': 5},
               {'id': 3, 'fees': -(10 ** 400)}, {'id': 4, 'fees': None}]
    engine = TabularViewEngine(records, COLUMNS)
    engine.set_sort('fees')
    assert ids(engine.get_visible_page().rows) == [4, 3, 2, 1]
    engine.set_sort('fees')
    assert ids(engine.get_visible_page().rows) == [1, 2, 3, 4]


def test_clear_sort_restores_collection_order():
    records = make_records(5)
    engine = TabularViewEngine(records, COLUMNS)
    engine.set_sort('name', 'desc')
    engine.clear_sort()
    assert engine.state.sort_key is None
    assert engine.state.direction is SortDirection.ASC
    assert engine.get_visible_page().rows == tuple(records)
    engine.set_sort('name')
    assert engine.state.direction is SortDirection.ASC


def test_string_sort_is_case_sensitive():
    records = [{'id': 1, 'name': 'b'}, {'id': 2, 'name': 'B'}, {'id': 3, 'name': 'a'}]
    engine = TabularViewEngine(records, COLUMNS)
    engine.set_sort('name')
    assert ids(engine.get_visible_page().rows) == [2, 3, 1]


def test_nested_values_sort_by_formatted_text():
    columns = [ColumnDescriptor('client', 'Client', format=lambda v, row=None: (v or {}).get('name', ''))]
    records = [{'_id': 'a', 'client': {'name': 'Najd', 'city': 'Abha'}},
               {'_id': 'b', 'client': {'name': 'Gulf', 'city': 'Tabuk'}}]
    engine = TabularViewEngine(records, columns)
    engine.set_sort('client')
    assert [r['_id'] for r in engine.get_visible_page().rows] == ['b', 'a']


def test_dotted_column_key_reads_nested_field():
    columns = [ColumnDescriptor('assigned_to.name', 'Lawyer')]
    records = [{'id': 1, 'assigned_to': {'name': 'Saad'}}, {'id': 2, 'assigned_to': {'name': 'Huda'}},
               {'id': 3, 'assigned_to': None}]
    engine = TabularViewEngine(records, columns)
    engine.set_sort('assigned_to.name')
    assert ids(engine.get_visible_page().rows) == [3, 2, 1]


def test_search_is_case_insensitive_over_nested_values_only():
    records = [{'id': 1, 'client': {'name': 'Gulf Logistics'}, 'note': None},
               {'id': 2, 'client': {'name': 'Najd'}, 'urgent': True}]
    engine = TabularViewEngine(records, COLUMNS)
    engine.set_search_text('LOGISTICS')
    assert ids(engine.get_visible_page().rows) == [1]
    engine.set_search_text('name')
    assert engine.get_visible_page().rows == ()
    engine.set_search_text('none')
    assert engine.get_visible_page().rows == ()
    engine.set_search_text('true')
    assert ids(engine.get_visible_page().rows) == [2]
    engine.set_search_text('')
    assert engine.get_visible_page().total_count == 2


def test_predicate_and_search_combine_and_clamp_page():
    records = [{'id': i, 'name': f"Case {i}", 'status': 'active' if i % 2 else 'pending'} for i in range(30)]
    engine = TabularViewEngine(records, COLUMNS, page_size=5)
    engine.set_page(5)
    engine.apply_filter(lambda r: r['status'] == 'active')
    assert engine.state.page_index == 2
    engine.set_search_text('case 1')
    page = engine.get_visible_page()
    assert all(r['status'] == 'active' and 'case 1' in r['name'].lower() for r in page.rows)
    engine.clear_filter()
    assert engine.state.predicate is None


def test_page_size_change_clamps_page():
    engine = TabularViewEngine(make_records(25), COLUMNS, page_size=5)
    engine.set_page(4)
    engine.set_page_size(10)
    assert engine.state.page_index == 2
    engine.set_page_size(50)
    assert engine.state.page_index == 0


def test_toggle_row_selection_and_unknown_id():
    engine = TabularViewEngine(make_records(3), COLUMNS)
    engine.toggle_row_selection(1)
    assert engine.is_selected(1)
    engine.toggle_row_selection(99)
    assert engine.selected_ids == {1}
    engine.toggle_row_selection(1)
    assert engine.selected_ids == frozenset()


def test_select_all_state_transitions():
    engine = TabularViewEngine(make_records(3), COLUMNS)
    assert engine.select_all_state() is SelectAllState.NONE
    engine.toggle_row_selection(0)
    assert engine.select_all_state() is SelectAllState.SOME
    engine.toggle_select_all()
    assert engine.select_all_state() is SelectAllState.ALL
    engine.toggle_select_all()
    assert engine.select_all_state() is SelectAllState.NONE


def test_toggle_select_all_on_empty_filter_is_noop():
    engine = TabularViewEngine(make_records(3), COLUMNS)
    engine.toggle_row_selection(2)
    engine.set_search_text('nothing matches')
    engine.toggle_select_all()
    assert engine.selected_ids == {2}


def test_selected_records_follow_collection_order():
    engine = TabularViewEngine(make_records(5), COLUMNS)
    engine.set_sort('id', 'desc')
    engine.toggle_row_selection(4)
    engine.toggle_row_selection(1)
    assert ids(engine.selected_records()) == [1, 4]


def test_clear_selection():
    engine = TabularViewEngine(make_records(5), COLUMNS)
    engine.toggle_select_all()
    engine.clear_selection()
    assert engine.selected_ids == frozenset()


def test_replace_collection_resets_page_and_drops_stale_selection():
    engine = TabularViewEngine(make_records(25), COLUMNS, page_size=10)
    engine.set_page(2)
    engine.toggle_row_selection(3)
    engine.toggle_row_selection(24)
    engine.replace_collection(make_records(10))
    assert engine.state.page_index == 0
    assert engine.selected_ids == {3}
    assert len(engine.records) == 10


def test_records_need_unique_identifiers():
    with pytest.raises(InvalidArgument):
        TabularViewEngine([{'name': 'no id'}], COLUMNS)
    with pytest.raises(InvalidArgument):
        TabularViewEngine([{'id': 1}, {'id': 1}], COLUMNS)
    engine = TabularViewEngine(make_records(2), COLUMNS)
    with pytest.raises(InvalidArgument):
        engine.replace_collection([{'id': 5}, {'name': 'x'}])
    assert ids(engine.records) == [0, 1]


def test_underscore_id_is_accepted():
    engine = TabularViewEngine([{'_id': 'x1'}, {'_id': 'x2'}], COLUMNS)
    engine.toggle_row_selection('x2')
    assert engine.selected_ids == {'x2'}


def test_set_page_rejects_non_integer():
    engine = TabularViewEngine(make_records(25), COLUMNS)
    with pytest.raises(InvalidArgument):
        engine.set_page('2')


def test_derive_view_does_not_touch_state():
    records = make_records(12)
    state = ViewState(sort_key='id', direction=SortDirection.DESC, page_index=7, page_size=5)
    page = derive_view(records, state, COLUMNS)
    assert page.page_index == 2
    assert ids(page.rows) == [1, 0]
    assert state.page_index == 7


def test_visible_page_offsets():
    engine = TabularViewEngine(make_records(25), COLUMNS, page_size=10)
    engine.set_page(2)
    page = engine.get_visible_page()
    assert (page.start, page.end) == (21, 25)
    engine.set_search_text('zzz')
    page = engine.get_visible_page()
    assert (page.start, page.end) == (0, 0)
