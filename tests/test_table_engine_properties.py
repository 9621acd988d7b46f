import copy
import random

from domain.models import ColumnDescriptor, SelectAllState, record_id
from services.table_engine import TabularViewEngine

COLUMNS = [
    ColumnDescriptor('id', 'ID', numeric=True),
    ColumnDescriptor('client', 'Client'),
    ColumnDescriptor('city', 'City'),
    ColumnDescriptor('fees', 'Fees', numeric=True),
]

CLIENTS = ['Najd Contracting', 'Gulf Logistics', 'ABC Trading', 'Reem Al-Shehri']
CITIES = ['Riyadh', 'Jeddah', 'Dammam']
SEARCHES = ['', 'a', 'riyadh', 'GULF', '1', 'zzz']
SORTS = [None, ('client', 'asc'), ('client', 'desc'), ('fees', 'asc'), ('fees', 'desc'), ('city', 'asc')]


def make_records(n=37, seed=3):
    rng = random.Random(seed)
    records = []
    for i in range(n):
        records.append({
            'id': i,
            'client': rng.choice(CLIENTS),
            'city': rng.choice(CITIES),
            'fees': rng.choice([None, 'n/a', 1000, 2500, 2500, 40000]),
        })
    return records


def configured(records, search, sort, page_size):
    engine = TabularViewEngine(records, COLUMNS, page_size=page_size)
    engine.set_search_text(search)
    if sort:
        engine.set_sort(*sort)
    return engine


def test_visible_page_is_idempotent():
    records = make_records()
    for search in SEARCHES:
        for sort in SORTS:
            engine = configured(records, search, sort, 7)
            engine.set_page(1)
            assert engine.get_visible_page() == engine.get_visible_page()


def test_filtered_rows_are_unmodified_collection_members():
    records = make_records()
    snapshot = copy.deepcopy(records)
    for search in SEARCHES:
        engine = configured(records, search, ('fees', 'desc'), 50)
        for row in engine.filtered_records():
            assert any(row is r for r in records)
    assert records == snapshot


def test_pages_concatenate_to_filtered_sorted_view():
    records = make_records()
    for search in SEARCHES:
        for sort in SORTS:
            for page_size in (1, 3, 10, 50):
                engine = configured(records, search, sort, page_size)
                expected = engine.filtered_records()
                total_pages = engine.get_visible_page().total_pages
                collected = []
                for index in range(total_pages):
                    engine.set_page(index)
                    collected.extend(engine.get_visible_page().rows)
                assert collected == expected
                assert len({record_id(r) for r in collected}) == len(collected)


def test_sort_is_stable_for_equal_keys():
    records = make_records()
    for key in ('client', 'city', 'fees'):
        for direction in ('asc', 'desc'):
            engine = configured(records, '', (key, direction), 50)
            rows = engine.filtered_records()
            column = next(c for c in COLUMNS if c.key == key)
            for a, b in zip(rows, rows[1:]):
                if str(column.value_of(a)) == str(column.value_of(b)):
                    assert a['id'] < b['id']


def test_resorting_unchanged_data_is_idempotent():
    records = make_records()
    engine = configured(records, '', ('city', 'asc'), 50)
    first = engine.filtered_records()
    engine.set_sort('city', 'asc')
    assert engine.filtered_records() == first


def test_selection_stays_within_collection():
    rng = random.Random(11)
    records = make_records()
    engine = TabularViewEngine(records, COLUMNS, page_size=5)
    for _ in range(300):
        op = rng.randrange(4)
        if op == 0:
            engine.toggle_row_selection(rng.randrange(-5, 60))
        elif op == 1:
            engine.set_search_text(rng.choice(SEARCHES))
            engine.toggle_select_all()
        elif op == 2:
            subset = [r for r in records if rng.random() < 0.6]
            engine.replace_collection(subset)
        else:
            engine.replace_collection(records)
        present = {record_id(r) for r in engine.records}
        assert engine.selected_ids <= present


def test_select_all_twice_round_trips():
    records = make_records()
    for search in SEARCHES:
        engine = configured(records, search, None, 10)
        before = engine.selected_ids
        engine.toggle_select_all()
        engine.toggle_select_all()
        assert engine.selected_ids == before

        # Starting from a fully selected filtered set, outside rows selected too.
        engine.set_search_text('')
        engine.toggle_row_selection(0)
        engine.set_search_text(search)
        engine.toggle_select_all()
        if engine.select_all_state() is not SelectAllState.ALL:
            engine.toggle_select_all()
        before = engine.selected_ids
        engine.toggle_select_all()
        engine.toggle_select_all()
        assert engine.selected_ids == before
