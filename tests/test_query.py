"""Search, filter, sort and pagination over plain records."""
import pytest

from app.services.query import (
    ASC, DESC, ListQuery, SortConfig, filter_records, paginate, run_query, sort_records, toggle_sort
)

PATIENTS = [
    {"id": "p1", "name": "John Doe", "status": "active", "allergies": ["Penicillin"]},
    {"id": "p2", "name": "Kamala Fernando", "status": "inactive", "allergies": []},
    {"id": "p3", "name": "Ravi Jayasuriya", "status": "active", "allergies": ["Dust", "Pollen"]},
]


def test_search_is_case_insensitive_substring():
    result = filter_records(PATIENTS, search="jo", search_fields=("name",))

    assert [r["name"] for r in result] == ["John Doe"]


def test_search_matches_any_list_element():
    result = filter_records(PATIENTS, search="POLL", search_fields=("name", "allergies"))

    assert [r["id"] for r in result] == ["p3"]


def test_search_and_filters_combine():
    result = filter_records(PATIENTS, search="a", search_fields=("name",), filters={"status": "active"})

    assert [r["id"] for r in result] == ["p3"]


def test_empty_filter_values_are_skipped():
    result = filter_records(PATIENTS, search="  ", filters={"status": "", "name": None})

    assert len(result) == 3


def test_predicates_must_all_hold():
    result = filter_records(PATIENTS, predicates=[lambda r: r["status"] == "active", lambda r: r["allergies"]])

    assert [r["id"] for r in result] == ["p1", "p3"]


def test_toggle_sort_cycles_direction():
    first = toggle_sort(None, "date")
    second = toggle_sort(first, "date")
    third = toggle_sort(second, "date")

    assert first == SortConfig("date", ASC)
    assert second == SortConfig("date", DESC)
    assert third == SortConfig("date", ASC)
    assert toggle_sort(second, "name") == SortConfig("name", ASC)


def test_invalid_direction_rejected():
    with pytest.raises(ValueError):
        SortConfig("date", "sideways")


def test_toggling_date_sort_twice_keeps_tie_order():
    records = [
        {"id": "a", "date": "2024-06-02"},
        {"id": "b", "date": "2024-06-01"},
        {"id": "c", "date": "2024-06-02"},
        {"id": "d", "date": "2024-06-01"},
    ]
    sort = toggle_sort(None, "date")
    ascending = sort_records(records, sort, date_fields=("date",))

    sort = toggle_sort(toggle_sort(sort, "date"), "date")
    again = sort_records(records, sort, date_fields=("date",))

    assert sort.direction == ASC
    assert [r["id"] for r in ascending] == ["b", "d", "a", "c"]
    assert [r["id"] for r in again] == ["b", "d", "a", "c"]


def test_descending_sort_is_stable():
    records = [{"id": "a", "n": 1}, {"id": "b", "n": 2}, {"id": "c", "n": 1}]

    result = sort_records(records, SortConfig("n", DESC))

    assert [r["id"] for r in result] == ["b", "a", "c"]


def test_absent_dates_sort_as_epoch():
    records = [{"id": "a", "lastVisit": "2024-01-01"}, {"id": "b"}, {"id": "c", "lastVisit": "bogus"}]

    result = sort_records(records, SortConfig("lastVisit"), date_fields=("lastVisit",))

    assert [r["id"] for r in result] == ["b", "c", "a"]


def test_numeric_sort_is_not_lexicographic():
    records = [{"id": "a", "price": 900}, {"id": "b", "price": 10000}, {"id": "c"}]

    result = sort_records(records, SortConfig("price", DESC), numeric_fields=("price",))

    assert [r["id"] for r in result] == ["b", "a", "c"]


def test_strings_sort_lexicographically():
    result = sort_records(PATIENTS, SortConfig("name", DESC))

    assert [r["id"] for r in result] == ["p3", "p2", "p1"]


def test_no_sort_keeps_input_order():
    assert sort_records(PATIENTS, None) == PATIENTS


def test_pagination_of_twelve_records():
    records = list(range(1, 13))

    first = paginate(records, 1, 5)
    last = paginate(records, 3, 5)
    beyond = paginate(records, 4, 5)

    assert first.items == [1, 2, 3, 4, 5]
    assert first.total == 12
    assert first.total_pages == 3
    assert last.items == [11, 12]
    assert beyond.items == []
    assert beyond.total_pages == 3


def test_pagination_of_empty_set():
    page = paginate([], 1, 5)

    assert page.items == []
    assert page.total == 0
    assert page.total_pages == 0


def test_pagination_rejects_zero_page_size():
    with pytest.raises(ValueError):
        paginate([1, 2], 1, 0)


def test_run_query_filters_sorts_then_pages():
    records = [{"id": f"r{i:02d}", "status": "active" if i % 2 else "inactive", "rank": i} for i in range(1, 13)]
    query = ListQuery(filters={"status": "active"}, sort=SortConfig("rank", DESC), page=2, page_size=4)

    page = run_query(records, query)

    assert page.total == 6
    assert page.total_pages == 2
    assert [r["rank"] for r in page.items] == [3, 1]
