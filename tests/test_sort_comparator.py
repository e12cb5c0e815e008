from datetime import date, datetime, timedelta, timezone

from factories import make_record, paths

from paginated_table.models import SortDirection, SortState
from paginated_table.services.sort_comparator import (
    compare_values,
    natural_compare,
    natural_sorted,
    sort_records,
)


def _sorted_values(values, direction):
    records = [make_record(f"r{i}", v=v) for i, v in enumerate(values)]
    return [r.get_value("v") for r in sort_records(records, SortState("v", direction))]


def test_natural_sort_orders_digit_runs_numerically():
    assert natural_sorted(["file10", "file2", "file1"]) == ["file1", "file2", "file10"]
    assert _sorted_values(["file10", "file2", "file1"], SortDirection.ASC) == [
        "file1",
        "file2",
        "file10",
    ]


def test_natural_compare_is_case_insensitive():
    assert natural_compare("Alpha", "alpha") == 0
    assert natural_compare("alpha", "Beta") < 0
    assert natural_compare("v1.10", "v1.9") > 0


def test_empty_values_sort_last_in_both_directions():
    assert _sorted_values([5, None, 1], SortDirection.ASC) == [1, 5, None]
    assert _sorted_values([5, None, 1], SortDirection.DESC) == [5, 1, None]
    assert _sorted_values(["", "b", "null", "a"], SortDirection.DESC) == ["b", "a", "", "null"]


def test_compare_rules():
    assert compare_values(None, None) == 0
    assert compare_values(None, 1, SortDirection.DESC) == 1
    assert compare_values(2, 10) < 0
    assert compare_values(2.5, 2) > 0
    assert compare_values(date(2024, 1, 2), datetime(2024, 1, 1, 23, 0)) > 0
    assert compare_values(False, True) < 0
    assert compare_values(True, False, SortDirection.DESC) < 0


def test_mixed_types_fall_back_to_natural_strings():
    assert compare_values("item 9", 10) > 0  # "item 9" vs "10"
    assert compare_values(["b"], ["a"]) > 0


def test_no_sort_property_keeps_source_order():
    records = [make_record("b", v=2), make_record("a", v=1)]
    assert paths(sort_records(records, SortState())) == ["b", "a"]


def test_sort_is_stable_for_ties():
    records = [make_record("x", v=1), make_record("y", v=1), make_record("z", v=0)]
    assert paths(sort_records(records, SortState("v"))) == ["z", "x", "y"]


def test_accented_strings_sort_with_their_base_letters():
    assert natural_sorted(["Zoe", "Émile", "adam"]) == ["adam", "Émile", "Zoe"]
    assert _sorted_values(["Zoe", "Émile", "adam", "eve"], SortDirection.ASC) == [
        "adam",
        "Émile",
        "eve",
        "Zoe",
    ]
    assert natural_compare("cafe", "café") < 0
    assert natural_compare("Ångström 10", "angstrom 9") > 0


def test_extreme_and_mixed_dates_compare_without_error():
    assert compare_values(date.min, date(2020, 1, 1)) < 0
    assert compare_values(datetime.max, date.max) > 0
    tokyo = timezone(timedelta(hours=9))
    nine_tokyo = datetime(2024, 1, 1, 9, tzinfo=tokyo)  # 00:00 UTC
    assert compare_values(nine_tokyo, datetime(2024, 1, 1, 1, tzinfo=timezone.utc)) < 0
    assert compare_values(datetime(2024, 1, 1, 12, tzinfo=tokyo), datetime(2024, 1, 1, 11)) > 0
    assert _sorted_values([date(2020, 1, 1), None, date.min], SortDirection.DESC) == [
        date(2020, 1, 1),
        date.min,
        None,
    ]
