from datetime import date, datetime

from paginated_table.models import LinkRef
from paginated_table.services.value_normalizer import (
    is_empty,
    split_multi_values,
    to_display_string,
    to_search_atoms,
)


def test_display_string_primitives():
    assert to_display_string(None) == ""
    assert to_display_string("abc") == "abc"
    assert to_display_string(42) == "42"
    assert to_display_string(3.0) == "3"
    assert to_display_string(2.5) == "2.5"
    assert to_display_string(True) == "true"
    assert to_display_string(False) == "false"


def test_display_string_dates_are_iso():
    assert to_display_string(date(2024, 3, 9)) == "2024-03-09"
    assert to_display_string(datetime(2024, 3, 9, 17, 30)) == "2024-03-09"


def test_display_string_links_and_lists():
    assert to_display_string(LinkRef("notes/a.md")) == "notes/a.md"
    assert to_display_string(LinkRef("notes/a.md", display="A")) == "A"
    assert to_display_string(["x", 1, None, LinkRef("b.md", "B")]) == "x, 1, , B"


def test_split_multi_values_respects_bracket_nesting():
    assert split_multi_values("[[a]], [[b]]") == ["[[a]]", "[[b]]"]
    assert split_multi_values("[[a, b]], [[c]]") == ["[[a, b]]", "[[c]]"]
    # Plain comma text is one atom
    assert split_multi_values("Smith, John") == ["Smith, John"]
    assert split_multi_values("[[a]], plain") == ["[[a]], plain"]
    # Unbalanced brackets are not split
    assert split_multi_values("[[a], [[b]]") == ["[[a], [[b]]"]


def test_search_atoms():
    assert to_search_atoms("open") == ["open"]
    assert to_search_atoms(7) == ["7"]
    assert to_search_atoms(["a", "b"]) == ["a", "b"]
    assert to_search_atoms("[[x]], [[y, z]]") == ["[[x]]", "[[y, z]]"]
    assert to_search_atoms(None) == [""]
    assert to_search_atoms([]) == [""]
    # Blank list entries contribute their own empty atom
    assert to_search_atoms(["a", None]) == ["a", ""]


def test_is_empty():
    for value in (None, "", "null", [], ()):
        assert is_empty(value)
    for value in ("x", 0, False, ["a"], LinkRef("a.md")):
        assert not is_empty(value)
    assert is_empty([None])
