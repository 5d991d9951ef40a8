"""Tests for the mood catalog."""

from mood.catalog import all_moods, is_valid, lookup


def test_five_levels_ascending():
    moods = all_moods()
    assert [m.value for m in moods] == [1, 2, 3, 4, 5]


def test_lookup_known_value():
    level = lookup(5)
    assert level.label == "Excellent!"
    assert level.color == "#3b82f6"


def test_each_value_has_distinct_glyph_and_color():
    moods = all_moods()
    assert len({m.glyph for m in moods}) == 5
    assert len({m.color for m in moods}) == 5


def test_lookup_unknown_values():
    for value in (0, 6, -1, None, "3", 3.0, True):
        assert lookup(value) is None
        assert not is_valid(value)
