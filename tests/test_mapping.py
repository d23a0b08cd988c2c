# tests/test_mapping.py
from __future__ import annotations

import pytest

from eoapi import mapping as m
from eoapi.exceptions import UnexpectedResponse
from eoapi.models import Rate


def test_dotted_paths_and_list_indices():
    d = {"a": {"b": [{"c": "x"}]}}
    assert m.string(d, "a.b.0.c") == "x"
    with pytest.raises(UnexpectedResponse, match="a.b.1.c"):
        m.string(d, "a.b.1.c")


def test_numbers_accept_numeric_strings():
    d = {"f": "27.5298", "i": "1026", "n": 3}
    assert m.number(d, "f") == 27.5298
    assert m.integer(d, "i") == 1026
    assert m.number(d, "n") == 3.0
    with pytest.raises(UnexpectedResponse):
        m.integer({"x": "1.5"}, "x")
    with pytest.raises(UnexpectedResponse):
        m.number({"x": True}, "x")


@pytest.mark.parametrize("value,expected", [(True, True), (0, False), ("1", True), ("0", False)])
def test_booleans(value, expected):
    assert m.boolean({"v": value}, "v") is expected


def test_boolean_rejects_other_values():
    with pytest.raises(UnexpectedResponse):
        m.boolean({"v": "yes"}, "v")


def test_optional_strings():
    assert m.string_maybe({"v": None}, "v") is None
    assert m.string_maybe({}, "v") is None
    with pytest.raises(UnexpectedResponse):
        m.string_maybe({"v": 3}, "v")


def test_rate_and_wifescore():
    d = {"rate": "1.40", "pct": 93.5, "prop": "0.935"}
    assert m.rate(d, "rate") == Rate(28)
    assert m.wifescore_percent(d, "pct").proportion == pytest.approx(0.935)
    assert m.wifescore_proportion(d, "prop").proportion == pytest.approx(0.935)


@pytest.mark.parametrize("value", ["nan", "inf", -1.0])
def test_rate_rejects_values_with_no_valid_rate(value):
    with pytest.raises(UnexpectedResponse):
        m.rate({"rate": value}, "rate")


def test_skillsets_from_nested_and_flat_objects():
    seven = {
        "Stream": 1, "Jumpstream": 2, "Handstream": 3, "Stamina": 4,
        "JackSpeed": 5, "Chordjack": 6, "Technical": 7,
    }
    nested = m.chart_skillsets({"skillsets": seven}, "skillsets")
    flat = m.chart_skillsets(seven, "")
    assert nested == flat
    assert nested.jackspeed == 5.0

    eight = m.skillsets8({"ss": {**seven, "Overall": 9}}, "ss")
    assert eight.overall == 9.0 and eight.technical == 7.0
