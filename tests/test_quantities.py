import pytest

from quantities import (
    fmt_number, fmt_weight, make_s_unit_string, parse_grams_from_name,
    parse_order_quantity, parse_qty_cell_to_grams, is_unit_pattern,
)


@pytest.mark.parametrize("grams, expected", [
    (0, "0 gms"),
    (None, "0 gms"),
    (12.4, "12 gms"),
    (999, "999 gms"),
    (1000, "1 kg"),
    (1500, "1.5 kg"),
    (1120, "1.12 kg"),
    (2800, "2.8 kg"),
])
def test_fmt_weight(grams, expected):
    assert fmt_weight(grams) == expected


@pytest.mark.parametrize("name, expected", [
    ("Spinach (per 250 g)", 250),
    ("Paneer (200gms)", 200),
    ("Mushroom 200 grams", 200),
    ("Onion 1.5 kg", 1500),
    ("Potato - 2kg", 2000),
    ("Onion", None),
    ("", None),
    (None, None),
])
def test_parse_grams_from_name(name, expected):
    assert parse_grams_from_name(name) == expected


@pytest.mark.parametrize("cell, expected", [
    ("500 gms", 500),
    ("250 g", 250),
    ("1 kg", 1000),
    ("1.5 KG", 1500),
    ("6 pcs", None),
    ("1 bunch", None),
    ("—", None),
    ("-", None),
    ("", None),
    (None, None),
    ("250", None),
])
def test_parse_qty_cell_to_grams(cell, expected):
    assert parse_qty_cell_to_grams(cell) == expected


def test_is_unit_pattern():
    assert is_unit_pattern("6 pcs")
    assert is_unit_pattern("one head")
    assert not is_unit_pattern("500 gms")
    assert not is_unit_pattern("")


@pytest.mark.parametrize("cell, expected", [
    ("3", 3),
    (2, 2),
    (1.5, 1.5),
    ("2.5", 2.5),
    ("3 nos", 3),
    ("abc", 0),
    ("", 0),
    (None, 0),
    (0, 0),
    ("1.2.3", 0),
])
def test_parse_order_quantity(cell, expected):
    assert parse_order_quantity(cell) == expected


@pytest.mark.parametrize("units, pattern, expected", [
    (4, "6 pcs", "24 pcs"),
    (2, "6pcs", "12 pcs"),
    (2, "one bunch", "2 bunch"),
    (3, "Two heads", "6 heads"),
    (3, "bunch", "bunch"),
    (3, "", "3"),
    (0, "", ""),
    (0, "6 pcs", "6 pcs"),
])
def test_make_s_unit_string(units, pattern, expected):
    assert make_s_unit_string(units, pattern) == expected


def test_fmt_number():
    assert fmt_number(3.0) == "3"
    assert fmt_number(2.5) == "2.5"
    assert fmt_number(12) == "12"
