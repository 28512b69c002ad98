import pytest

from config import DEFAULT_BUFFER_PERCENT, default_buffer_percent, parse_buffer_percent


@pytest.mark.parametrize("raw, expected", [
    (None, DEFAULT_BUFFER_PERCENT),
    ("", DEFAULT_BUFFER_PERCENT),
    ("   ", DEFAULT_BUFFER_PERCENT),
    ("abc", DEFAULT_BUFFER_PERCENT),
    ("nan", DEFAULT_BUFFER_PERCENT),
    ("inf", DEFAULT_BUFFER_PERCENT),
    ("-inf", DEFAULT_BUFFER_PERCENT),
    ("1e999", DEFAULT_BUFFER_PERCENT),
    (True, DEFAULT_BUFFER_PERCENT),
    ("15", 15),
    (20, 20),
    ("12%", 12),
    (0, 0),
])
def test_parse_buffer_percent(raw, expected):
    assert parse_buffer_percent(raw) == expected


def test_fraction_is_read_as_percent():
    assert parse_buffer_percent(0.12) == 12
    assert parse_buffer_percent("0.5") == 50
    assert parse_buffer_percent("0.125") == 12.5


def test_default_buffer_from_environment(monkeypatch):
    monkeypatch.setenv("VENDOR_BUFFER_PERCENT", "18")
    assert default_buffer_percent() == 18
    monkeypatch.delenv("VENDOR_BUFFER_PERCENT")
    assert default_buffer_percent() == DEFAULT_BUFFER_PERCENT
