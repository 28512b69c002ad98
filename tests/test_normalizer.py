import pytest

from normalizer import (
    normalize, base_normalize, canonicalize_vendor, tokens, is_microgreens_subscription,
)


def test_normalize_strips_parens_and_punctuation():
    assert normalize("Tomato (Desi) - 500g") == "tomato 500g"
    assert normalize("  Baby-Spinach,  Fresh!! ") == "baby spinach fresh"


@pytest.mark.parametrize("value", [None, "", 0])
def test_normalize_empty_input(value):
    assert normalize(value) == ""


@pytest.mark.parametrize("raw, expected", [
    ("Tomato (Desi) - 500g", "tomato"),
    ("Coriander 1 bunch", "coriander"),
    ("Spinach per 250 gms approx", "spinach"),
    ("Onion 2 kg", "onion"),
    ("Elaichi Banana 6 pcs", "elaichi banana"),
    ("Broccoli", "broccoli"),
])
def test_base_normalize_drops_pack_sizes(raw, expected):
    assert base_normalize(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("Anderi", "Andheri"),
    ("andheri", "Andheri"),
    ("Anderhi", "Andheri"),
    ("Andheri Hindi", "Andheri"),
    ("Dadar hindi", "Dadar"),
    ("  Vashi ", "Vashi"),
    ("", "Unknown"),
    (None, "Unknown"),
    ("Hindi", "Unknown"),
])
def test_canonicalize_vendor(raw, expected):
    assert canonicalize_vendor(raw) == expected


def test_tokens_ignores_short_words():
    assert tokens("red on the vine tomato") == {"red", "the", "vine", "tomato"}


def test_microgreens_subscription():
    assert is_microgreens_subscription("Microgreen Subscription (200g)")
    assert is_microgreens_subscription("Weekly microgreens - subscription")
    assert not is_microgreens_subscription("Microgreens Sunflower 100g")
