import pytest

from conftest import MAPPING_HEADER
from vendor_data import ENGLISH, HINDI, build_reference_index, get_localized_name


def test_both_name_columns_indexed(index):
    assert index.by_norm["tomato desi"].canonical == "Tomato Desi"
    assert index.by_norm["tomato 500g"].canonical == "Tomato (Desi) - 500g"
    assert index.by_base["tomato"].canonical == "Tomato (Desi) - 500g"
    assert index.by_base["elaichi big banana"].canonical == "Elaichi Big Banana 6pcs"


def test_weight_and_unit_products_classified(index):
    tomato = index.by_norm["tomato desi"]
    assert tomato.per_unit_grams == 500
    assert tomato.unit_pattern is None

    banana = index.by_norm["banana elaichi"]
    assert banana.per_unit_grams is None
    assert banana.unit_pattern == "6 pcs"

    assert index.by_norm["lettuce iceberg"].per_unit_grams == 1000


def test_vendor_key_is_canonicalized(index):
    # "Anderi" in the sheet groups with Andheri
    assert index.by_norm["banana elaichi"].vendor == "Andheri"


def test_vendor_meta_merge(index):
    andheri = index.vendor_meta["Andheri"]
    assert andheri.phone == "919800000001"
    assert andheri.language == HINDI      # later English row does not downgrade
    assert andheri.contact_name == "Adil"

    assert index.vendor_meta["Adil"].phone == "919800000001"
    assert index.vendor_meta["Dadar"].language == ENGLISH
    assert index.vendor_meta["Ramesh"].phone == "919800000002"


def test_first_row_wins_but_weight_is_backfilled():
    rows = [
        MAPPING_HEADER,
        [1, "Okra", "", "", "Dadar", "", "", "", ""],
        [2, "Okra", "", "250 g", "Vashi", "", "111", "", ""],
    ]
    index = build_reference_index(rows)
    okra = index.by_norm["okra"]
    assert okra.vendor == "Dadar"
    assert okra.per_unit_grams == 250


def test_hindi_marker_in_vendor_text_sets_language():
    rows = [MAPPING_HEADER, [1, "Methi", "", "1 bunch", "Borivali Hindi", "", "", "", ""]]
    index = build_reference_index(rows)
    assert index.by_norm["methi"].vendor == "Borivali"
    assert index.by_norm["methi"].language == HINDI
    assert index.vendor_meta["Borivali"].language == HINDI


def test_excel_float_phone_and_short_rows():
    rows = [
        MAPPING_HEADER,
        [1, "Beans", "", "500 gms", "Dadar", "Ramesh", 919800000004.0, "English", ""],
        [2, "Okra"],
    ]
    index = build_reference_index(rows)
    assert index.vendor_meta["Dadar"].phone == "919800000004"
    assert index.by_norm["okra"].vendor == "Unknown"


def test_maps_are_read_only(index):
    with pytest.raises(TypeError):
        index.by_norm["new"] = index.by_norm["coriander"]


def test_localized_name(index):
    assert get_localized_name(index, "Tomato Desi", HINDI) == "टमाटर"
    assert get_localized_name(index, "Tomato (Desi) - 500g", "hindi") == "टमाटर"
    assert get_localized_name(index, "Tomato Desi", ENGLISH) == "Tomato Desi"
    assert get_localized_name(index, "Coriander", HINDI) == "Coriander"
    assert index.localized_name("Banana Elaichi", HINDI) == "केला"


def test_vendor_info_for_unknown_vendor(index):
    meta = index.vendor_info("Nowhere")
    assert meta.phone == ""
    assert meta.language == ENGLISH
    assert meta.contact_name == "Nowhere"
