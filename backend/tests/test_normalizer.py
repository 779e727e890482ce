"""
Unit tests: normalize, E-number extraction, canonical keys.
Run from repo root: python -m pytest backend/tests/test_normalizer.py -v
"""


def test_normalize_folds_case_accents_and_emphasis():
    from veganlens.normalization.normalizer import normalize
    assert normalize("  *Mjölk*  ") == "mjolk"
    assert normalize("Crème  Fraîche") == "creme fraiche"
    assert normalize("ÄGG_") == "agg"


def test_normalize_is_total():
    """Empty and non-string input yield an empty string instead of raising."""
    from veganlens.normalization.normalizer import normalize
    assert normalize("") == ""
    assert normalize(None) == ""
    assert normalize(123) == ""


def test_normalize_is_idempotent():
    from veganlens.normalization.normalizer import normalize
    for raw in ("Kärnmjölkspulver", "  Vispgrädde ", "E 471"):
        assert normalize(normalize(raw)) == normalize(raw)


def test_extract_e_number_variants():
    from veganlens.normalization.normalizer import extract_e_number
    assert extract_e_number("E471") == "e471"
    assert extract_e_number("E 471") == "e471"
    assert extract_e_number("e-120") == "e120"
    assert extract_e_number("E1105") == "e1105"
    assert extract_e_number("emulgeringsmedel") is None


def test_find_embedded_e_number():
    from veganlens.normalization.normalizer import find_embedded_e_number
    assert find_embedded_e_number("Emulgeringsmedel (E471)") == "e471"
    assert find_embedded_e_number("färgämne E 120") == "e120"
    assert find_embedded_e_number("socker") is None


def test_canonical_key_applies_translation():
    from veganlens.normalization.normalizer import canonical_key
    index = {"milk": "mjolk"}
    assert canonical_key("Milk", index) == "mjolk"
    assert canonical_key("Mjölk", index) == "mjolk"
    assert canonical_key("Socker") == "socker"


def test_normalize_unhashable_input():
    """Lists and dicts are not strings: empty result, no TypeError from the cache."""
    from veganlens.normalization.normalizer import normalize
    assert normalize(["Mjölk"]) == ""
    assert normalize({}) == ""
    assert normalize({"name": "Mjölk"}) == ""
