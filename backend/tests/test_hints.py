"""
Unit tests: external hint validation. Malformed hints are treated as absent.
Run from repo root: python -m pytest backend/tests/test_hints.py -v
"""
import pytest


def test_valid_hint():
    from veganlens.models.hints import parse_hint
    from veganlens.models.verdict import VeganStatus
    guess = parse_hint({"isVegan": "non_vegan", "confidence": 0.9}, "Mjölk")
    assert guess.status == VeganStatus.NON_VEGAN
    assert guess.confidence == 0.9
    assert guess.is_vegan is False
    assert guess.is_uncertain is False


def test_status_is_case_insensitive():
    from veganlens.models.hints import parse_hint
    assert parse_hint({"isVegan": "Non-Vegan", "confidence": 1}).is_vegan is False
    assert parse_hint({"isVegan": "UNCERTAIN", "confidence": 0}).is_uncertain is True


@pytest.mark.parametrize("raw", [
    None,
    "vegan",
    {"isVegan": "maybe", "confidence": 0.5},
    {"isVegan": "vegan"},
    {"confidence": 0.5},
    {"isVegan": "vegan", "confidence": 1.5},
    {"isVegan": "vegan", "confidence": -0.1},
    {"isVegan": "vegan", "confidence": "0.9"},
    {"isVegan": "vegan", "confidence": True},
    {"isVegan": "vegan", "confidence": float("nan")},
    {"isVegan": True, "confidence": 0.9},
])
def test_malformed_hint_is_absent(raw):
    from veganlens.models.hints import parse_hint
    assert parse_hint(raw, "x") is None


def test_resolve_and_lookup_by_normalized_name():
    from veganlens.models.hints import lookup_hint, resolve_hints
    resolved = resolve_hints({"Mjölk": {"isVegan": "vegan", "confidence": 0.8}})
    assert lookup_hint(resolved, "Mjölk").confidence == 0.8
    assert lookup_hint(resolved, "MJÖLK").confidence == 0.8
    assert lookup_hint(resolved, "Socker") is None


def test_resolve_hints_tolerates_garbage():
    from veganlens.models.hints import resolve_hints
    assert resolve_hints(None) == {}
    assert resolve_hints(["not", "a", "mapping"]) == {}
    resolved = resolve_hints({"Socker": "garbage", 3: {"isVegan": "vegan", "confidence": 1}})
    assert resolved == {"Socker": None, "socker": None}
