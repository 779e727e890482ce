"""
Unit tests: per-ingredient precedence (corruption guard, uncertain, non-vegan, indicator cap, default)
and reconciliation with external hints.
Run from repo root: python -m pytest backend/tests/test_classifier.py -v
"""
import logging

import pytest


@pytest.fixture(scope="module")
def classifier():
    from veganlens.evaluation.classifier import IngredientClassifier
    from veganlens.reference import load_reference_data
    return IngredientClassifier(load_reference_data())


def _guess(status, confidence):
    from veganlens.models.hints import ExternalGuess
    from veganlens.models.verdict import VeganStatus
    return ExternalGuess(status=VeganStatus(status), confidence=confidence)


def test_exact_non_vegan(classifier):
    v = classifier.classify("Mjölk")
    assert v.is_vegan is False
    assert v.is_uncertain is False
    assert v.confidence == 0.99
    assert v.matched_token == "mjölk"
    assert v.source == "reference"
    assert "mjölk" in v.match_reason


def test_non_vegan_confidence_scale():
    from veganlens.evaluation.classifier import non_vegan_confidence
    assert non_vegan_confidence(1.0) == 0.99
    assert non_vegan_confidence(0.8) == 0.9
    assert 0.9 < non_vegan_confidence(0.9) < 0.99


def test_known_vegan_reference(classifier):
    v = classifier.classify("Socker")
    assert v.is_vegan is True
    assert v.confidence == 0.98
    assert v.source == "reference"


def test_potentially_non_vegan_e_number(classifier):
    v = classifier.classify("E471")
    assert v.is_vegan is None
    assert v.is_uncertain is True
    assert v.confidence == 0.5
    assert v.matched_token == "e471"


def test_embedded_e_number(classifier):
    v = classifier.classify("Emulgeringsmedel (E471)")
    assert v.is_uncertain is True


def test_safe_exception_beats_uncertain(classifier):
    """'sojalecitin' is a safe exception; plain 'lecitin' stays uncertain."""
    safe = classifier.classify("Sojalecitin")
    assert safe.is_vegan is True
    assert safe.confidence == 0.98
    assert classifier.classify("Lecitin").is_uncertain is True


def test_safe_compound_with_animal_indicator(classifier):
    """'havremjölk' is safe but contains the indicator 'mjölk', so confidence is capped at 0.8."""
    v = classifier.classify("Havremjölk")
    assert v.is_vegan is True
    assert v.is_uncertain is False
    assert v.confidence == 0.8
    assert "mjölk" in v.match_reason


def test_safe_prefix_compound(classifier):
    assert classifier.is_safe_compound("Risgrädde")
    assert classifier.is_safe_compound("Kokosmjölk")
    assert not classifier.is_safe_compound("Vispgrädde")
    assert classifier.classify("Risgrädde").is_vegan is True
    assert classifier.compound_part(["risgradde"]).matched_token == "grädde"


def test_corruption_guard_wins_over_reference(classifier):
    v = classifier.classify("Mjölk (...)")
    assert v.is_uncertain is True
    assert v.is_vegan is None
    assert v.confidence == 0.5
    assert v.source == "corruption_guard"
    assert "corrupted" in v.match_reason


def test_short_garbled_token(classifier):
    v = classifier.classify("E3??")
    assert v.is_uncertain is True
    assert v.confidence <= 0.5


def test_garbled_non_vegan_is_downgraded(classifier):
    """A misread token resembling a non-vegan ingredient is never asserted non-vegan."""
    v = classifier.classify("mj0lk")
    assert v.is_vegan is None
    assert v.is_uncertain is True
    assert v.confidence <= 0.5
    assert v.matched_token == "mjölk"


def test_unknown_defaults_to_vegan(classifier, caplog):
    caplog.set_level(logging.INFO)
    v = classifier.classify("Quinoa")
    assert v.is_vegan is True
    assert v.confidence == 0.8
    assert v.source == "default"
    assert "UNKNOWN_INGREDIENT" in caplog.text


def test_hint_used_without_reference_match(classifier):
    v = classifier.classify("Quinoa", _guess("non_vegan", 0.7))
    assert v.is_vegan is False
    assert v.confidence == 0.7
    assert v.source == "hint"


def test_reference_overrides_hint(classifier, caplog):
    caplog.set_level(logging.INFO)
    v = classifier.classify("Mjölk", _guess("vegan", 0.95))
    assert v.is_vegan is False
    assert v.confidence == 0.99
    assert "INGREDIENT_CORRECTION" in caplog.text


def test_uncertain_confidence_ignores_hint(classifier):
    v = classifier.classify("E471", _guess("vegan", 0.9))
    assert v.is_uncertain is True
    assert v.confidence == 0.5


def test_animal_indicator_caps_hint_confidence(classifier):
    v = classifier.classify("Kycklingsmak", _guess("vegan", 0.95))
    assert v.is_vegan is True
    assert v.confidence == 0.8
    assert "kyckling" in v.match_reason


def test_translated_name_matches(classifier):
    v = classifier.classify("Milk")
    assert v.is_vegan is False
    assert v.matched_token == "mjölk"


@pytest.mark.parametrize("name", ["Skummjölkspulver", "Helmjölk", "Mjölkchoklad"])
def test_dairy_compounds_are_non_vegan(classifier, name):
    v = classifier.classify(name)
    assert v.is_vegan is False
    assert v.is_uncertain is False
    assert v.matched_token == "mjölk"
    assert v.confidence == 0.9
    assert "contains 'mjölk'" in v.match_reason


def test_unlisted_plant_compound_uses_safe_prefix(classifier):
    """'sojayoghurt' is not a listed exception; the 'soja' prefix excuses the 'yoghurt' part."""
    assert classifier.compound_part(["sojayoghurt"]).matched_token == "yoghurt"
    v = classifier.classify("Sojayoghurt")
    assert v.is_vegan is True
    assert v.is_uncertain is False


def test_compound_parts_skip_e_numbers_and_short_words(classifier):
    assert not classifier.compound_part(["e1205"]).matched
    assert not classifier.compound_part(["rostade"]).matched


def test_safe_win_over_uncertain_skips_non_vegan_check():
    """A safe exception that beats the uncertain match goes straight to the vegan outcome."""
    from veganlens.evaluation.classifier import IngredientClassifier
    from veganlens.reference import build_reference_data
    ref = build_reference_data({
        "definitely_non_vegan": ["abcdefghij"],
        "potentially_non_vegan": ["abcdefghxy"],
        "safe_exceptions": ["abcdefghix"],
        "animal_indicators": ["djur"],
    })
    v = IngredientClassifier(ref).classify("abcdefghij")
    assert v.is_vegan is True
    assert v.is_uncertain is False
    assert v.matched_token == "abcdefghix"
    assert v.confidence == 0.98


@pytest.mark.parametrize("name", ["Vegetabiliskt margarin", "Hasselnötter"])
def test_plant_words_are_not_capped_by_indicators(classifier, name):
    """Indicator words must not hide inside plant words ('vegetabilisk', 'nötter')."""
    v = classifier.classify(name)
    assert v.is_vegan is True
    assert v.confidence == 0.98
