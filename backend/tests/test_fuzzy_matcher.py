"""
Unit tests: edit-distance similarity and best-match lookup.
Run from repo root: python -m pytest backend/tests/test_fuzzy_matcher.py -v
"""


def test_similarity_bounds():
    from veganlens.matching.fuzzy_matcher import similarity
    assert similarity("abc", "abc") == 1.0
    assert similarity("", "") == 1.0
    assert similarity("abc", "xyz") == 0.0
    assert similarity("mjolk", "mjolq") == 0.8


def test_exact_match_after_normalization():
    from veganlens.matching.fuzzy_matcher import find_best_match
    result = find_best_match("MJÖLK", ["socker", "mjölk"])
    assert result.matched
    assert result.matched_token == "mjölk"
    assert result.similarity == 1.0


def test_fuzzy_match_at_threshold():
    """One substitution in five characters is exactly the 0.8 acceptance threshold."""
    from veganlens.matching.fuzzy_matcher import find_best_match
    result = find_best_match("mjolq", ["socker", "mjölk"])
    assert result.matched_token == "mjölk"
    assert result.similarity == 0.8


def test_below_threshold_is_no_match():
    from veganlens.matching.fuzzy_matcher import find_best_match
    result = find_best_match("havremjolk", ["mjölk"])
    assert not result.matched
    assert result.matched_token is None


def test_strict_mode_never_falls_back_to_fuzzy():
    from veganlens.matching.fuzzy_matcher import find_best_match
    assert not find_best_match("mjolq", ["mjölk"], strict=True).matched
    result = find_best_match("Mjölk", ["mjölk"], strict=True)
    assert result.matched_token == "mjölk"
    assert result.similarity == 1.0


def test_ties_keep_first_target():
    from veganlens.matching.fuzzy_matcher import find_best_match
    result = find_best_match("abcde", ["abcdx", "abcdy"])
    assert result.matched_token == "abcdx"


def test_exact_short_circuit_matches_full_scan():
    """The exact-match shortcut returns what a full scan would: the exact target at 1.0."""
    from veganlens.matching.fuzzy_matcher import find_best_match
    targets = ["vasslepulver", "vassle", "vassl"]
    result = find_best_match("vassle", targets)
    assert result.matched_token == "vassle"
    assert result.similarity == 1.0


def test_empty_input_never_matches():
    from veganlens.matching.fuzzy_matcher import find_best_match
    assert not find_best_match("", ["salt"]).matched
    assert not find_best_match("   ", ["salt"]).matched


def test_best_similarity_has_no_threshold():
    from veganlens.matching.fuzzy_matcher import best_similarity
    assert best_similarity("xyz", ["salt"]) < 0.4
    assert 0.0 < best_similarity("sockr", ["socker"]) < 1.0
