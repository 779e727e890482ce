"""
Best-match lookup of a token against a reference set using normalized edit distance.
similarity = 1 - levenshtein(a, b) / max(len(a), len(b)), on normalized forms.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from rapidfuzz.distance import Levenshtein

from veganlens.normalization.normalizer import normalize

MATCH_THRESHOLD = 0.8


@dataclass(frozen=True)
class MatchResult:
    matched_token: Optional[str]
    similarity: float = 0.0

    @property
    def matched(self) -> bool:
        return self.matched_token is not None


NO_MATCH = MatchResult(None, 0.0)


def similarity(a: str, b: str) -> float:
    """Similarity in [0, 1] of two already-normalized strings."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(a, b) / longest


def find_best_match(
    text: str,
    targets: Iterable[str],
    strict: bool = False,
    threshold: float = MATCH_THRESHOLD,
) -> MatchResult:
    """
    Find the target most similar to text.
    - strict: only an exact match after normalization counts (similarity 1.0); no fuzzy fallback.
    - otherwise the highest similarity >= threshold wins; ties keep the first target in iteration order.
    Returns NO_MATCH when no target qualifies.
    """
    key = normalize(text)
    if strict:
        for target in targets:
            if normalize(target) == key:
                return MatchResult(target, 1.0)
        return NO_MATCH

    best: Optional[str] = None
    best_similarity = 0.0
    for target in targets:
        norm_target = normalize(target)
        if norm_target == key:
            # Nothing can beat an exact match, and earlier targets scored lower
            return MatchResult(target, 1.0)
        if not key:
            continue
        score = similarity(key, norm_target)
        if score > best_similarity and score >= threshold:
            best, best_similarity = target, score
    if best is None:
        return NO_MATCH
    return MatchResult(best, best_similarity)


def best_similarity(text: str, targets: Iterable[str]) -> float:
    """Highest raw similarity of text against any target (no acceptance threshold)."""
    return find_best_match(text, targets, threshold=0.0).similarity
