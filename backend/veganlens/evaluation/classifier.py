"""
Per-ingredient classification against the reference sets, reconciled with an optional external guess.

Precedence (first rule that fires wins):
 1) corruption guard -> UNCERTAIN, confidence <= 0.5
 2) potentially non-vegan match, unless a safe exception matches at least as well -> UNCERTAIN 0.5
 3) definitely non-vegan match, unless a safe compound/prefix applies -> NON_VEGAN 0.9-0.99
    (UNCERTAIN instead when the token looks misread)
 4) animal indicator substring -> confidence capped at 0.8, status unchanged
 5) default -> VEGAN 0.8 (0.98 for a clean safe/known-vegan match, the external guess when given)
Curated reference data always beats the external guess once it matches.
"""
import logging
from typing import Iterable, List, Optional

from veganlens.evaluation.corruption import CorruptionDetector, looks_garbled
from veganlens.matching.fuzzy_matcher import MATCH_THRESHOLD, NO_MATCH, MatchResult, find_best_match
from veganlens.models.hints import ExternalGuess
from veganlens.models.verdict import IngredientVerdict
from veganlens.normalization.normalizer import (
    canonical_key,
    extract_e_number,
    find_embedded_e_number,
    normalize,
)
from veganlens.reference.reference_schema import ReferenceData

logger = logging.getLogger(__name__)

CORRUPTED_CONFIDENCE = 0.5
UNCERTAIN_CONFIDENCE = 0.5
NON_VEGAN_MIN_CONFIDENCE = 0.9
NON_VEGAN_MAX_CONFIDENCE = 0.99
REFERENCE_VEGAN_CONFIDENCE = 0.98
DEFAULT_VEGAN_CONFIDENCE = 0.8
ANIMAL_INDICATOR_CAP = 0.8
COMPOUND_PART_MIN_LEN = 4

# Compound words starting with these are plant-based variants ("havremjölk", "sojaost")
SAFE_PREFIXES = tuple(
    normalize(p) for p in ("havre", "kokos", "soja", "mandel", "ris", "växt", "vegansk", "vegetabilisk")
)


def non_vegan_confidence(similarity: float) -> float:
    """0.99 for an exact match, scaled linearly down to 0.9 at the acceptance threshold."""
    span = NON_VEGAN_MAX_CONFIDENCE - NON_VEGAN_MIN_CONFIDENCE
    scaled = NON_VEGAN_MIN_CONFIDENCE + span * max(0.0, similarity - 0.8) / 0.2
    return round(min(NON_VEGAN_MAX_CONFIDENCE, scaled), 4)


def _best_match(candidates: Iterable[str], targets: Iterable[str]) -> MatchResult:
    targets = tuple(targets)
    best = NO_MATCH
    for candidate in candidates:
        result = find_best_match(candidate, targets)
        if result.matched and result.similarity > best.similarity:
            best = result
    return best


def _describe(match: MatchResult) -> str:
    # compound-part matches carry their coverage, which is always below the fuzzy threshold
    if match.similarity < MATCH_THRESHOLD:
        return f"contains '{match.matched_token}'"
    return f"matches '{match.matched_token}' ({match.similarity:.0%})"


class IngredientClassifier:
    def __init__(self, reference: ReferenceData, detector: Optional[CorruptionDetector] = None):
        self._ref = reference
        self._detector = detector or CorruptionDetector(reference)
        self._translations = reference.translation_index()
        self._indicators = tuple((normalize(i), i) for i in reference.animal_indicators)
        # Non-vegan words that still identify the ingredient inside a compound ("helmjölk", "mjölkchoklad")
        self._compound_parts = tuple(
            (normalize(t), t) for t in reference.definitely_non_vegan
            if len(normalize(t)) >= COMPOUND_PART_MIN_LEN and not any(ch.isdigit() for ch in t)
        )

    def match_candidates(self, raw_name: str) -> List[str]:
        """Keys the token is matched under: its E-number or translated form, plus any embedded E-number."""
        token = normalize(raw_name)
        primary = extract_e_number(token) or canonical_key(token, self._translations)
        candidates = [primary]
        embedded = find_embedded_e_number(token)
        if embedded and embedded not in candidates:
            candidates.append(embedded)
        return candidates

    def compound_part(self, candidates: Iterable[str]) -> MatchResult:
        """
        Longest non-vegan word contained in a candidate; ties keep reference order.
        similarity is the share of the candidate the part covers.
        """
        best = NO_MATCH
        best_len = 0
        for candidate in candidates:
            for part, original in self._compound_parts:
                if len(part) > best_len and part in candidate:
                    best = MatchResult(original, round(len(part) / len(candidate), 4))
                    best_len = len(part)
        return best

    def non_vegan_match(self, candidates: List[str]) -> MatchResult:
        """Fuzzy match against the non-vegan set, else a non-vegan word inside a compound."""
        match = _best_match(candidates, self._ref.definitely_non_vegan)
        if match.matched:
            return match
        return self.compound_part(candidates)

    def is_safe_compound(self, raw_name: str) -> bool:
        token = normalize(raw_name)
        if find_best_match(token, self._ref.safe_exceptions, strict=True).matched:
            return True
        return token.startswith(SAFE_PREFIXES)

    def classify(self, raw_name: str, external_guess: Optional[ExternalGuess] = None) -> IngredientVerdict:
        name = (raw_name or "").strip()
        token = normalize(name)

        # 1) corruption guard
        guard = self._detector.token_guard(name)
        if guard:
            confidence = CORRUPTED_CONFIDENCE
            if external_guess is not None:
                confidence = min(external_guess.confidence, CORRUPTED_CONFIDENCE)
            return IngredientVerdict(
                name=name,
                is_vegan=None,
                is_uncertain=True,
                confidence=confidence,
                match_reason=f"likely corrupted token: {guard}",
                source="corruption_guard",
            )

        candidates = self.match_candidates(name)
        safe = _best_match(candidates, self._ref.safe_exceptions)

        # 2) potentially non-vegan
        uncertain = _best_match(candidates, self._ref.potentially_non_vegan)
        safe_wins = safe.matched and safe.similarity >= uncertain.similarity
        if uncertain.matched and not safe_wins:
            return self._reconciled(
                IngredientVerdict(
                    name=name,
                    is_vegan=None,
                    is_uncertain=True,
                    confidence=UNCERTAIN_CONFIDENCE,
                    match_reason=(
                        f"may be animal-derived: matches '{uncertain.matched_token}' "
                        f"({uncertain.similarity:.0%})"
                    ),
                    matched_token=uncertain.matched_token,
                    similarity=uncertain.similarity,
                    source="reference",
                ),
                external_guess,
            )

        # 3) definitely non-vegan, skipped once a safe exception has beaten an uncertain match
        non_vegan = NO_MATCH if uncertain.matched else self.non_vegan_match(candidates)
        if non_vegan.matched:
            excepted = self.is_safe_compound(name) or (
                safe.matched and safe.similarity >= non_vegan.similarity
            )
            if excepted:
                logger.debug(
                    "CLASSIFIER safe_compound raw=%s non_vegan_match=%s", name, non_vegan.matched_token,
                )
            elif looks_garbled(name):
                return IngredientVerdict(
                    name=name,
                    is_vegan=None,
                    is_uncertain=True,
                    confidence=min(
                        CORRUPTED_CONFIDENCE,
                        external_guess.confidence if external_guess else CORRUPTED_CONFIDENCE,
                    ),
                    match_reason=f"possibly misread: resembles non-vegan {_describe(non_vegan)}",
                    matched_token=non_vegan.matched_token,
                    similarity=non_vegan.similarity,
                    source="corruption_guard",
                )
            else:
                return self._reconciled(
                    IngredientVerdict(
                        name=name,
                        is_vegan=False,
                        is_uncertain=False,
                        confidence=non_vegan_confidence(non_vegan.similarity),
                        match_reason=f"not vegan: {_describe(non_vegan)}",
                        matched_token=non_vegan.matched_token,
                        similarity=non_vegan.similarity,
                        source="reference",
                    ),
                    external_guess,
                )

        # 5) vegan by reference, by external guess, or by default
        if safe.matched:
            verdict = self._reconciled(
                IngredientVerdict(
                    name=name,
                    is_vegan=True,
                    is_uncertain=False,
                    confidence=REFERENCE_VEGAN_CONFIDENCE,
                    match_reason=f"safe exception: matches '{safe.matched_token}' ({safe.similarity:.0%})",
                    matched_token=safe.matched_token,
                    similarity=safe.similarity,
                    source="reference",
                ),
                external_guess,
            )
        else:
            known = _best_match(candidates, self._ref.known_vegan)
            if known.matched:
                verdict = self._reconciled(
                    IngredientVerdict(
                        name=name,
                        is_vegan=True,
                        is_uncertain=False,
                        confidence=REFERENCE_VEGAN_CONFIDENCE,
                        match_reason=(
                            f"known vegan ingredient: matches '{known.matched_token}' ({known.similarity:.0%})"
                        ),
                        matched_token=known.matched_token,
                        similarity=known.similarity,
                        source="reference",
                    ),
                    external_guess,
                )
            elif external_guess is not None:
                verdict = IngredientVerdict(
                    name=name,
                    is_vegan=external_guess.is_vegan,
                    is_uncertain=external_guess.is_uncertain,
                    confidence=external_guess.confidence,
                    match_reason=f"no reference match; external classification: {external_guess.status.value}",
                    source="hint",
                )
            else:
                logger.info("UNKNOWN_INGREDIENT raw=%s normalized_key=%s", name[:50], token)
                verdict = IngredientVerdict(
                    name=name,
                    is_vegan=True,
                    is_uncertain=False,
                    confidence=DEFAULT_VEGAN_CONFIDENCE,
                    match_reason="no animal-derived match found",
                    source="default",
                )

        # 4) animal indicator caps confidence without changing the status
        indicator = self._animal_indicator(token)
        if indicator and verdict.confidence > ANIMAL_INDICATOR_CAP:
            verdict = IngredientVerdict(
                name=verdict.name,
                is_vegan=verdict.is_vegan,
                is_uncertain=verdict.is_uncertain,
                confidence=ANIMAL_INDICATOR_CAP,
                match_reason=f"{verdict.match_reason}; contains animal indicator '{indicator}'",
                matched_token=verdict.matched_token,
                similarity=verdict.similarity,
                source=verdict.source,
            )
        return verdict

    def _animal_indicator(self, token: str) -> Optional[str]:
        for norm_indicator, indicator in self._indicators:
            if norm_indicator and norm_indicator in token:
                return indicator
        return None

    @staticmethod
    def _reconciled(verdict: IngredientVerdict, guess: Optional[ExternalGuess]) -> IngredientVerdict:
        """Reference outcome wins; log when it overrides a different external guess."""
        if guess is not None and guess.status != verdict.status:
            logger.info(
                "INGREDIENT_CORRECTION ingredient=%s original_status=%s original_confidence=%s "
                "corrected_status=%s confidence=%s reason=%s",
                verdict.name[:50], guess.status.value, guess.confidence,
                verdict.status.value, verdict.confidence, verdict.match_reason,
            )
        return verdict
