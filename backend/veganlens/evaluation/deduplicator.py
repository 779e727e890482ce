"""
Merge repeated mentions of the same ingredient (casing, accents, language, small typos).
Within a group the highest-confidence verdict survives; groups keep first-seen order.
"""
import logging
import re
from typing import Dict, List, Mapping, Optional

from veganlens.matching.fuzzy_matcher import similarity
from veganlens.models.verdict import IngredientVerdict
from veganlens.normalization.normalizer import canonical_key

logger = logging.getLogger(__name__)

NEAR_DUPLICATE_SIMILARITY = 0.9

_PROPER_CASE_RE = re.compile(r"[A-ZÅÄÖÉ][a-zåäöé]")


def _has_proper_case(s: str) -> bool:
    return bool(_PROPER_CASE_RE.search(s))


def _is_all_caps(s: str) -> bool:
    letters = [ch for ch in s if ch.isalpha()]
    return bool(letters) and all(ch.isupper() for ch in letters)


def has_better_display(new: str, old: str) -> bool:
    """
    True when new is the better display form: proper case beats none,
    then not-all-caps beats all-caps, then the longer string.
    """
    new_proper, old_proper = _has_proper_case(new), _has_proper_case(old)
    if new_proper != old_proper:
        return new_proper
    new_caps, old_caps = _is_all_caps(new), _is_all_caps(old)
    if new_caps != old_caps:
        return old_caps
    return len(new) > len(old)


def _preferred(new: IngredientVerdict, old: IngredientVerdict) -> bool:
    if new.confidence != old.confidence:
        return new.confidence > old.confidence
    return has_better_display(new.name, old.name)


def dedupe(
    verdicts: List[IngredientVerdict],
    translations: Optional[Mapping[str, str]] = None,
) -> List[IngredientVerdict]:
    """Collapse near-duplicates; output follows the first mention of each group."""
    order: List[str] = []
    best: Dict[str, IngredientVerdict] = {}

    for verdict in verdicts:
        key = canonical_key(verdict.name, translations)
        if key not in best:
            near = next(
                (k for k in order if k and key and similarity(k, key) >= NEAR_DUPLICATE_SIMILARITY),
                None,
            )
            if near is None:
                order.append(key)
                best[key] = verdict
                continue
            key = near
        current = best[key]
        if _preferred(verdict, current):
            logger.debug(
                "DEDUPLICATOR replaced kept=%s dropped=%s confidence=%s->%s",
                verdict.name, current.name, current.confidence, verdict.confidence,
            )
            best[key] = verdict

    merged = [best[k] for k in order]
    if len(merged) != len(verdicts):
        logger.info("DEDUPLICATOR merged count_in=%d count_out=%d", len(verdicts), len(merged))
    return merged
