"""
Fold deduplicated ingredient verdicts into one product verdict.
NON_VEGAN dominates, then UNCERTAIN, else VEGAN; a low aggregate confidence forces UNCERTAIN.
"""
import logging
from typing import List, Optional

from veganlens.config import INCLUDE_MATCH_DETAILS, get_reasoning_language
from veganlens.evaluation.confidence import (
    EMPTY_LIST_CONFIDENCE,
    compute_confidence,
    is_low_confidence,
)
from veganlens.models.verdict import IngredientVerdict, ListAssessment, ProductVerdict
from veganlens.response_composer import compose_details, compose_empty, compose_reasoning

logger = logging.getLogger(__name__)


def empty_verdict(language: Optional[str] = None) -> ProductVerdict:
    """Terminal verdict for an empty ingredient list."""
    return ProductVerdict(
        is_vegan=None,
        is_uncertain=True,
        confidence=EMPTY_LIST_CONFIDENCE,
        reasoning=compose_empty(language or get_reasoning_language()),
    )


def aggregate(
    verdicts: List[IngredientVerdict],
    list_flags: Optional[ListAssessment] = None,
    language: Optional[str] = None,
    include_details: Optional[bool] = None,
) -> ProductVerdict:
    language = language or get_reasoning_language()
    if not verdicts:
        return empty_verdict(language)
    list_flags = list_flags or ListAssessment()

    non_vegan = [v.name for v in verdicts if v.is_vegan is False and not v.is_uncertain]
    uncertain = [v.name for v in verdicts if v.is_uncertain]

    if non_vegan:
        is_vegan, is_uncertain = False, False
    elif uncertain:
        is_vegan, is_uncertain = None, True
    else:
        is_vegan, is_uncertain = True, False

    confidence = compute_confidence(
        [v.confidence for v in verdicts],
        uncertain_count=len(uncertain),
        suspicious=list_flags.suspicious,
    )
    low_confidence = is_low_confidence(confidence)
    if low_confidence:
        logger.info(
            "VERDICT_ENGINE low_confidence override confidence=%s original_is_vegan=%s",
            confidence, is_vegan,
        )
        is_vegan, is_uncertain = None, True

    reasoning = compose_reasoning(
        non_vegan, uncertain, list_flags.suspicious, low_confidence, language=language,
    )
    if INCLUDE_MATCH_DETAILS if include_details is None else include_details:
        reasoning = f"{reasoning}\n\n{compose_details(verdicts, language)}"

    return ProductVerdict(
        is_vegan=is_vegan,
        is_uncertain=is_uncertain,
        confidence=confidence,
        non_vegan_ingredients=non_vegan,
        uncertain_ingredients=uncertain,
        reasoning=reasoning,
        ingredients=list(verdicts),
        flags=list(list_flags.flags),
    )
