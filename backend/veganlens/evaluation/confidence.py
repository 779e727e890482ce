"""
Product confidence from per-ingredient confidences and list-level caps.
confidence = mean(ingredient confidences), then ceilings:
 - 0.7 when more than 2 ingredients, or more than 30% of them, are uncertain
 - 0.6 when the list is flagged suspicious (likely OCR/ASR damage)
Below 0.5 the product status is forced to UNCERTAIN by the aggregator.
"""
from typing import List

UNCERTAIN_COUNT_LIMIT = 2
UNCERTAIN_RATIO_LIMIT = 0.3
UNCERTAIN_CAP = 0.7
SUSPICIOUS_CAP = 0.6
LOW_CONFIDENCE_THRESHOLD = 0.5
EMPTY_LIST_CONFIDENCE = 0.3


def compute_confidence(
    confidences: List[float],
    uncertain_count: int,
    suspicious: bool = False,
) -> float:
    if not confidences:
        return EMPTY_LIST_CONFIDENCE
    base = sum(confidences) / len(confidences)
    if uncertain_count > UNCERTAIN_COUNT_LIMIT or uncertain_count / len(confidences) > UNCERTAIN_RATIO_LIMIT:
        base = min(base, UNCERTAIN_CAP)
    if suspicious:
        base = min(base, SUSPICIOUS_CAP)
    return round(max(0.0, min(1.0, base)), 4)


def is_low_confidence(confidence: float) -> bool:
    return confidence < LOW_CONFIDENCE_THRESHOLD
