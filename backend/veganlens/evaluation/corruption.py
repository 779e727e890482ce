"""
Heuristics for OCR / speech-to-text damage in ingredient text.
Token level: the corruption guard used by the classifier.
List level: suspicious-list flags that cap the product confidence.
"""
import logging
import re
import statistics
from typing import Iterable, List, Optional

from veganlens.matching.fuzzy_matcher import best_similarity
from veganlens.models.verdict import ListAssessment
from veganlens.normalization.normalizer import extract_e_number, normalize
from veganlens.reference.reference_schema import ReferenceData

logger = logging.getLogger(__name__)

# Placeholders an extractor leaves where it could not read the label
CORRUPTION_MARKERS = (
    "(...)", "...", "…", "???", "(något)", "(nagot)", "(oläsligt)", "(olasligt)",
    "(unclear)", "(illegible)", "[?]",
)

# Short but real ingredient names; reference tokens of the same length are added per dataset
SHORT_VALID_TOKENS = frozenset(
    normalize(t) for t in (
        "salt", "ris", "soja", "te", "tofu", "olja", "jäst", "majs", "mjöl", "lök",
        "kli", "vete", "råg",
    )
)

SHORT_TOKEN_MAX_LEN = 4
MIN_LIST_LENGTH = 3
MIN_TOKEN_LEN = 3
OUTLIER_MEDIAN_FACTOR = 3
GIBBERISH_SIMILARITY = 0.4

# Letters and digits interleaved, e.g. "mj0lk", "5ocker"
_MIXED_ALNUM_RE = re.compile(r"[a-z][0-9]|[0-9][a-z]")
_OCR_NOISE_CHARS = set("?|#@�")


def has_corruption_marker(raw: str) -> Optional[str]:
    """The first corruption marker found in raw, or None."""
    lowered = (raw or "").lower()
    for marker in CORRUPTION_MARKERS:
        if marker in lowered:
            return marker
    return None


def looks_garbled(raw: str) -> bool:
    """Softer damage signal: stray OCR noise characters or digits inside a word."""
    token = normalize(raw)
    if not token or extract_e_number(token):
        return False
    if any(ch in _OCR_NOISE_CHARS for ch in token):
        return True
    return bool(_MIXED_ALNUM_RE.search(token))


class CorruptionDetector:
    """Token guard and list assessment bound to one reference dataset."""

    def __init__(self, reference: ReferenceData):
        self._reference = reference
        self._vocabulary = reference.vocabulary()
        self._short_valid = SHORT_VALID_TOKENS | reference.short_tokens(SHORT_TOKEN_MAX_LEN)

    def is_short_valid(self, token: str) -> bool:
        return token in self._short_valid or extract_e_number(token) is not None

    def token_guard(self, raw: str) -> Optional[str]:
        """
        Reason string when the token has a partial/garbled shape, else None.
        Fires on placeholder markers, or on <=4 characters outside the short-but-valid list.
        """
        marker = has_corruption_marker(raw)
        if marker:
            return f"contains marker {marker!r}"
        token = normalize(raw)
        if len(token) <= SHORT_TOKEN_MAX_LEN and not self.is_short_valid(token):
            return f"too short ({len(token)} characters)"
        return None

    def assess_list(self, raw_names: Iterable[str]) -> ListAssessment:
        names: List[str] = [n for n in raw_names if isinstance(n, str) and n.strip()]
        flags: List[str] = []

        for name in names:
            if has_corruption_marker(name):
                flags.append(f"corruption_marker:{name}")

        if len(names) < MIN_LIST_LENGTH:
            flags.append("too_few_ingredients")

        lengths = [len(normalize(n)) for n in names]
        if lengths:
            median = statistics.median(lengths)
            for name, length in zip(names, lengths):
                if length < MIN_TOKEN_LEN or length > OUTLIER_MEDIAN_FACTOR * median:
                    flags.append(f"length_outlier:{name}")

        for name in names:
            if best_similarity(name, self._vocabulary) < GIBBERISH_SIMILARITY:
                flags.append(f"unrecognized_token:{name}")

        suspicious = bool(flags)
        if suspicious:
            logger.info(
                "CORRUPTION_DETECTOR suspicious=true count=%d flags=%s",
                len(names), flags[:10],
            )
        return ListAssessment(suspicious=suspicious, flags=flags)
