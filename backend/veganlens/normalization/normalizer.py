"""
Deterministic normalization into the canonical comparison form.
Lowercase, trim, drop emphasis punctuation, fold accented letters to their base letter.
"""
import re
import logging
from functools import lru_cache
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Accented letter -> base Latin letter (Nordic, German, French, Spanish, Italian)
ACCENT_FOLDS: dict[str, str] = {
    "å": "a", "ä": "a", "à": "a", "á": "a", "â": "a", "ã": "a",
    "ö": "o", "ø": "o", "ò": "o", "ó": "o", "ô": "o", "õ": "o",
    "é": "e", "è": "e", "ë": "e", "ê": "e",
    "ü": "u", "ù": "u", "ú": "u", "û": "u",
    "ï": "i", "ì": "i", "í": "i", "î": "i",
    "ñ": "n", "ç": "c", "æ": "ae", "œ": "oe", "ß": "ss",
}

_EMPHASIS_RE = re.compile(r"[*_~]")
_SPACES_RE = re.compile(r"\s+")
_E_NUMBER_RE = re.compile(r"^e\s*-?\s*(\d{3,4}[a-z]?)$")
_E_NUMBER_SEARCH_RE = re.compile(r"\be\s*-?\s*(\d{3,4}[a-z]?)\b")
_FOLD_TABLE = str.maketrans(ACCENT_FOLDS)


def normalize(text: str) -> str:
    """
    Canonical comparison form of an ingredient token.
    Total function: non-string or empty input yields "".
    """
    if not isinstance(text, str) or not text:
        return ""
    return _normalize_str(text)


@lru_cache(maxsize=8192)
def _normalize_str(text: str) -> str:
    t = text.lower()
    t = _EMPHASIS_RE.sub("", t)
    t = t.translate(_FOLD_TABLE)
    t = _SPACES_RE.sub(" ", t)
    return t.strip()


def extract_e_number(text: str) -> Optional[str]:
    """Compact E-number ('e471') when the whole token is one ('E 471', 'e-471'), else None."""
    m = _E_NUMBER_RE.match(normalize(text))
    return f"e{m.group(1)}" if m else None


def find_embedded_e_number(text: str) -> Optional[str]:
    """First E-number mentioned anywhere in the token, e.g. 'emulgeringsmedel (E471)' -> 'e471'."""
    m = _E_NUMBER_SEARCH_RE.search(normalize(text))
    return f"e{m.group(1)}" if m else None


def canonical_key(text: str, translations: Optional[Mapping[str, str]] = None) -> str:
    """
    Normalized key with known translations mapped to their canonical name.
    translations: normalized foreign name -> normalized canonical name.
    """
    key = normalize(text)
    if translations and key in translations:
        canonical = translations[key]
        if canonical != key:
            logger.debug("NORMALIZE translation applied raw=%s -> canonical=%s", key, canonical)
        return canonical
    return key
