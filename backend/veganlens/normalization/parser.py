"""
Split a raw label text into an ordered list of ingredient names.
- Strip the "Ingredienser:" / "Ingredients:" header and trailing allergen notes.
- Split on commas and semicolons at top level; flatten parenthesised sub-ingredients.
- Drop percentages and list bullets. Order of first appearance is preserved.
- Unreadable-text placeholders such as "(något)" or "[?]" are kept verbatim for the corruption checks.
"""
import re
import logging
from typing import List

from veganlens.evaluation.corruption import has_corruption_marker

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^\s*(ingredienser|ingredients|ingrediens|innehåll|zutaten)\s*:\s*", re.IGNORECASE)
_TRAILER_RE = re.compile(
    r"\b(kan innehålla spår av|kan innehålla|may contain|allergen(er)?\s*:).*$",
    re.IGNORECASE | re.DOTALL,
)
_PERCENT_RE = re.compile(r"\(?\s*[<>]?\s*\d+(?:[.,]\d+)?\s*%\s*\)?")
_BULLET_RE = re.compile(r"^\s*(?:[-•·*]+|\d+[.)])\s+")
_CONJUNCTION_RE = re.compile(r"(?:^|\s+)(?:och|and|samt)\s+", re.IGNORECASE)
_SPACES_RE = re.compile(r"\s+")


def clean_ingredient(raw: str) -> str:
    """Drop percentages and bullets, collapse whitespace. Case and accents are kept for display."""
    if not raw or not isinstance(raw, str):
        return ""
    t = _PERCENT_RE.sub(" ", raw)
    t = _BULLET_RE.sub("", t)
    t = _SPACES_RE.sub(" ", t)
    if has_corruption_marker(t):
        return t.strip(" :-")
    return t.strip(" .:-")


def _split_top_level(text: str) -> List[str]:
    """Split on commas, semicolons and newlines that are not inside parentheses or brackets."""
    parts: List[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if ch in "([":
            depth += 1
        elif ch in ")]" and depth > 0:
            depth -= 1
        elif ch in ",;\n" and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts


def _split_by_parentheses(text: str) -> List[str]:
    """
    'Choklad (socker, kakaosmör)' -> ['Choklad', 'socker', 'kakaosmör'].
    Nested parentheses are flattened; brackets are treated like parentheses.
    """
    out: List[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if ch in "([":
            if depth == 0:
                chunk = text[start:i].strip()
                if chunk:
                    out.append(chunk)
                start = i + 1
            depth += 1
        elif ch in ")]" and depth > 0:
            depth -= 1
            if depth == 0:
                group = text[start - 1:i + 1]
                if has_corruption_marker(group):
                    out.append(group)
                else:
                    for part in _split_top_level(group[1:-1]):
                        if part.strip():
                            out.extend(_split_by_parentheses(part.strip()))
                start = i + 1
    tail = text[start:].strip()
    if tail:
        out.append(tail)
    return out


def split_ingredient_text(text: str) -> List[str]:
    """
    Turn a label text into ingredient names, e.g.
    'Ingredienser: Vetemjöl, socker (12%), emulgeringsmedel (E471) och salt.'
    -> ['Vetemjöl', 'socker', 'emulgeringsmedel', 'E471', 'salt']
    """
    if not text or not isinstance(text, str):
        return []
    body = _HEADER_RE.sub("", text.strip())
    body = _TRAILER_RE.sub("", body)
    # percentages first so "(12%)" is not mistaken for a sub-ingredient group
    body = _PERCENT_RE.sub(" ", body)

    names: List[str] = []
    for segment in _split_top_level(body):
        for part in _split_by_parentheses(segment):
            for piece in _CONJUNCTION_RE.split(part):
                name = clean_ingredient(piece)
                if name:
                    names.append(name)
    logger.debug("PARSER split count=%d", len(names))
    return names
