"""
Deterministic reasoning text for product verdicts, in English or Swedish.
Same input, same text: clauses come in a fixed order and list names as given.
"""
from typing import Dict, List

from veganlens.models.verdict import IngredientVerdict

_TEMPLATES: Dict[str, Dict[str, str]] = {
    "en": {
        "empty": "No ingredients were supplied, so the vegan status cannot be determined.",
        "low_confidence": "The analysis confidence is too low for a definite answer; treat the result as uncertain.",
        "non_vegan": "The following ingredients are not vegan: {names}.",
        "uncertain": "The following ingredients may be non-vegan and should be checked more closely: {names}.",
        "suspicious": (
            "The ingredient list looks incomplete or misread (possible OCR/transcription errors); "
            "confidence has been reduced."
        ),
        "all_vegan": "All ingredients appear to be vegan.",
        "details": "Details:",
    },
    "sv": {
        "empty": "Inga ingredienser angavs, så vegansk status kan inte avgöras.",
        "low_confidence": "Tillförlitligheten är för låg för att göra en definitiv bedömning; resultatet är osäkert.",
        "non_vegan": "Följande ingredienser är inte veganska: {names}.",
        "uncertain": "Följande ingredienser kan vara icke-veganska och bör kontrolleras närmare: {names}.",
        "suspicious": (
            "Ingredienslistan verkar ofullständig eller feltolkad (möjliga läsfel); "
            "tillförlitligheten har sänkts."
        ),
        "all_vegan": "Alla ingredienser bedöms som veganska.",
        "details": "Detaljerad analysdata:",
    },
}


def _templates(language: str) -> Dict[str, str]:
    return _TEMPLATES.get(language, _TEMPLATES["en"])


def compose_empty(language: str = "en") -> str:
    return _templates(language)["empty"]


def compose_reasoning(
    non_vegan: List[str],
    uncertain: List[str],
    suspicious: bool,
    low_confidence: bool,
    language: str = "en",
) -> str:
    """Low-confidence notice, non-vegan clause, uncertain clause, corruption warning; blank-line separated."""
    t = _templates(language)
    parts: List[str] = []
    if low_confidence:
        parts.append(t["low_confidence"])
    if non_vegan:
        parts.append(t["non_vegan"].format(names=", ".join(non_vegan)))
    if uncertain:
        parts.append(t["uncertain"].format(names=", ".join(uncertain)))
    if not non_vegan and not uncertain:
        parts.append(t["all_vegan"])
    if suspicious:
        parts.append(t["suspicious"])
    return "\n\n".join(parts)


def compose_details(verdicts: List[IngredientVerdict], language: str = "en") -> str:
    """Per-ingredient audit block appended when match details are enabled."""
    lines = [_templates(language)["details"]]
    for v in verdicts:
        lines.append(f"- {v.name}: {v.status.value} ({v.confidence:.2f}) {v.match_reason}")
    return "\n".join(lines)
