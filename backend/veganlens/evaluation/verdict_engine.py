"""
Deterministic verdict engine. Single pipeline for text, image and video callers.
classify (reference sets + optional hints) -> dedupe -> aggregate with list-level corruption caps.
No I/O beyond the reference data handed in; safe to share across concurrent requests.
"""
from typing import Any, List, Mapping, Optional
import logging

from veganlens.evaluation.aggregator import aggregate, empty_verdict
from veganlens.evaluation.classifier import IngredientClassifier
from veganlens.evaluation.corruption import CorruptionDetector
from veganlens.evaluation.deduplicator import dedupe
from veganlens.models.hints import lookup_hint, resolve_hints
from veganlens.models.verdict import IngredientVerdict, ProductVerdict
from veganlens.normalization.parser import split_ingredient_text
from veganlens.reference.reference_registry import get_reference_data
from veganlens.reference.reference_schema import ReferenceData

logger = logging.getLogger(__name__)


class VerdictEngine:
    """
    Pipeline: clean -> assess list -> classify each -> dedupe -> aggregate.
    Reference data is injected once; the engine holds no per-request state.
    """

    def __init__(self, reference_data: Optional[ReferenceData] = None, language: Optional[str] = None):
        self.reference = reference_data or get_reference_data()
        self.language = language
        self._detector = CorruptionDetector(self.reference)
        self._classifier = IngredientClassifier(self.reference, self._detector)
        self._translations = self.reference.translation_index()

    def classify(self, raw_name: str, hint: Any = None) -> IngredientVerdict:
        """Classify a single ingredient; hint is a raw external hint in wire shape, or None."""
        resolved = resolve_hints({raw_name: hint}) if hint is not None else {}
        return self._classifier.classify(raw_name, lookup_hint(resolved, raw_name))

    def analyze(
        self,
        ingredients: List[str],
        hints: Optional[Mapping[str, Any]] = None,
        language: Optional[str] = None,
    ) -> ProductVerdict:
        """
        Analyze an ordered ingredient list.
        - hints: raw name -> {"isVegan": ..., "confidence": ...}; malformed entries are ignored.
        - language: reasoning language ("en" | "sv"); defaults to the engine/config setting.
        Never raises for any list of strings.
        """
        language = language or self.language
        names = [n.strip() for n in (ingredients or []) if isinstance(n, str) and n.strip()]
        if not names:
            logger.info("VERDICT_ENGINE empty ingredient list")
            return empty_verdict(language)

        assessment = self._detector.assess_list(names)
        resolved = resolve_hints(hints)
        classified = [self._classifier.classify(n, lookup_hint(resolved, n)) for n in names]
        unique = dedupe(classified, self._translations)
        verdict = aggregate(unique, assessment, language=language)

        logger.info(
            "VERDICT_ENGINE status=%s confidence=%s count=%d unique=%d non_vegan=%d uncertain=%d "
            "suspicious=%s hints=%d",
            verdict.status.value, verdict.confidence, len(names), len(unique),
            len(verdict.non_vegan_ingredients), len(verdict.uncertain_ingredients),
            assessment.suspicious, len(hints or {}),
        )
        return verdict

    def analyze_text(
        self,
        text: str,
        hints: Optional[Mapping[str, Any]] = None,
        language: Optional[str] = None,
    ) -> ProductVerdict:
        """Split a raw label text into ingredients, then analyze."""
        return self.analyze(split_ingredient_text(text), hints=hints, language=language)


_default_engine: Optional[VerdictEngine] = None


def get_engine() -> VerdictEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = VerdictEngine()
    return _default_engine


def analyze_ingredients(
    ingredients: List[str],
    hints: Optional[Mapping[str, Any]] = None,
    language: Optional[str] = None,
) -> ProductVerdict:
    """Module-level entry point using the process-wide reference data."""
    return get_engine().analyze(ingredients, hints=hints, language=language)
