"""
Vegan ingredient verdict engine.
Deterministic: reference sets + fuzzy matching + optional external hints -> one product verdict.
"""
from veganlens.evaluation.verdict_engine import VerdictEngine, analyze_ingredients, get_engine
from veganlens.models.verdict import IngredientVerdict, ListAssessment, ProductVerdict, VeganStatus
from veganlens.normalization.normalizer import normalize
from veganlens.reference import ReferenceData, ReferenceDataError, get_reference_data

__all__ = [
    "VerdictEngine",
    "analyze_ingredients",
    "get_engine",
    "IngredientVerdict",
    "ListAssessment",
    "ProductVerdict",
    "VeganStatus",
    "normalize",
    "ReferenceData",
    "ReferenceDataError",
    "get_reference_data",
]
