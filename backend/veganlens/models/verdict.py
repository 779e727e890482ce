"""
Structured verdicts: one per ingredient, one per product.
Value objects; a new analysis run produces new instances.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class VeganStatus(str, Enum):
    VEGAN = "vegan"
    NON_VEGAN = "non_vegan"
    UNCERTAIN = "uncertain"


def status_of(is_vegan: Optional[bool], is_uncertain: bool) -> VeganStatus:
    if is_uncertain or is_vegan is None:
        return VeganStatus.UNCERTAIN
    return VeganStatus.VEGAN if is_vegan else VeganStatus.NON_VEGAN


@dataclass(frozen=True)
class IngredientVerdict:
    name: str
    is_vegan: Optional[bool]  # None = unknown
    is_uncertain: bool
    confidence: float
    match_reason: str
    matched_token: Optional[str] = None
    similarity: float = 0.0
    source: str = "default"  # reference | hint | default | corruption_guard

    @property
    def status(self) -> VeganStatus:
        return status_of(self.is_vegan, self.is_uncertain)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "is_vegan": self.is_vegan,
            "is_uncertain": self.is_uncertain,
            "confidence": self.confidence,
            "match_reason": self.match_reason,
            "matched_token": self.matched_token,
            "similarity": round(self.similarity, 4),
            "source": self.source,
        }


@dataclass(frozen=True)
class ListAssessment:
    suspicious: bool = False
    flags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"suspicious": self.suspicious, "flags": list(self.flags)}


@dataclass(frozen=True)
class ProductVerdict:
    is_vegan: Optional[bool]
    is_uncertain: bool
    confidence: float
    non_vegan_ingredients: list[str] = field(default_factory=list)
    uncertain_ingredients: list[str] = field(default_factory=list)
    reasoning: str = ""
    ingredients: list[IngredientVerdict] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)

    @property
    def status(self) -> VeganStatus:
        return status_of(self.is_vegan, self.is_uncertain)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "is_vegan": self.is_vegan,
            "is_uncertain": self.is_uncertain,
            "confidence": self.confidence,
            "non_vegan_ingredients": list(self.non_vegan_ingredients),
            "uncertain_ingredients": list(self.uncertain_ingredients),
            "reasoning": self.reasoning,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "flags": list(self.flags),
        }
