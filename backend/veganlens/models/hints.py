"""
Per-ingredient hints from an external classifier, validated at the boundary.
Anything that does not fit the contract becomes "absent" instead of an error.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from veganlens.models.verdict import VeganStatus
from veganlens.normalization.normalizer import normalize

logger = logging.getLogger(__name__)


class IngredientHint(BaseModel):
    """Wire shape: {"isVegan": "vegan" | "non_vegan" | "uncertain", "confidence": 0..1}."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    is_vegan: Literal["vegan", "non_vegan", "uncertain"] = Field(alias="isVegan")
    confidence: float = Field(ge=0.0, le=1.0)

    @field_validator("is_vegan", mode="before")
    @classmethod
    def _lower_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

    @field_validator("confidence", mode="before")
    @classmethod
    def _numeric_confidence(cls, v: Any) -> Any:
        # bool is an int subclass and numeric strings would be coerced; both are malformed here
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("confidence must be a number")
        if math.isnan(v) or math.isinf(v):
            raise ValueError("confidence must be finite")
        return v


@dataclass(frozen=True)
class ExternalGuess:
    """A validated hint. Absence is modelled as None, never as a partial guess."""

    status: VeganStatus
    confidence: float

    @property
    def is_vegan(self) -> Optional[bool]:
        if self.status == VeganStatus.UNCERTAIN:
            return None
        return self.status == VeganStatus.VEGAN

    @property
    def is_uncertain(self) -> bool:
        return self.status == VeganStatus.UNCERTAIN


def parse_hint(raw: Any, ingredient: str = "") -> Optional[ExternalGuess]:
    """Validate one raw hint. Malformed shapes return None and are logged."""
    if raw is None:
        return None
    if isinstance(raw, ExternalGuess):
        return raw
    if isinstance(raw, IngredientHint):
        hint = raw
    else:
        try:
            hint = IngredientHint.model_validate(raw)
        except ValidationError as e:
            logger.info(
                "HINT_DISCARDED ingredient=%s errors=%d first=%s",
                ingredient[:50], e.error_count(), e.errors()[0].get("msg") if e.errors() else "",
            )
            return None
    return ExternalGuess(status=VeganStatus(hint.is_vegan), confidence=float(hint.confidence))


def resolve_hints(hints: Optional[Mapping[str, Any]]) -> dict[str, Optional[ExternalGuess]]:
    """
    Validate a raw-name -> hint mapping. Keys are kept both raw and normalized
    so lookups succeed for cosmetic variants of the same name.
    """
    resolved: dict[str, Optional[ExternalGuess]] = {}
    if not hints or not isinstance(hints, Mapping):
        return resolved
    for name, raw in hints.items():
        if not isinstance(name, str):
            continue
        guess = parse_hint(raw, name)
        resolved[name] = guess
        resolved.setdefault(normalize(name), guess)
    return resolved


def lookup_hint(resolved: Mapping[str, Optional[ExternalGuess]], raw_name: str) -> Optional[ExternalGuess]:
    if raw_name in resolved:
        return resolved[raw_name]
    return resolved.get(normalize(raw_name))
