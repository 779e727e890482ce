"""
Immutable container for the curated reference sets.
Built once at startup and injected into the engine; never mutated afterwards.
"""
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from veganlens.normalization.normalizer import normalize

REQUIRED_SETS = (
    "definitely_non_vegan",
    "potentially_non_vegan",
    "safe_exceptions",
    "animal_indicators",
)


def _ordered_unique(items: Iterable[str]) -> tuple[str, ...]:
    """Keep file order, drop blanks and normalized duplicates (first occurrence wins)."""
    seen: set[str] = set()
    out: list[str] = []
    for item in items or []:
        if not isinstance(item, str):
            continue
        key = normalize(item)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(item.strip())
    return tuple(out)


@dataclass(frozen=True)
class ReferenceData:
    definitely_non_vegan: tuple[str, ...]
    potentially_non_vegan: tuple[str, ...]
    safe_exceptions: tuple[str, ...]
    animal_indicators: tuple[str, ...]
    known_vegan: tuple[str, ...] = ()
    # canonical name -> names in other languages
    translations: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    version: str = "0"

    def missing_sets(self) -> list[str]:
        """Names of required sets that are empty."""
        return [name for name in REQUIRED_SETS if not getattr(self, name)]

    def cross_listed(self) -> dict[str, list[str]]:
        """Normalized tokens present in more than one verdict set -> set names."""
        owners: dict[str, list[str]] = {}
        for name in ("potentially_non_vegan", "definitely_non_vegan", "safe_exceptions"):
            for token in getattr(self, name):
                owners.setdefault(normalize(token), []).append(name)
        return {k: v for k, v in owners.items() if len(v) > 1}

    def translation_index(self) -> dict[str, str]:
        """Normalized foreign name -> normalized canonical name. First listing wins."""
        index: dict[str, str] = {}
        for canonical, names in self.translations.items():
            canon_key = normalize(canonical)
            for name in names:
                index.setdefault(normalize(name), canon_key)
        return index

    def vocabulary(self) -> tuple[str, ...]:
        """Every token the engine knows, in a fixed order (used to spot gibberish)."""
        words: list[str] = []
        for name in REQUIRED_SETS + ("known_vegan",):
            words.extend(getattr(self, name))
        for canonical, names in self.translations.items():
            words.append(canonical)
            words.extend(names)
        return _ordered_unique(words)

    def short_tokens(self, max_len: int = 4) -> frozenset[str]:
        """Normalized known tokens of at most max_len characters."""
        return frozenset(
            normalize(w) for w in self.vocabulary() if len(normalize(w)) <= max_len
        )

    @classmethod
    def from_dict(cls, d: dict) -> "ReferenceData":
        translations = d.get("translations") or {}
        return cls(
            definitely_non_vegan=_ordered_unique(d.get("definitely_non_vegan", [])),
            potentially_non_vegan=_ordered_unique(d.get("potentially_non_vegan", [])),
            safe_exceptions=_ordered_unique(d.get("safe_exceptions", [])),
            animal_indicators=_ordered_unique(d.get("animal_indicators", [])),
            known_vegan=_ordered_unique(d.get("known_vegan", [])),
            translations={
                str(k): _ordered_unique(v) for k, v in translations.items()
                if isinstance(v, list)
            },
            version=str(d.get("version", "0")),
        )

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "definitely_non_vegan": list(self.definitely_non_vegan),
            "potentially_non_vegan": list(self.potentially_non_vegan),
            "safe_exceptions": list(self.safe_exceptions),
            "animal_indicators": list(self.animal_indicators),
            "known_vegan": list(self.known_vegan),
            "translations": {k: list(v) for k, v in self.translations.items()},
        }
