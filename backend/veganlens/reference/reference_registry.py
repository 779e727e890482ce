"""
Loads the curated reference sets from data/reference_sets.json.
A missing or incomplete dataset is fatal: the engine cannot run without it.
"""
from pathlib import Path
from typing import Optional
import json
import logging

from .reference_schema import ReferenceData
from veganlens.config import get_reference_data_path

logger = logging.getLogger(__name__)


class ReferenceDataError(ValueError):
    """Reference dataset missing, unreadable, or with an empty required set."""


def load_reference_data(path: Optional[Path] = None) -> ReferenceData:
    """Read and validate the reference dataset. Raises ReferenceDataError."""
    path = Path(path) if path else get_reference_data_path()
    if not path.exists():
        raise ReferenceDataError(f"Reference data file not found at {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ReferenceDataError(f"Reference data at {path} could not be read: {e}") from e
    if not isinstance(data, dict):
        raise ReferenceDataError(f"Reference data at {path} must be a JSON object")
    return build_reference_data(data, source=str(path))


def build_reference_data(data: dict, source: str = "<memory>") -> ReferenceData:
    """Validate an in-memory mapping into ReferenceData. Raises ReferenceDataError."""
    reference = ReferenceData.from_dict(data)
    missing = reference.missing_sets()
    if missing:
        raise ReferenceDataError(f"Reference data from {source} has empty required sets: {missing}")

    for token, owners in reference.cross_listed().items():
        logger.warning(
            "REFERENCE_DATA cross_listed token=%s sets=%s (uncertain > non-vegan > safe precedence applies)",
            token, owners,
        )
    logger.info(
        "REFERENCE_DATA loaded version=%s source=%s non_vegan=%d uncertain=%d safe=%d "
        "indicators=%d known_vegan=%d translations=%d",
        reference.version, source,
        len(reference.definitely_non_vegan), len(reference.potentially_non_vegan),
        len(reference.safe_exceptions), len(reference.animal_indicators),
        len(reference.known_vegan), len(reference.translations),
    )
    return reference


_default_reference: Optional[ReferenceData] = None


def get_reference_data(path: Optional[Path] = None) -> ReferenceData:
    """Process-wide reference data, loaded on first use."""
    global _default_reference
    if _default_reference is None:
        _default_reference = load_reference_data(path)
    return _default_reference
