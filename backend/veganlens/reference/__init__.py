from .reference_schema import ReferenceData, REQUIRED_SETS
from .reference_registry import (
    ReferenceDataError,
    build_reference_data,
    get_reference_data,
    load_reference_data,
)

__all__ = [
    "ReferenceData",
    "REQUIRED_SETS",
    "ReferenceDataError",
    "build_reference_data",
    "get_reference_data",
    "load_reference_data",
]
