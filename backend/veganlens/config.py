"""
Feature flags, paths, and centralized configuration.
All resolution relative to the repository root.
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Repo root: backend/veganlens/config.py -> parent=veganlens, parent.parent=backend, parent.parent.parent=repo
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_REPO_ROOT = _BACKEND_DIR.parent

SUPPORTED_LANGUAGES = ("en", "sv")

# --- Feature flags ---
INCLUDE_MATCH_DETAILS = os.environ.get("INCLUDE_MATCH_DETAILS", "").lower() in ("1", "true", "yes")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


# --- Data paths ---
def get_reference_data_path() -> Path:
    override = os.environ.get("REFERENCE_DATA_PATH", "").strip()
    if override:
        return Path(override)
    return _REPO_ROOT / "data" / "reference_sets.json"


# --- Reasoning output ---
def get_reasoning_language() -> str:
    lang = os.environ.get("REASONING_LANGUAGE", "en").strip().lower()
    return lang if lang in SUPPORTED_LANGUAGES else "en"


# --- Startup logging ---
def log_config() -> None:
    path = get_reference_data_path()
    logger.info(
        "CONFIG: reference_data=%s exists=%s reasoning_language=%s include_match_details=%s log_level=%s",
        path, path.exists(), get_reasoning_language(), INCLUDE_MATCH_DETAILS, LOG_LEVEL,
    )
