"""
Unit tests for path resolution and environment-driven settings.
Run from repo root: python -m pytest backend/tests/test_config.py -v
"""


def test_backend_and_repo_root():
    from veganlens import config
    assert config._BACKEND_DIR.is_dir()
    assert (config._BACKEND_DIR / "veganlens").is_dir()
    assert config._REPO_ROOT.is_dir()
    assert config._REPO_ROOT.name != "veganlens"


def test_reference_path_resolution(monkeypatch):
    """Default reference path is repo_root/data/reference_sets.json."""
    from veganlens.config import _REPO_ROOT, get_reference_data_path
    monkeypatch.delenv("REFERENCE_DATA_PATH", raising=False)
    path = get_reference_data_path()
    assert path == _REPO_ROOT / "data" / "reference_sets.json"
    assert path.exists(), f"Expected {path} to exist"


def test_reasoning_language(monkeypatch):
    from veganlens.config import get_reasoning_language
    monkeypatch.setenv("REASONING_LANGUAGE", "SV")
    assert get_reasoning_language() == "sv"
    monkeypatch.setenv("REASONING_LANGUAGE", "de")
    assert get_reasoning_language() == "en"
    monkeypatch.delenv("REASONING_LANGUAGE")
    assert get_reasoning_language() == "en"


def test_log_config_reports_settings(caplog):
    import logging
    from veganlens.config import log_config
    caplog.set_level(logging.INFO)
    log_config()
    assert "CONFIG: reference_data=" in caplog.text
