# tests/conftest.py
import logging

import pytest

from stirling_init.config_models import AppSettings

SETTINGS_ENV_VARS = [name.upper() for name in AppSettings.model_fields] + [
    "INIT_CONFIG_FILE",
    "KUBERNETES_SERVICE_HOST",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the host's environment out of the settings under test."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces the root handlers; put the originals back."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def make_settings(tmp_path):
    """Build AppSettings whose filesystem paths all live under tmp_path."""

    def _make(**overrides):
        values = {
            "tesseract_source_dir": tmp_path / "tesseract-ocr-original",
            "tesseract_target_dir": tmp_path / "tesseract-ocr",
            "apt_lists_dir": tmp_path / "apt-lists",
            "security_jar": tmp_path / "app-security.jar",
            "app_jar": tmp_path / "app.jar",
        }
        values.update(overrides)
        return AppSettings(**values)

    return _make


@pytest.fixture
def app_settings(make_settings):
    return make_settings()
