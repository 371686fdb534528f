"""Tests for the ``python -m browser_detect`` entry point."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from browser_detect.__main__ import main
from browser_detect.core.logging import get_logger
from browser_detect.detection.models import DetectedBrowser


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    get_logger().handlers.clear()


def test_version_flag(capsys):
    with patch("browser_detect.core.app_version.get_app_version", return_value="9.9.9"):
        assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "browser-detect 9.9.9"


def test_prints_detected_browsers_as_json(capsys):
    found = [DetectedBrowser("chrome", "chrome", "google-chrome", "91.0.4472.124", True, False)]
    with patch("browser_detect.detection.BrowserDetector.detect", return_value=found):
        assert main([]) == 0

    assert json.loads(capsys.readouterr().out) == [found[0].to_dict()]


def test_invalid_config(tmp_path, capsys):
    config_path = tmp_path / "config.yml"
    config_path.write_text("- not a mapping\n", encoding="utf-8")

    assert main(["--config", str(config_path)]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_non_mapping_section_exits_with_error(tmp_path, capsys):
    config_path = tmp_path / "config.yml"
    config_path.write_text("detection: 5\n", encoding="utf-8")

    assert main(["--config", str(config_path)]) == 2
    assert "section 'detection'" in capsys.readouterr().err


def test_debug_logs_configuration(caplog):
    with patch("browser_detect.detection.BrowserDetector.detect", return_value=[]):
        with caplog.at_level(logging.DEBUG, logger="browser_detect"):
            assert main(["--debug"]) == 0

    assert "Detection configuration" in caplog.text
    assert '"version_flag": "--version"' in caplog.text
