"""Tests for the generic ``--version`` probe strategy."""

from __future__ import annotations

import re
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from browser_detect.core.enums import ProbeFailure
from browser_detect.detection.exceptions import NotInstalledError
from browser_detect.detection.models import ProbeOutcome, ProbeTarget
from browser_detect.detection.strategies.generic import (
    GenericProbeStrategy,
    _ProbeCompletion,
    parse_version,
)
from tests.fixtures.browsers import posix_only

CHROME_PATTERN = re.compile(r"Google Chrome (\S+)")


def _target(command: str = "google-chrome", pattern=CHROME_PATTERN) -> ProbeTarget:
    return ProbeTarget(
        name="chrome",
        type="chrome",
        command=command,
        version_pattern=pattern,
        profile=True,
        headless=False,
    )


class TestParseVersion:
    def test_pattern_match(self):
        assert parse_version("Google Chrome 91.0.4472.124\n", CHROME_PATTERN) == "91.0.4472.124"

    def test_no_pattern_strips_output(self):
        assert parse_version("  5.4.1  \n", None) == "5.4.1"

    def test_pattern_miss_strips_output(self):
        assert parse_version(" Chromium 90.0 \n", CHROME_PATTERN) == "Chromium 90.0"


class TestProbeCompletion:
    def test_second_completion_ignored(self):
        completion = _ProbeCompletion("firefox")
        first = ProbeOutcome.failed(NotInstalledError())

        assert completion.complete(first) is True
        assert completion.complete(ProbeOutcome.found("1.0")) is False
        assert completion.outcome is first

    def test_outcome_before_completion(self):
        with pytest.raises(RuntimeError):
            _ProbeCompletion("firefox").outcome


@posix_only
class TestGenericProbe:
    def test_version_from_pattern(self, fake_bin):
        fake_bin("google-chrome", "Google Chrome 91.0.4472.124\n")

        outcome = GenericProbeStrategy().probe(_target())

        assert outcome.ok
        assert [(i.version, i.path) for i in outcome.installs] == [("91.0.4472.124", None)]

    def test_version_without_pattern(self, fake_bin):
        fake_bin("safari", "  5.4.1  \n")

        outcome = GenericProbeStrategy().probe(_target("safari", pattern=None))

        assert outcome.installs[0].version == "5.4.1"

    def test_non_zero_exit_not_installed(self, fake_bin):
        fake_bin("google-chrome", "Google Chrome 91.0.4472.124\n", exit_code=1)

        outcome = GenericProbeStrategy().probe(_target())

        assert not outcome.ok
        assert outcome.failure is ProbeFailure.NOT_INSTALLED
        assert outcome.error.reason == "not installed"
        assert outcome.to_browsers(_target()) == []

    def test_missing_command_not_installed(self, fake_bin):
        outcome = GenericProbeStrategy().probe(_target("google-chrome-canary"))

        assert not outcome.ok
        assert outcome.error.reason == "not installed"

    def test_uses_configured_version_flag(self, fake_bin, tmp_path):
        bin_dir = tmp_path / "bin"
        script = bin_dir / "opera"
        script.write_text('#!/bin/sh\nprintf "Opera %s\\n" "$1"\n', encoding="utf-8")
        script.chmod(0o755)

        outcome = GenericProbeStrategy(version_flag="-v").probe(
            _target("opera", pattern=re.compile(r"Opera (\S+)"))
        )

        assert outcome.installs[0].version == "-v"


def test_spawn_failure_completes_once():
    """A spawn error reports one failure and never reaches the exit handling."""
    strategy = GenericProbeStrategy()
    with patch("browser_detect.detection.strategies.generic.subprocess.Popen",
               side_effect=FileNotFoundError("nope")), \
         patch.object(_ProbeCompletion, "complete", autospec=True,
                      side_effect=_ProbeCompletion.complete) as mock_complete, \
         patch.object(strategy, "_interpret") as mock_interpret:
        outcome = strategy.probe(_target())

    assert mock_complete.call_count == 1
    mock_interpret.assert_not_called()
    assert outcome.failure is ProbeFailure.NOT_INSTALLED


def test_timeout_kills_process():
    process = MagicMock()
    process.communicate.side_effect = [subprocess.TimeoutExpired("google-chrome", 1), ("", None)]

    with patch("browser_detect.detection.strategies.generic.subprocess.Popen", return_value=process):
        outcome = GenericProbeStrategy(timeout=1).probe(_target())

    process.kill.assert_called_once()
    assert outcome.failure is ProbeFailure.NOT_INSTALLED


def test_popen_arguments():
    process = MagicMock()
    process.communicate.return_value = ("Google Chrome 100.0\n", None)
    process.returncode = 0

    with patch("browser_detect.detection.strategies.generic.subprocess.Popen",
               return_value=process) as mock_popen:
        outcome = GenericProbeStrategy(timeout=None).probe(_target())

    assert mock_popen.call_args.args[0] == ["google-chrome", "--version"]
    process.communicate.assert_called_once_with(timeout=None)
    assert outcome.installs[0].version == "100.0"
