"""
Generic probe strategy.

Runs ``<command> --version`` and reads the version from its standard
output. Used on Linux and other Unix-like hosts, and as the macOS fallback
for browsers without a dedicated lookup.
"""

from __future__ import annotations

import re
import subprocess
from typing import Optional

from ...core.config import DEFAULT_PROBE_TIMEOUT, DEFAULT_VERSION_FLAG
from ...core.logging import get_logger
from ..exceptions import NotInstalledError
from ..models import ProbeOutcome, ProbeTarget
from .base import ProbeStrategy

LOGGER = get_logger("detection.strategies.generic")


def parse_version(output: str, pattern: Optional[re.Pattern[str]]) -> str:
    """Extract the version from command output.

    The first capture group of *pattern* wins; without a pattern, or when
    it does not match, the whole output is used with surrounding
    whitespace stripped.
    """
    if pattern is not None:
        match = pattern.search(output)
        if match:
            return match.group(1)
    return output.strip()


class _ProbeCompletion:
    """Single-shot completion for one probe; later completions are ignored."""

    def __init__(self, command: str):
        self._command = command
        self._outcome: Optional[ProbeOutcome] = None
        self.completed = False

    def complete(self, outcome: ProbeOutcome) -> bool:
        if self.completed:
            LOGGER.debug("Ignoring late completion for %s", self._command)
            return False
        self.completed = True
        self._outcome = outcome
        return True

    @property
    def outcome(self) -> ProbeOutcome:
        if self._outcome is None:
            raise RuntimeError(f"Probe for {self._command} has not completed")
        return self._outcome


class GenericProbeStrategy(ProbeStrategy):
    """Probe a browser by running its command with a version flag."""

    def __init__(
        self,
        version_flag: str = DEFAULT_VERSION_FLAG,
        timeout: Optional[float] = DEFAULT_PROBE_TIMEOUT,
    ):
        """
        Args:
            version_flag: Single argument that makes the browser print its version
            timeout: Seconds before a hung process is killed (None = wait forever)
        """
        self._version_flag = version_flag
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "generic"

    def probe(self, target: ProbeTarget) -> ProbeOutcome:
        completion = _ProbeCompletion(target.command)

        try:
            process = subprocess.Popen(
                [target.command, self._version_flag],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            LOGGER.debug("Cannot start %s: %s", target.command, exc)
            completion.complete(ProbeOutcome.failed(NotInstalledError()))
            return completion.outcome

        try:
            output, _ = process.communicate(timeout=self._timeout)
        except subprocess.TimeoutExpired:
            LOGGER.warning("%s %s timed out after %ss", target.command, self._version_flag, self._timeout)
            process.kill()
            process.communicate()
            completion.complete(ProbeOutcome.failed(NotInstalledError()))
            return completion.outcome

        completion.complete(self._interpret(target, process.returncode, output or ""))
        return completion.outcome

    def _interpret(self, target: ProbeTarget, returncode: int, output: str) -> ProbeOutcome:
        if returncode != 0:
            LOGGER.debug("%s exited with status %d", target.command, returncode)
            return ProbeOutcome.failed(NotInstalledError())

        version = parse_version(output, target.version_pattern)
        LOGGER.debug("Detected %s version %s via %s", target.name, version, target.command)
        return ProbeOutcome.found(version)
