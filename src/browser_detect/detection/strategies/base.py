"""
Detection strategies - base module.

Defines the interfaces the orchestrator dispatches to. A probe strategy
checks one target at a time and runs concurrently with other probes; an
enumeration strategy discovers everything in a single call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Mapping

from ..models import BrowserFamily, DetectedBrowser, ProbeOutcome, ProbeTarget


class DetectionStrategy(ABC):
    """Common base for platform detection strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name for logging."""


class ProbeStrategy(DetectionStrategy):
    """Checks individual probe targets."""

    @abstractmethod
    def probe(self, target: ProbeTarget) -> ProbeOutcome:
        """
        Check whether *target* is installed and at what version.

        Implementations report failures through the returned outcome and
        must not raise for an absent browser.
        """


class EnumerationStrategy(DetectionStrategy):
    """Discovers all installed browsers at once, without probe targets."""

    @abstractmethod
    def enumerate(self, registry: Mapping[str, BrowserFamily]) -> List[DetectedBrowser]:
        """Return every browser found; *registry* supplies behaviour flags."""
