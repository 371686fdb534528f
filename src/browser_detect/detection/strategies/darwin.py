"""
macOS probe strategy.

Browsers whose command-line binary is missing or lacks a usable
``--version`` are looked up through their application bundles. Anything
without a registered lookup goes through the generic strategy.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

from ...core.logging import get_logger
from ..darwin_lookups import MultiInstallLookup, SingleInstallLookup, default_lookups
from ..exceptions import BrowserLookupError, PathLookupFailedError, VersionLookupFailedError
from ..models import Installation, ProbeOutcome, ProbeTarget
from .base import ProbeStrategy
from .generic import GenericProbeStrategy

LOGGER = get_logger("detection.strategies.darwin")

Lookup = Union[SingleInstallLookup, MultiInstallLookup]


class DarwinProbeStrategy(ProbeStrategy):
    """Probe via per-browser bundle lookups, falling back to the generic probe."""

    def __init__(
        self,
        lookups: Optional[Mapping[str, Lookup]] = None,
        fallback: Optional[ProbeStrategy] = None,
    ):
        self._lookups = dict(lookups) if lookups is not None else default_lookups()
        self._fallback = fallback or GenericProbeStrategy()

    @property
    def name(self) -> str:
        return "darwin"

    def probe(self, target: ProbeTarget) -> ProbeOutcome:
        lookup = self._lookups.get(target.name)
        if lookup is None:
            return self._fallback.probe(target)

        if isinstance(lookup, MultiInstallLookup):
            return self._probe_all(target.name, lookup)
        return self._probe_single(target.name, lookup)

    def _probe_all(self, name: str, lookup: MultiInstallLookup) -> ProbeOutcome:
        try:
            installed = lookup.all_installed()
        except BrowserLookupError as exc:
            LOGGER.debug("Lookup for %s failed: %s", name, exc)
            return ProbeOutcome.failed(VersionLookupFailedError(name))

        if not installed:
            return ProbeOutcome.failed(VersionLookupFailedError(name))
        return ProbeOutcome.found_all([Installation(version, path) for version, path in installed])

    def _probe_single(self, name: str, lookup: SingleInstallLookup) -> ProbeOutcome:
        try:
            version = lookup.version()
        except BrowserLookupError as exc:
            LOGGER.debug("Version lookup for %s failed: %s", name, exc)
            version = None
        if not version:
            return ProbeOutcome.failed(VersionLookupFailedError(name))

        try:
            path = lookup.path()
        except BrowserLookupError as exc:
            LOGGER.debug("Path lookup for %s failed: %s", name, exc)
            path = None
        if not path:
            return ProbeOutcome.failed(PathLookupFailedError(name))

        return ProbeOutcome.found(version, path)
