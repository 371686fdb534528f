"""
Windows enumeration strategy.

Discovery is left entirely to the enumerator; the registry only supplies
behaviour flags for the names it recognizes.
"""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional

from ...core.logging import get_logger
from ..models import BrowserFamily, DetectedBrowser
from ..windows_registry import InstalledBrowser, enumerate_installed
from .base import EnumerationStrategy

LOGGER = get_logger("detection.strategies.windows")


class WindowsEnumerationStrategy(EnumerationStrategy):
    """Map the Windows enumerator's findings onto detected browsers."""

    def __init__(self, enumerator: Optional[Callable[[], List[InstalledBrowser]]] = None):
        self._enumerator = enumerator or enumerate_installed

    @property
    def name(self) -> str:
        return "windows"

    def enumerate(self, registry: Mapping[str, BrowserFamily]) -> List[DetectedBrowser]:
        browsers: List[DetectedBrowser] = []
        for installed in self._enumerator():
            family = registry.get(installed.name)
            if family is None:
                LOGGER.debug("%s is not a registered family; flags left unset", installed.name)
            browsers.append(
                DetectedBrowser(
                    name=installed.name,
                    type=installed.name,
                    command=installed.path,
                    version=installed.version,
                    profile=family.profile if family is not None else None,
                    headless=family.headless if family is not None else None,
                )
            )
        return browsers
