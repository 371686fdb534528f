"""
macOS application bundle lookups.

Reads ``Contents/Info.plist`` of ``.app`` bundles installed in the usual
application folders. Version comes from ``CFBundleShortVersionString``,
the launch path from ``CFBundleExecutable``.
"""

from __future__ import annotations

import plistlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..core.logging import get_logger
from .exceptions import BrowserLookupError

LOGGER = get_logger("detection.darwin_lookups")

FIREFOX_CHANNEL_BUNDLES = (
    "Firefox.app",
    "Firefox Developer Edition.app",
    "Firefox Nightly.app",
)


def application_dirs() -> Tuple[Path, ...]:
    return (Path("/Applications"), Path.home() / "Applications")


def read_bundle_info(bundle: Path) -> Dict[str, Any]:
    """Load a bundle's Info.plist, raising BrowserLookupError when unreadable."""
    info_path = bundle / "Contents" / "Info.plist"
    try:
        with info_path.open("rb") as handle:
            info = plistlib.load(handle)
    except (OSError, plistlib.InvalidFileException, ValueError) as exc:
        raise BrowserLookupError(f"Cannot read {info_path}: {exc}") from exc
    if not isinstance(info, dict):
        raise BrowserLookupError(f"{info_path} does not contain a dictionary")
    return info


def find_bundle(bundle_name: str, search_dirs: Iterable[Path]) -> Optional[Path]:
    for directory in search_dirs:
        candidate = directory / bundle_name
        if candidate.is_dir():
            return candidate
    return None


class SingleInstallLookup(ABC):
    """Lookup for a browser with one install location."""

    @abstractmethod
    def version(self) -> Optional[str]:
        """Installed version, or None when not installed."""

    @abstractmethod
    def path(self) -> Optional[str]:
        """Launch path of the installed browser."""


class MultiInstallLookup(ABC):
    """Lookup that may find several installed copies (e.g. release channels)."""

    @abstractmethod
    def all_installed(self) -> List[Tuple[str, str]]:
        """Return ``(version, path)`` for each installed copy."""


class AppBundleLookup(SingleInstallLookup):
    """Look up one application bundle by name."""

    def __init__(self, bundle_name: str, search_dirs: Optional[Sequence[Path]] = None):
        self.bundle_name = bundle_name
        self._search_dirs = tuple(search_dirs) if search_dirs is not None else application_dirs()

    def _bundle(self) -> Path:
        bundle = find_bundle(self.bundle_name, self._search_dirs)
        if bundle is None:
            raise BrowserLookupError(f"{self.bundle_name} not found")
        return bundle

    def version(self) -> Optional[str]:
        info = read_bundle_info(self._bundle())
        version = info.get("CFBundleShortVersionString") or info.get("CFBundleVersion")
        return str(version) if version else None

    def path(self) -> Optional[str]:
        bundle = self._bundle()
        executable = read_bundle_info(bundle).get("CFBundleExecutable")
        if not executable:
            raise BrowserLookupError(f"{bundle} has no CFBundleExecutable")
        executable_path = bundle / "Contents" / "MacOS" / executable
        if not executable_path.is_file():
            raise BrowserLookupError(f"{executable_path} does not exist")
        return str(executable_path)


class BundleChannelsLookup(MultiInstallLookup):
    """Look up every installed bundle out of a set of channel bundles."""

    def __init__(self, bundle_names: Sequence[str], search_dirs: Optional[Sequence[Path]] = None):
        self.bundle_names = tuple(bundle_names)
        self._search_dirs = tuple(search_dirs) if search_dirs is not None else application_dirs()

    def all_installed(self) -> List[Tuple[str, str]]:
        installed: List[Tuple[str, str]] = []
        for directory in self._search_dirs:
            for bundle_name in self.bundle_names:
                if not (directory / bundle_name).is_dir():
                    continue
                lookup = AppBundleLookup(bundle_name, [directory])
                try:
                    version = lookup.version()
                    path = lookup.path()
                except BrowserLookupError as exc:
                    LOGGER.debug("Skipping %s in %s: %s", bundle_name, directory, exc)
                    continue
                if version and path:
                    installed.append((version, path))

        if not installed:
            raise BrowserLookupError(f"None of {', '.join(self.bundle_names)} installed")
        return installed


def default_lookups(
    search_dirs: Optional[Sequence[Path]] = None,
) -> Dict[str, Union[SingleInstallLookup, MultiInstallLookup]]:
    """Lookups keyed by variant name; unlisted variants use the generic probe."""
    chrome = AppBundleLookup("Google Chrome.app", search_dirs)
    return {
        "safari": AppBundleLookup("Safari.app", search_dirs),
        "firefox": BundleChannelsLookup(FIREFOX_CHANNEL_BUNDLES, search_dirs),
        "chrome": chrome,
        "google-chrome": chrome,
        "chrome-canary": AppBundleLookup("Google Chrome Canary.app", search_dirs),
        "chromium": AppBundleLookup("Chromium.app", search_dirs),
        "opera": AppBundleLookup("Opera.app", search_dirs),
    }
