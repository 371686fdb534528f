"""
Exceptions for browser detection.
"""

from ..core.enums import ProbeFailure


class BrowserDetectError(Exception):
    """Base exception for detection errors."""
    pass


class UnknownBrowserError(BrowserDetectError, ValueError):
    """Raised when a browser family name is not in the registry."""

    def __init__(self, family: str):
        self.family = family
        super().__init__(f"Unknown browser family: {family!r}")


class BrowserLookupError(BrowserDetectError):
    """Raised by platform lookups that cannot inspect an installation."""
    pass


class ProbeError(BrowserDetectError):
    """A single probe did not produce a usable result."""

    failure = ProbeFailure.NOT_INSTALLED

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class NotInstalledError(ProbeError):
    """Command not found, not executable, or exited with a non-zero status."""

    def __init__(self, reason: str = "not installed"):
        super().__init__(reason)


class VersionLookupFailedError(ProbeError):
    """Platform lookup returned no version."""

    failure = ProbeFailure.VERSION_LOOKUP_FAILED

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"failed to get version for {name}")


class PathLookupFailedError(ProbeError):
    """Version was found but the install path could not be resolved."""

    failure = ProbeFailure.PATH_LOOKUP_FAILED

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"failed to get path for {name}")
