"""
Core Enumerations

Centralized enum definitions for consistent typing across the codebase.
Using StrEnum (Python 3.11+) for string-based enums that serialize naturally.
"""

from enum import StrEnum


class HostPlatform(StrEnum):
    """Host platform families with distinct detection strategies."""

    WINDOWS = "win32"
    DARWIN = "darwin"
    OTHER = "other"

    @classmethod
    def from_sys_platform(cls, value: str) -> "HostPlatform":
        """Map a ``sys.platform`` string onto a detection platform."""
        if value == "win32" or value == "cygwin":
            return cls.WINDOWS
        if value == "darwin":
            return cls.DARWIN
        return cls.OTHER


class ProbeFailure(StrEnum):
    """Classification of per-probe failure reasons."""

    NOT_INSTALLED = "not_installed"
    VERSION_LOOKUP_FAILED = "version_lookup_failed"
    PATH_LOOKUP_FAILED = "path_lookup_failed"
