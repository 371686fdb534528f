"""
Detection data model.

BrowserFamily describes a product line in the registry, ProbeTarget is one
concrete command to check, ProbeOutcome is the result of checking it, and
DetectedBrowser is what callers receive.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..core.enums import ProbeFailure
from .exceptions import ProbeError


@dataclass(frozen=True, slots=True)
class SingleCommand:
    """Variant launched by exactly one command."""

    command: str

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError("Variant command must be a non-empty string")

    @property
    def commands(self) -> Tuple[str, ...]:
        return (self.command,)


@dataclass(frozen=True, slots=True)
class MultipleCommands:
    """Variant reachable through several binary names (e.g. google-chrome, google-chrome-stable)."""

    aliases: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.aliases:
            raise ValueError("Variant must have at least one command")
        if not all(self.aliases):
            raise ValueError("Variant commands must be non-empty strings")

    @property
    def commands(self) -> Tuple[str, ...]:
        return self.aliases


VariantCommands = Union[SingleCommand, MultipleCommands]


@dataclass(frozen=True)
class BrowserFamily:
    """Policy for one browser product line."""

    name: str
    version_pattern: Optional[re.Pattern[str]]
    profile: bool
    headless: bool
    variants: Mapping[str, VariantCommands]

    def __post_init__(self) -> None:
        if not self.variants:
            raise ValueError(f"Browser family {self.name!r} has no variants")

    @classmethod
    def build(
        cls,
        name: str,
        *,
        pattern: Optional[str] = None,
        profile: bool = False,
        headless: bool = False,
        variants: Mapping[str, Union[str, List[str], Tuple[str, ...]]],
    ) -> "BrowserFamily":
        """Build a family from plain strings, tagging each variant's commands."""
        tagged: Dict[str, VariantCommands] = {}
        for variant_name, commands in variants.items():
            if isinstance(commands, str):
                tagged[variant_name] = SingleCommand(commands)
            else:
                tagged[variant_name] = MultipleCommands(tuple(commands))
        return cls(
            name=name,
            version_pattern=re.compile(pattern) if pattern is not None else None,
            profile=profile,
            headless=headless,
            variants=tagged,
        )


@dataclass(frozen=True)
class ProbeTarget:
    """One (variant, command) pair to check, with the family's policy copied in."""

    name: str
    type: str
    command: str
    version_pattern: Optional[re.Pattern[str]] = None
    profile: bool = False
    headless: bool = False


@dataclass(frozen=True)
class DetectedBrowser:
    """A browser found on the host."""

    name: str
    type: str
    command: str
    version: str
    profile: Optional[bool] = None
    headless: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "command": self.command,
            "version": self.version,
            "profile": self.profile,
            "headless": self.headless,
        }


@dataclass(frozen=True, slots=True)
class Installation:
    """Version and optional path reported by a successful probe."""

    version: str
    path: Optional[str] = None


@dataclass(frozen=True)
class ProbeOutcome:
    """Completion of one probe: installs on success, an error otherwise."""

    installs: Tuple[Installation, ...] = ()
    error: Optional[ProbeError] = None

    @classmethod
    def found(cls, version: str, path: Optional[str] = None) -> "ProbeOutcome":
        return cls(installs=(Installation(version, path),))

    @classmethod
    def found_all(cls, installs: List[Installation]) -> "ProbeOutcome":
        return cls(installs=tuple(installs))

    @classmethod
    def failed(cls, error: ProbeError) -> "ProbeOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failure(self) -> Optional[ProbeFailure]:
        return self.error.failure if self.error is not None else None

    def to_browsers(self, target: ProbeTarget) -> List[DetectedBrowser]:
        """Turn a successful outcome into results for *target*; failures yield nothing."""
        if not self.ok:
            return []
        return [
            DetectedBrowser(
                name=target.name,
                type=target.type,
                command=install.path or target.command,
                version=install.version,
                profile=target.profile,
                headless=target.headless,
            )
            for install in self.installs
        ]
