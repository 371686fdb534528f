"""
Variant expansion.

Flattens the registry into probe targets, one per (family, variant, command).
A variant with several aliases produces several targets; if more than one
of them resolves to the same browser the orchestrator drops the duplicate.
"""

from __future__ import annotations

from typing import List, Mapping, Optional

from .models import BrowserFamily, ProbeTarget
from .registry import BROWSER_FAMILIES, get_family


def expand_family(family: BrowserFamily) -> List[ProbeTarget]:
    """Expand one family into probe targets, in variant then alias order."""
    return [
        ProbeTarget(
            name=variant_name,
            type=family.name,
            command=command,
            version_pattern=family.version_pattern,
            profile=family.profile,
            headless=family.headless,
        )
        for variant_name, commands in family.variants.items()
        for command in commands.commands
    ]


def variants(family_name: str, registry: Optional[Mapping[str, BrowserFamily]] = None) -> List[ProbeTarget]:
    """Return the probe targets for *family_name*.

    Raises:
        UnknownBrowserError: If the family is not registered.
    """
    return expand_family(get_family(family_name, registry))


def expand_all(registry: Optional[Mapping[str, BrowserFamily]] = None) -> List[ProbeTarget]:
    """Return probe targets for every registered family."""
    source = registry if registry is not None else BROWSER_FAMILIES
    targets: List[ProbeTarget] = []
    for family in source.values():
        targets.extend(expand_family(family))
    return targets
