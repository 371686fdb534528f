"""
Known browser families.

Commands and version patterns used on Linux and macOS. On Windows the
registry is only consulted for the behaviour flags of enumerated browsers.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from .exceptions import UnknownBrowserError
from .models import BrowserFamily


BROWSER_FAMILIES: Dict[str, BrowserFamily] = {
    family.name: family
    for family in (
        BrowserFamily.build(
            "chrome",
            pattern=r"Google Chrome (\S+)",
            profile=True,
            variants={
                "chrome": ["google-chrome", "google-chrome-stable"],
                "chrome-beta": "google-chrome-beta",
                "chrome-canary": "google-chrome-canary",
            },
        ),
        BrowserFamily.build(
            "chromium",
            pattern=r"Chromium (\S+)",
            profile=True,
            variants={
                "chromium": ["chromium", "chromium-browser"],
            },
        ),
        BrowserFamily.build(
            "firefox",
            pattern=r"Mozilla Firefox (\S+)",
            profile=True,
            variants={
                "firefox": "firefox",
                "firefox-developer": "firefox-developer",
            },
        ),
        BrowserFamily.build(
            "phantomjs",
            pattern=r"(\S+)",
            headless=True,
            variants={"phantomjs": "phantomjs"},
        ),
        BrowserFamily.build(
            "safari",
            variants={"safari": "safari"},
        ),
        BrowserFamily.build(
            "ie",
            variants={"ie": "ie"},
        ),
        BrowserFamily.build(
            "opera",
            pattern=r"Opera (\S+)",
            profile=True,
            variants={"opera": "opera"},
        ),
    )
}


def families(registry: Optional[Mapping[str, BrowserFamily]] = None) -> List[str]:
    """Return the family names in registry order."""
    return list((registry if registry is not None else BROWSER_FAMILIES).keys())


def get_family(name: str, registry: Optional[Mapping[str, BrowserFamily]] = None) -> BrowserFamily:
    """Look up a family by name, raising UnknownBrowserError if absent."""
    source = registry if registry is not None else BROWSER_FAMILIES
    try:
        return source[name]
    except KeyError:
        raise UnknownBrowserError(name) from None
