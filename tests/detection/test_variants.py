"""Tests for variant expansion."""

from __future__ import annotations

import re

import pytest

from browser_detect.detection.exceptions import UnknownBrowserError
from browser_detect.detection.models import BrowserFamily, ProbeTarget
from browser_detect.detection.registry import BROWSER_FAMILIES, families
from browser_detect.detection.variants import expand_all, expand_family, variants


@pytest.mark.parametrize("family", families())
def test_every_family_has_targets(family):
    targets = variants(family)
    assert targets
    for target in targets:
        assert target.command
        assert target.type == family


def test_chrome_expansion_order():
    targets = variants("chrome")
    assert [(t.name, t.command) for t in targets] == [
        ("chrome", "google-chrome"),
        ("chrome", "google-chrome-stable"),
        ("chrome-beta", "google-chrome-beta"),
        ("chrome-canary", "google-chrome-canary"),
    ]


def test_targets_carry_family_policy():
    """Single-command and multi-command variants both get the pattern and flags."""
    for target in variants("chrome") + variants("firefox"):
        assert target.version_pattern is not None
        assert target.profile is True
        assert target.headless is False

    phantom = variants("phantomjs")
    assert phantom == [
        ProbeTarget(
            name="phantomjs",
            type="phantomjs",
            command="phantomjs",
            version_pattern=re.compile(r"(\S+)"),
            profile=False,
            headless=True,
        )
    ]


def test_unknown_family_is_invalid_argument():
    with pytest.raises(UnknownBrowserError):
        variants("mosaic")
    with pytest.raises(ValueError):
        variants("mosaic")


def test_expand_all_covers_registry():
    targets = expand_all()
    expected = sum(
        len(commands.commands)
        for family in BROWSER_FAMILIES.values()
        for commands in family.variants.values()
    )
    assert len(targets) == expected
    assert [t.type for t in targets][0] == "chrome"
    assert [t.type for t in targets][-1] == "opera"


def test_expansion_copies_flags():
    """Rebuilding a family after expansion leaves existing targets untouched."""
    family = BrowserFamily.build("custom", pattern=r"Custom (\S+)", profile=True, variants={"custom": "custom"})
    registry = {"custom": family}
    targets = expand_all(registry)

    registry["custom"] = BrowserFamily.build("custom", profile=False, headless=True, variants={"custom": "other"})

    assert targets[0].profile is True
    assert targets[0].headless is False
    assert targets[0].command == "custom"
    assert expand_family(registry["custom"])[0].command == "other"


def test_variants_with_custom_registry():
    family = BrowserFamily.build("custom", variants={"custom": ["a", "b"]})
    assert [t.command for t in variants("custom", {"custom": family})] == ["a", "b"]
