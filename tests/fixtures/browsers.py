"""Fixtures that fake installed browsers on disk."""

from __future__ import annotations

import plistlib
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest


posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake browsers are POSIX shell scripts")


def write_fake_browser(bin_dir: Path, command: str, output: str, exit_code: int = 0) -> Path:
    """Write an executable script that prints *output* and exits with *exit_code*."""
    bin_dir.mkdir(parents=True, exist_ok=True)
    script = bin_dir / command
    script.write_text(
        "#!/bin/sh\n"
        f"printf '%s' '{output}'\n"
        f"exit {exit_code}\n",
        encoding="utf-8",
    )
    script.chmod(0o755)
    return script


def write_app_bundle(
    apps_dir: Path,
    bundle_name: str,
    version: Optional[str],
    executable: Optional[str] = None,
    create_executable: bool = True,
) -> Path:
    """Create a minimal ``.app`` bundle with an Info.plist."""
    bundle = apps_dir / bundle_name
    contents = bundle / "Contents"
    (contents / "MacOS").mkdir(parents=True, exist_ok=True)

    info = {"CFBundleName": bundle_name[:-4]}
    if version is not None:
        info["CFBundleShortVersionString"] = version
    if executable is not None:
        info["CFBundleExecutable"] = executable
        if create_executable:
            (contents / "MacOS" / executable).write_bytes(b"")

    with (contents / "Info.plist").open("wb") as handle:
        plistlib.dump(info, handle)
    return bundle


@pytest.fixture
def fake_bin(tmp_path: Path, monkeypatch) -> Callable[..., Path]:
    """Provide a PATH containing only fake browser commands."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))

    def _make(command: str, output: str, exit_code: int = 0) -> Path:
        return write_fake_browser(bin_dir, command, output, exit_code)

    return _make


@pytest.fixture
def apps_dir(tmp_path: Path) -> Path:
    """Empty directory standing in for /Applications."""
    directory = tmp_path / "Applications"
    directory.mkdir()
    return directory
