"""Package version helpers sourced from ``pyproject.toml``."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
import re


@lru_cache(maxsize=1)
def get_app_version() -> str:
    """Return the project version from ``pyproject.toml`` or the installed metadata."""
    pyproject_path = Path(__file__).resolve().parents[3] / "pyproject.toml"
    try:
        content = pyproject_path.read_text(encoding="utf-8")
    except OSError:
        content = ""

    match = re.search(r'^\s*version\s*=\s*"([^"]+)"\s*$', content, flags=re.MULTILINE)
    if match:
        return match.group(1)

    try:
        return metadata.version("browser-detect")
    except metadata.PackageNotFoundError:
        return "0.0.0"
