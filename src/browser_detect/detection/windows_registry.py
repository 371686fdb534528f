"""
Windows browser enumeration.

Reads the registered web clients under ``SOFTWARE\\Clients\\StartMenuInternet``
(machine and user hives) plus the Internet Explorer App Path, and resolves
the version of each executable from its install directory:

- Chromium-based browsers keep a version-named directory beside the executable
- Firefox ships ``application.ini`` with an ``[App] Version`` entry
- Internet Explorer records ``svcVersion`` in its own registry key
"""

from __future__ import annotations

import configparser
import re
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Any, Iterator, List, Optional, Tuple

from ..core.logging import get_logger

LOGGER = get_logger("detection.windows_registry")

START_MENU_INTERNET = r"SOFTWARE\Clients\StartMenuInternet"
START_MENU_INTERNET_WOW64 = r"SOFTWARE\WOW6432Node\Clients\StartMenuInternet"
IEXPLORE_APP_PATH = r"SOFTWARE\Microsoft\Windows\CurrentVersion\App Paths\IEXPLORE.EXE"
INTERNET_EXPLORER_KEY = r"SOFTWARE\Microsoft\Internet Explorer"

EXECUTABLE_NAMES = {
    "chrome.exe": "chrome",
    "firefox.exe": "firefox",
    "iexplore.exe": "ie",
    "opera.exe": "opera",
    "launcher.exe": "opera",
    "msedge.exe": "edge",
    "safari.exe": "safari",
}

VERSION_DIR_RE = re.compile(r"^\d+(\.\d+)+$")
EXECUTABLE_RE = re.compile(r'^\s*"?([^"]+?\.exe)', re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class InstalledBrowser:
    """A browser reported by the Windows enumerator."""

    name: str
    path: str
    version: str


def parse_command(command: str) -> Optional[str]:
    """Return the executable from a registry ``shell\\open\\command`` value."""
    match = EXECUTABLE_RE.match(command)
    return match.group(1).strip() if match else None


def browser_name_for(executable: str) -> Optional[str]:
    """Map an executable path onto a browser name."""
    path = PureWindowsPath(executable)
    lowered = str(path).lower()
    name = EXECUTABLE_NAMES.get(path.name.lower())
    if name == "chrome" and "chromium" in lowered:
        return "chromium"
    if path.name.lower() == "launcher.exe" and "opera" not in lowered:
        return None
    return name


def _version_key(value: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in value.split("."))


def version_from_install_dir(executable: Path) -> Optional[str]:
    """Read the installed version from files next to *executable*."""
    install_dir = executable.parent
    try:
        versions = [
            child.name
            for child in install_dir.iterdir()
            if child.is_dir() and VERSION_DIR_RE.match(child.name)
        ]
    except OSError as exc:
        LOGGER.debug("Cannot list %s: %s", install_dir, exc)
        return None
    if versions:
        return max(versions, key=_version_key)

    application_ini = install_dir / "application.ini"
    if application_ini.is_file():
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(application_ini, encoding="utf-8")
        except configparser.Error as exc:
            LOGGER.debug("Cannot parse %s: %s", application_ini, exc)
            return None
        return parser.get("App", "Version", fallback=None)
    return None


def _query_default(winreg: Any, hive: Any, key_path: str) -> Optional[str]:
    try:
        with winreg.OpenKey(hive, key_path) as key:
            value, _ = winreg.QueryValueEx(key, "")
    except OSError:
        return None
    return str(value) if value else None


def _client_commands(winreg: Any) -> Iterator[str]:
    for hive in (winreg.HKEY_LOCAL_MACHINE, winreg.HKEY_CURRENT_USER):
        for root in (START_MENU_INTERNET, START_MENU_INTERNET_WOW64):
            try:
                root_key = winreg.OpenKey(hive, root)
            except OSError:
                continue
            with root_key:
                index = 0
                while True:
                    try:
                        client = winreg.EnumKey(root_key, index)
                    except OSError:
                        break
                    index += 1
                    command = _query_default(winreg, hive, rf"{root}\{client}\shell\open\command")
                    if command:
                        yield command

    iexplore = _query_default(winreg, winreg.HKEY_LOCAL_MACHINE, IEXPLORE_APP_PATH)
    if iexplore:
        yield iexplore


def _internet_explorer_version(winreg: Any) -> Optional[str]:
    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, INTERNET_EXPLORER_KEY) as key:
            for value_name in ("svcVersion", "Version"):
                try:
                    value, _ = winreg.QueryValueEx(key, value_name)
                except OSError:
                    continue
                if value:
                    return str(value)
    except OSError:
        return None
    return None


def enumerate_installed() -> List[InstalledBrowser]:
    """Enumerate browsers registered on this Windows host."""
    import winreg

    found: List[InstalledBrowser] = []
    seen = set()
    for command in _client_commands(winreg):
        executable = parse_command(command)
        if not executable or executable.lower() in seen:
            continue
        seen.add(executable.lower())

        name = browser_name_for(executable)
        if name is None:
            LOGGER.debug("Unrecognized browser executable: %s", executable)
            continue
        if not Path(executable).is_file():
            LOGGER.debug("Registered browser missing on disk: %s", executable)
            continue

        if name == "ie":
            version = _internet_explorer_version(winreg)
        else:
            version = version_from_install_dir(Path(executable))
        if not version:
            LOGGER.debug("No version found for %s", executable)
            continue

        found.append(InstalledBrowser(name=name, path=executable, version=version))

    LOGGER.info("Windows enumeration found %d browsers", len(found))
    return found
