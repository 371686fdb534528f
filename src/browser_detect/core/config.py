from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_PROBE_TIMEOUT = 10.0
DEFAULT_MAX_WORKERS = 16
DEFAULT_VERSION_FLAG = "--version"

ENV_PROBE_TIMEOUT = "BROWSER_DETECT_PROBE_TIMEOUT"
ENV_MAX_WORKERS = "BROWSER_DETECT_MAX_WORKERS"
ENV_VERSION_FLAG = "BROWSER_DETECT_VERSION_FLAG"


def _parse_timeout(value: Any) -> Optional[float]:
    """Interpret a timeout setting; 0, "none" and "off" disable the timeout."""
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in ("", "none", "off"):
        return None
    timeout = float(value)
    if timeout <= 0:
        return None
    return timeout


@dataclass
class DetectionConfig:
    """Settings for one detection run."""

    probe_timeout: Optional[float] = DEFAULT_PROBE_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    version_flag: str = DEFAULT_VERSION_FLAG
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        # Respect environment variable overrides
        if ENV_PROBE_TIMEOUT in os.environ:
            try:
                self.probe_timeout = _parse_timeout(os.environ[ENV_PROBE_TIMEOUT])
            except ValueError:
                pass
        if ENV_MAX_WORKERS in os.environ:
            try:
                self.max_workers = int(os.environ[ENV_MAX_WORKERS])
            except ValueError:
                pass
        if os.environ.get(ENV_VERSION_FLAG):
            self.version_flag = os.environ[ENV_VERSION_FLAG]

        self.max_workers = max(1, self.max_workers)

    def to_json(self) -> str:
        """Serialize the configuration into a JSON string for diagnostics."""
        data = {
            "probe_timeout": self.probe_timeout,
            "max_workers": self.max_workers,
            "version_flag": self.version_flag,
            "log_level": self.log_level,
        }
        return json.dumps(data, indent=2, sort_keys=True)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            content = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file {path} is not valid YAML: {exc}") from exc
        if not isinstance(content, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level.")
        return content


def _section(overrides: Dict[str, Any], name: str, path: Optional[Path]) -> Dict[str, Any]:
    section = overrides.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config file {path} section '{name}' must be a mapping.")
    return section


def load_config(path: Optional[Path] = None) -> DetectionConfig:
    """Load detection configuration from disk, providing sensible defaults."""

    overrides = _load_yaml(path) if path is not None else {}

    detection_cfg = _section(overrides, "detection", path)
    logging_cfg = _section(overrides, "logging", path)

    try:
        probe_timeout = _parse_timeout(detection_cfg.get("probe_timeout", DEFAULT_PROBE_TIMEOUT))
        max_workers = int(detection_cfg.get("max_workers", DEFAULT_MAX_WORKERS))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Config file {path} has an invalid detection setting: {exc}") from exc

    return DetectionConfig(
        probe_timeout=probe_timeout,
        max_workers=max_workers,
        version_flag=str(detection_cfg.get("version_flag", DEFAULT_VERSION_FLAG)),
        log_level=str(logging_cfg.get("level", "INFO")),
    )
