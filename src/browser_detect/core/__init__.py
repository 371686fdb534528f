"""Ambient services: configuration, logging and shared enums."""

from .config import DetectionConfig, load_config  # noqa: F401
from .enums import HostPlatform, ProbeFailure  # noqa: F401
from .logging import configure_logging, get_logger  # noqa: F401
