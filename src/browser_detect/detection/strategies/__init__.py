"""Platform detection strategies."""

from .base import DetectionStrategy, EnumerationStrategy, ProbeStrategy  # noqa: F401
from .darwin import DarwinProbeStrategy  # noqa: F401
from .generic import GenericProbeStrategy, parse_version  # noqa: F401
from .windows import WindowsEnumerationStrategy  # noqa: F401
