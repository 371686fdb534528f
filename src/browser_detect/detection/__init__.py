"""Browser detection: registry, variant expansion, probe strategies and orchestration."""

from .exceptions import (  # noqa: F401
    BrowserDetectError,
    BrowserLookupError,
    NotInstalledError,
    PathLookupFailedError,
    ProbeError,
    UnknownBrowserError,
    VersionLookupFailedError,
)
from .models import (  # noqa: F401
    BrowserFamily,
    DetectedBrowser,
    Installation,
    MultipleCommands,
    ProbeOutcome,
    ProbeTarget,
    SingleCommand,
)
from .orchestrator import BrowserDetector, deduplicate, detect, detect_async  # noqa: F401
from .registry import BROWSER_FAMILIES, families, get_family  # noqa: F401
from .variants import expand_all, variants  # noqa: F401
