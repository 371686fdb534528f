"""browser-detect: find the web browsers installed on a host.

Reports each browser's variant name, family, version and launch command on
Windows, macOS and Unix-like systems.
"""

from .detection import (  # noqa: F401
    BROWSER_FAMILIES,
    BrowserDetector,
    DetectedBrowser,
    ProbeTarget,
    UnknownBrowserError,
    detect,
    detect_async,
    families,
    variants,
)
