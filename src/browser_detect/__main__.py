"""Command line entry point: print detected browsers as JSON.

Usage: python -m browser_detect [--version] [--config PATH] [--debug]
"""

import json
import sys
from pathlib import Path
from typing import List, Optional


def _option_value(argv: List[str], flag: str) -> Optional[str]:
    if flag in argv:
        index = argv.index(flag)
        if index + 1 < len(argv):
            return argv[index + 1]
    return None


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    # Handle --version before touching the detection machinery.
    if "--version" in argv or "-V" in argv:
        from .core.app_version import get_app_version
        print(f"browser-detect {get_app_version()}")
        return 0

    from .core.config import load_config
    from .core.logging import configure_logging
    from .detection import BrowserDetector

    config_path = _option_value(argv, "--config")
    try:
        config = load_config(Path(config_path) if config_path else None)
    except (OSError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    logger = configure_logging(level="DEBUG" if "--debug" in argv else config.log_level)
    logger.debug("Detection configuration: %s", config.to_json())

    browsers = BrowserDetector(config=config).detect()
    print(json.dumps([browser.to_dict() for browser in browsers], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
