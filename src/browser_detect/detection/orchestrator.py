"""
Detection orchestrator.

Selects the strategy for the host platform, probes every target
concurrently and reports the merged, de-duplicated result exactly once.
"""

from __future__ import annotations

import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, Iterable, List, Mapping, Optional, Union

from ..core.config import DetectionConfig
from ..core.enums import HostPlatform
from ..core.logging import get_logger
from .darwin_lookups import default_lookups
from .models import BrowserFamily, DetectedBrowser, ProbeOutcome, ProbeTarget
from .registry import BROWSER_FAMILIES
from .strategies import (
    DarwinProbeStrategy,
    DetectionStrategy,
    EnumerationStrategy,
    GenericProbeStrategy,
    ProbeStrategy,
    WindowsEnumerationStrategy,
)
from .variants import expand_all

LOGGER = get_logger("detection.orchestrator")

DetectCallback = Callable[[List[DetectedBrowser]], None]


def current_platform() -> HostPlatform:
    """Platform of the running interpreter."""
    return HostPlatform.from_sys_platform(sys.platform)


def deduplicate(browsers: Iterable[DetectedBrowser]) -> List[DetectedBrowser]:
    """Drop entries equal in every field, keeping first-seen order."""
    return list(dict.fromkeys(browsers))


class _ResultCollector:
    """Fan-in point for concurrent probes.

    Appends each probe's results under a lock, counts completions and
    finalizes exactly once when every probe has reported.
    """

    def __init__(self, total: int, on_complete: DetectCallback):
        self._total = total
        self._on_complete = on_complete
        self._results: List[DetectedBrowser] = []
        self._completed = 0
        self._finalized = False
        self._lock = threading.Lock()

    def add(self, browsers: List[DetectedBrowser]) -> None:
        with self._lock:
            self._results.extend(browsers)
            self._completed += 1
            if self._finalized or self._completed < self._total:
                return
            self._finalized = True
            results = deduplicate(self._results)

        self._on_complete(results)

    def finish_if_empty(self) -> None:
        with self._lock:
            if self._total or self._finalized:
                return
            self._finalized = True
        self._on_complete([])


class BrowserDetector:
    """Detect installed browsers on the host."""

    def __init__(
        self,
        platform: Optional[Union[HostPlatform, str]] = None,
        config: Optional[DetectionConfig] = None,
        strategy: Optional[DetectionStrategy] = None,
        registry: Optional[Mapping[str, BrowserFamily]] = None,
    ):
        """
        Args:
            platform: Host platform, or a ``sys.platform`` string (default: running host)
            config: Detection settings (default: DetectionConfig())
            strategy: Explicit strategy, bypassing platform selection
            registry: Browser families to probe (default: BROWSER_FAMILIES)

        Raises:
            TypeError: If *strategy* is neither a probe nor an enumeration strategy.
        """
        if strategy is not None and not isinstance(strategy, (ProbeStrategy, EnumerationStrategy)):
            raise TypeError(f"Unsupported detection strategy: {strategy!r}")

        if platform is None:
            self.platform = current_platform()
        elif isinstance(platform, HostPlatform):
            self.platform = platform
        else:
            self.platform = HostPlatform.from_sys_platform(platform)
        self.config = config or DetectionConfig()
        self.registry = registry if registry is not None else BROWSER_FAMILIES
        self._strategy = strategy

    def select_strategy(self) -> DetectionStrategy:
        """Return the strategy for this detector's platform."""
        if self._strategy is not None:
            return self._strategy

        generic = GenericProbeStrategy(
            version_flag=self.config.version_flag,
            timeout=self.config.probe_timeout,
        )
        if self.platform == HostPlatform.WINDOWS:
            return WindowsEnumerationStrategy()
        if self.platform == HostPlatform.DARWIN:
            return DarwinProbeStrategy(lookups=default_lookups(), fallback=generic)
        return generic

    def detect(self) -> List[DetectedBrowser]:
        """Detect browsers and return them once every probe has finished."""
        results: List[DetectedBrowser] = []
        self._run(results.extend)
        return results

    def detect_async(self, callback: DetectCallback) -> threading.Thread:
        """
        Detect browsers in the background.

        *callback* receives the final list exactly once. The returned
        thread can be joined to wait for completion.
        """
        thread = threading.Thread(
            target=self._run,
            args=(callback,),
            name="browser-detect",
            daemon=True,
        )
        thread.start()
        return thread

    def _run(self, callback: DetectCallback) -> None:
        strategy = self.select_strategy()
        LOGGER.info("Detecting browsers on %s using %s strategy", self.platform, strategy.name)

        if isinstance(strategy, EnumerationStrategy):
            try:
                browsers = strategy.enumerate(self.registry)
            except Exception:
                LOGGER.exception("Browser enumeration failed")
                browsers = []
            self._finish(callback, deduplicate(browsers))
            return

        targets = expand_all(self.registry)
        # One worker per target so no probe waits behind another.
        workers = max(self.config.max_workers, len(targets))
        collector = _ResultCollector(len(targets), partial(self._finish, callback))
        collector.finish_if_empty()

        with ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="browser-probe",
        ) as executor:
            for target in targets:
                future = executor.submit(strategy.probe, target)
                future.add_done_callback(partial(self._on_probe_done, collector, target))

    @staticmethod
    def _on_probe_done(collector: _ResultCollector, target: ProbeTarget, future: Future) -> None:
        try:
            outcome: ProbeOutcome = future.result()
        except Exception:
            LOGGER.exception("Probe for %s raised", target.command)
            collector.add([])
            return

        if not outcome.ok:
            LOGGER.debug("%s (%s): %s", target.name, target.command, outcome.error)
        collector.add(outcome.to_browsers(target))

    @staticmethod
    def _finish(callback: DetectCallback, results: List[DetectedBrowser]) -> None:
        LOGGER.info("Detected %d browsers", len(results))
        try:
            callback(results)
        except Exception:
            LOGGER.exception("Detection callback raised")


def detect(config: Optional[DetectionConfig] = None) -> List[DetectedBrowser]:
    """Detect browsers installed on this host."""
    return BrowserDetector(config=config).detect()


def detect_async(callback: DetectCallback, config: Optional[DetectionConfig] = None) -> threading.Thread:
    """Detect browsers in the background, passing the result list to *callback*."""
    return BrowserDetector(config=config).detect_async(callback)
