"""Background thread that runs refresh cycles on a fixed interval."""

from __future__ import annotations

import threading

from logopng_renderer import RenderError

from .errors import FetchError
from .logging_setup import get_logger
from .pipeline import UpdatePipeline


class RefreshLoop:
    def __init__(self, pipeline: UpdatePipeline, interval_s: float = 5.0) -> None:
        self.pipeline = pipeline
        self.interval_s = interval_s
        self.cycles = 0
        self.failures = 0
        self.last_error: str | None = None
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._thread: threading.Thread | None = None
        self._logger = get_logger("refresh")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="logopng-refresh", daemon=True)
        self._thread.start()
        self._logger.info(f"refresh loop started every {self.interval_s}s", extra={"event": "refresh_started"})

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        self._wake.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self._logger.info("refresh loop stopped", extra={"event": "refresh_stopped"})

    def trigger(self) -> None:
        self._wake.set()

    def _run(self) -> None:
        while not self._stop.is_set():
            self.run_once()
            self._wake.wait(self.interval_s)
            self._wake.clear()

    def run_once(self) -> bool:
        """Run one cycle, logging expected failures. Returns True if it completed."""
        self.cycles += 1
        try:
            self.pipeline.run_cycle()
        except (FetchError, RenderError) as exc:
            # Retried on the next tick.
            self.failures += 1
            self.last_error = str(exc)
            self._logger.warning(f"refresh failed: {exc}", extra={"event": "refresh_failed"})
            return False
        self.last_error = None
        return True
