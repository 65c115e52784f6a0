"""Fetch, change detection, render, broadcast and persist cycle."""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Any, Protocol

from logopng_renderer import LogoDescription, RenderOptions, render_png

from .cache import LogoCache
from .errors import StoreError
from .logging_setup import get_logger
from .models import CycleResult, CycleState, PersistOutcome


class DescriptionSource(Protocol):
    def fetch_current_description(self) -> LogoDescription: ...


class Broadcaster(Protocol):
    def broadcast(self, png: bytes) -> Any: ...


class SnapshotSink(Protocol):
    def insert_snapshot(self, png: bytes) -> Any: ...

    def latest_image(self) -> bytes | None: ...


class UpdatePipeline:
    """One refresh cycle per ``run_cycle`` call.

    Only the cache comparison and swap take a lock; fetching, rendering,
    broadcasting and persisting all happen outside it. A render failure after
    the swap propagates without reverting the cache, the next changed fetch
    produces a fresh artifact.
    """

    def __init__(
        self,
        fetcher: DescriptionSource,
        cache: LogoCache,
        broadcaster: Broadcaster | None = None,
        store: SnapshotSink | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache
        self.broadcaster = broadcaster
        self.store = store
        self._logger = get_logger("pipeline")
        self._events_lock = threading.Lock()
        self._events: list[dict[str, Any]] = []
        self._cycles = 0

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        with self._events_lock:
            return self._events[-limit:]

    def _log_event(self, result: CycleResult, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "state": result.state.value,
        }
        row.update(fields)
        result.events.append(event)
        with self._events_lock:
            self._events.append(row)
            if len(self._events) > 1000:
                self._events = self._events[-1000:]

    def run_cycle(self) -> CycleResult:
        with self._events_lock:
            self._cycles += 1
            cycle = self._cycles
        start = time.perf_counter()
        result = CycleResult()

        try:
            result.state = CycleState.FETCHING
            candidate = self.fetcher.fetch_current_description()

            result.state = CycleState.COMPARING
            if not self.cache.swap_if_changed(candidate):
                result.state = CycleState.UNCHANGED
                self._log_event(result, "unchanged")
                return result

            result.changed = True
            result.state = CycleState.UPDATING
            self._log_event(result, "cache_swapped", characters=len(candidate))
            self._logger.info("logo changed", extra={"event": "logo_changed", "cycle": cycle})

            result.state = CycleState.RENDERING
            result.png = render_png(candidate, RenderOptions())
            self._log_event(result, "rendered", bytes=len(result.png))
        except Exception as exc:
            failed_in = result.state
            result.state = CycleState.FAILED
            self._log_event(result, "cycle_failed", failed_in=failed_in.value, error=str(exc))
            self._logger.warning(
                f"refresh cycle failed while {failed_in.value.lower()}: {exc}",
                extra={"event": "cycle_failed", "cycle": cycle},
            )
            raise
        finally:
            result.duration_s = time.perf_counter() - start

        result.state = CycleState.BROADCASTING
        self._broadcast(result, cycle)

        result.state = CycleState.PERSISTING
        self._persist(result, cycle)

        result.state = CycleState.DONE
        result.duration_s = time.perf_counter() - start
        return result

    def _broadcast(self, result: CycleResult, cycle: int) -> None:
        if self.broadcaster is None:
            return
        try:
            reached = self.broadcaster.broadcast(result.png)
        except Exception as exc:
            result.broadcast_error = str(exc)
            self._log_event(result, "broadcast_failed", error=str(exc))
            self._logger.exception("live broadcast failed", extra={"event": "broadcast_failed", "cycle": cycle})
            return
        result.subscribers_notified = int(reached or 0)
        self._log_event(result, "broadcast", subscribers=result.subscribers_notified)

    def _persist(self, result: CycleResult, cycle: int) -> None:
        if self.store is None:
            return
        result.persist = self._insert(result.png)
        if result.persist.skipped:
            self._log_event(result, "persist_skipped", reason="matches latest snapshot")
        elif result.persist.ok:
            self._log_event(result, "persisted")
        else:
            self._log_event(result, "persist_failed", error=result.persist.error)
            self._logger.error(
                f"error saving logo to store: {result.persist.error}",
                extra={"event": "persist_failed", "cycle": cycle},
            )

    def _insert(self, png: bytes) -> PersistOutcome:
        try:
            # A fresh process starts with an empty cache; don't store the same frame twice.
            if self.store.latest_image() == png:
                return PersistOutcome(ok=True, skipped=True)
            self.store.insert_snapshot(png)
        except StoreError as exc:
            return PersistOutcome(ok=False, error=str(exc))
        except Exception as exc:
            return PersistOutcome(ok=False, error=f"{type(exc).__name__}: {exc}")
        return PersistOutcome(ok=True)
