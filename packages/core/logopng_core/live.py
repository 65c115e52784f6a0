"""In-process fan-out of freshly rendered logos to live viewers."""

from __future__ import annotations

import queue
import threading
import uuid

from .logging_setup import get_logger


class Subscription:
    def __init__(self, queue_size: int) -> None:
        self.id = uuid.uuid4().hex
        self._queue: queue.Queue[bytes] = queue.Queue(maxsize=queue_size)

    def offer(self, png: bytes) -> bool:
        """Queue a frame, evicting the oldest one when full. Returns False if a frame was dropped."""
        dropped = False
        while True:
            try:
                self._queue.put_nowait(png)
                return not dropped
            except queue.Full:
                try:
                    self._queue.get_nowait()
                    dropped = True
                except queue.Empty:
                    pass

    def get(self, timeout: float | None = None) -> bytes | None:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def pending(self) -> int:
        return self._queue.qsize()


class LiveBroadcaster:
    def __init__(self, queue_size: int = 8) -> None:
        self.queue_size = queue_size
        self._lock = threading.Lock()
        self._subscribers: dict[str, Subscription] = {}
        self._closed = False
        self._logger = get_logger("live")

    def subscribe(self) -> Subscription:
        with self._lock:
            if self._closed:
                raise RuntimeError("broadcaster is closed")
            sub = Subscription(self.queue_size)
            self._subscribers[sub.id] = sub
        self._logger.info("viewer subscribed", extra={"event": "live_subscribe"})
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            self._subscribers.pop(sub.id, None)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def broadcast(self, png: bytes) -> int:
        with self._lock:
            if self._closed:
                raise RuntimeError("broadcaster is closed")
            targets = list(self._subscribers.values())

        for sub in targets:
            if not sub.offer(png):
                self._logger.warning(
                    f"viewer {sub.id} lagging, dropped oldest frame",
                    extra={"event": "live_frame_dropped"},
                )
        return len(targets)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._subscribers.clear()
