"""Shared cache of the last fetched logo description."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from logopng_renderer import LogoDescription


class ReadWriteLock:
    """Many concurrent readers or a single writer.

    Waiting writers take priority over new readers so a steady stream of
    render requests cannot starve a refresh.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class LogoCache:
    def __init__(self, initial: LogoDescription | None = None) -> None:
        self._lock = ReadWriteLock()
        self._value = initial if initial is not None else LogoDescription.empty()

    def read_snapshot(self) -> LogoDescription:
        # Descriptions are immutable, handing out the reference is a consistent snapshot.
        with self._lock.read():
            return self._value

    def swap_if_changed(self, candidate: LogoDescription) -> bool:
        with self._lock.read():
            changed = candidate != self._value
        if not changed:
            return False

        # Separate critical section: a concurrent swap may land in between, last write wins.
        with self._lock.write():
            self._value = candidate
        return True
