"""Typed core models shared by the pipeline, store and history query."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class CycleState(str, Enum):
    FETCHING = "Fetching"
    COMPARING = "Comparing"
    UNCHANGED = "Unchanged"
    UPDATING = "Updating"
    RENDERING = "Rendering"
    BROADCASTING = "Broadcasting"
    PERSISTING = "Persisting"
    DONE = "Done"
    FAILED = "Failed"


@dataclass(frozen=True)
class TimelineEntry:
    captured_at: datetime
    image: bytes


@dataclass(frozen=True)
class PersistOutcome:
    ok: bool
    error: str | None = None
    skipped: bool = False


@dataclass
class CycleResult:
    changed: bool = False
    state: CycleState = CycleState.FETCHING
    png: bytes | None = None
    subscribers_notified: int = 0
    broadcast_error: str | None = None
    persist: PersistOutcome | None = None
    duration_s: float = 0.0
    events: list[str] = field(default_factory=list)
