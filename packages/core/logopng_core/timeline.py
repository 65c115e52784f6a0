"""Compressed history payloads built from stored snapshots."""

from __future__ import annotations

import base64
import gzip
import json
from dataclasses import dataclass
from datetime import timezone
from typing import Any, Iterable, Protocol

from .models import TimelineEntry

# Fastest deflate setting; history payloads favour throughput over ratio.
GZIP_LEVEL = 1


class SnapshotSource(Protocol):
    def query_snapshots(self, limit: int | None = None) -> list[TimelineEntry]: ...


@dataclass(frozen=True)
class HistoryPayload:
    body: bytes
    content_type: str = "application/json"
    content_encoding: str = "gzip"

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": self.content_type,
            "Content-Encoding": self.content_encoding,
        }

    def decode(self) -> list[dict[str, Any]]:
        return json.loads(gzip.decompress(self.body).decode("utf-8"))


def format_time(entry: TimelineEntry) -> str:
    return entry.captured_at.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def encode_history(entries: Iterable[TimelineEntry]) -> HistoryPayload:
    data = [
        {
            "time": format_time(entry),
            "logo": base64.b64encode(entry.image).decode("ascii"),
        }
        for entry in entries
    ]
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return HistoryPayload(body=gzip.compress(raw, compresslevel=GZIP_LEVEL))


def query_history(store: SnapshotSource, limit: int | None = None) -> HistoryPayload:
    """Return stored snapshots oldest first; ``limit`` keeps the oldest N rows."""
    if limit is not None and (isinstance(limit, bool) or int(limit) < 1):
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    return encode_history(store.query_snapshots(limit))
