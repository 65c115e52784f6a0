import base64
import gzip
import json
import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from logopng_core.errors import StoreError
from logopng_core.models import TimelineEntry
from logopng_core.store import TimelineStore
from logopng_core.timeline import encode_history, query_history


class _BrokenStore:
    def query_snapshots(self, limit=None):
        raise StoreError("connection refused")


class TimelineQueryTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = TimelineStore(Path(self._tmp.name) / "timeline.db")
        self.store.create_schema_if_absent()
        self.base = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        self.images = [b"\x89PNG-" + bytes([i]) * 10 for i in range(5)]
        for i, png in enumerate(self.images):
            self.store.insert_snapshot(png, captured_at=self.base + timedelta(minutes=i))

    def tearDown(self):
        self._tmp.cleanup()

    def test_limit_returns_oldest_entries(self):
        payload = query_history(self.store, limit=2)
        data = json.loads(gzip.decompress(payload.body))
        self.assertEqual(len(data), 2)
        self.assertEqual([base64.b64decode(d["logo"]) for d in data], self.images[:2])
        self.assertEqual(data[0]["time"], "2024-03-01T12:00:00Z")

    def test_round_trip_preserves_png_bytes(self):
        payload = query_history(self.store)
        data = payload.decode()
        self.assertEqual(len(data), 5)
        self.assertEqual([base64.b64decode(d["logo"]) for d in data], self.images)

    def test_payload_metadata(self):
        payload = query_history(self.store)
        self.assertEqual(payload.headers(), {"Content-Type": "application/json", "Content-Encoding": "gzip"})
        self.assertEqual(payload.body[:2], b"\x1f\x8b")

    def test_invalid_limit(self):
        for bad in (0, -3, True):
            with self.assertRaises(ValueError):
                query_history(self.store, limit=bad)

    def test_store_errors_propagate(self):
        with self.assertRaises(StoreError):
            query_history(_BrokenStore())

    def test_empty_history_is_empty_array(self):
        self.assertEqual(encode_history([]).decode(), [])

    def test_time_keeps_microseconds(self):
        entry = TimelineEntry(captured_at=datetime(2024, 1, 2, 3, 4, 5, 600, tzinfo=timezone.utc), image=b"x")
        (row,) = encode_history([entry]).decode()
        self.assertEqual(row["time"], "2024-01-02T03:04:05.000600Z")


if __name__ == "__main__":
    unittest.main()
