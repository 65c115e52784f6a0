import sqlite3
import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from logopng_core.errors import StoreError
from logopng_core.store import TimelineStore, format_timestamp, parse_timestamp


class TimelineStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = TimelineStore(Path(self._tmp.name) / "nested" / "timeline.db")
        self.store.create_schema_if_absent()

    def tearDown(self):
        self._tmp.cleanup()

    def test_schema_creation_is_idempotent(self):
        self.store.create_schema_if_absent()
        self.assertEqual(self.store.count(), 0)

    def test_insert_and_query_in_time_order(self):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.store.insert_snapshot(b"late", captured_at=base + timedelta(minutes=5))
        self.store.insert_snapshot(b"early", captured_at=base)
        self.store.insert_snapshot(b"middle", captured_at=base + timedelta(seconds=1))

        entries = self.store.query_snapshots()
        self.assertEqual([e.image for e in entries], [b"early", b"middle", b"late"])
        self.assertEqual(entries[0].captured_at, base)

    def test_latest_image_is_newest_by_time(self):
        self.assertIsNone(self.store.latest_image())
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.store.insert_snapshot(b"newest", captured_at=base + timedelta(minutes=5))
        self.store.insert_snapshot(b"oldest", captured_at=base)
        self.assertEqual(self.store.latest_image(), b"newest")

    def test_limit_keeps_oldest(self):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for i in range(5):
            self.store.insert_snapshot(bytes([i]), captured_at=base + timedelta(hours=i))
        entries = self.store.query_snapshots(limit=2)
        self.assertEqual([e.image for e in entries], [b"\x00", b"\x01"])

    def test_default_timestamp_is_now(self):
        before = datetime.now(timezone.utc)
        stamp = self.store.insert_snapshot(b"png")
        (entry,) = self.store.query_snapshots()
        self.assertGreaterEqual(entry.captured_at, before.replace(microsecond=0))
        self.assertEqual(entry.captured_at, stamp)

    def test_column_default_matches_parser(self):
        with sqlite3.connect(self.store.path) as conn:
            conn.execute("INSERT INTO timeline (image_png) VALUES (?)", (b"raw",))
        (entry,) = self.store.query_snapshots()
        self.assertEqual(entry.image, b"raw")
        self.assertEqual(entry.captured_at.tzinfo, timezone.utc)

    def test_duplicate_timestamp_raises_store_error(self):
        stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.store.insert_snapshot(b"a", captured_at=stamp)
        with self.assertRaises(StoreError):
            self.store.insert_snapshot(b"b", captured_at=stamp)

    def test_query_without_schema_raises_store_error(self):
        store = TimelineStore(Path(self._tmp.name) / "empty.db")
        with self.assertRaises(StoreError):
            store.query_snapshots()


class TimestampTests(unittest.TestCase):
    def test_naive_timestamps_are_utc(self):
        text = format_timestamp(datetime(2024, 5, 6, 7, 8, 9, 10))
        self.assertEqual(text, "2024-05-06T07:08:09.000010Z")
        self.assertEqual(parse_timestamp(text), datetime(2024, 5, 6, 7, 8, 9, 10, tzinfo=timezone.utc))

    def test_offsets_are_normalised(self):
        local = datetime(2024, 5, 6, 9, 0, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(format_timestamp(local), "2024-05-06T07:00:00.000000Z")


if __name__ == "__main__":
    unittest.main()
