import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from logopng_core.live import LiveBroadcaster


class LiveBroadcasterTests(unittest.TestCase):
    def test_broadcast_reaches_all_subscribers(self):
        live = LiveBroadcaster(queue_size=4)
        a, b = live.subscribe(), live.subscribe()
        self.assertEqual(live.broadcast(b"png-1"), 2)
        self.assertEqual(a.get(timeout=1), b"png-1")
        self.assertEqual(b.get(timeout=1), b"png-1")

    def test_unsubscribed_viewer_gets_nothing(self):
        live = LiveBroadcaster()
        sub = live.subscribe()
        live.unsubscribe(sub)
        self.assertEqual(live.broadcast(b"png"), 0)
        self.assertIsNone(sub.get(timeout=0.01))

    def test_slow_viewer_drops_oldest(self):
        live = LiveBroadcaster(queue_size=2)
        sub = live.subscribe()
        live.broadcast(b"1")
        live.broadcast(b"2")
        with self.assertLogs("logopng.live", level="WARNING"):
            live.broadcast(b"3")
        self.assertEqual(sub.pending(), 2)
        self.assertEqual(sub.get(timeout=1), b"2")
        self.assertEqual(sub.get(timeout=1), b"3")

    def test_closed_broadcaster_rejects(self):
        live = LiveBroadcaster()
        live.close()
        with self.assertRaises(RuntimeError):
            live.broadcast(b"png")
        self.assertEqual(live.subscriber_count, 0)


if __name__ == "__main__":
    unittest.main()
