import sys
import threading
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from logopng_core.errors import FetchError
from logopng_core.scheduler import RefreshLoop


class _Pipeline:
    def __init__(self, fail_first: int = 0):
        self.calls = 0
        self.fail_first = fail_first
        self.ran = threading.Event()

    def run_cycle(self):
        self.calls += 1
        if self.calls >= 2:
            self.ran.set()
        if self.calls <= self.fail_first:
            raise FetchError("offline")


class RefreshLoopTests(unittest.TestCase):
    def test_fetch_failure_is_logged_and_loop_continues(self):
        loop = RefreshLoop(_Pipeline(fail_first=1), interval_s=60)
        with self.assertLogs("logopng.refresh", level="WARNING"):
            self.assertFalse(loop.run_once())
        self.assertEqual(loop.last_error, "offline")
        self.assertTrue(loop.run_once())
        self.assertIsNone(loop.last_error)
        self.assertEqual((loop.cycles, loop.failures), (2, 1))

    def test_trigger_wakes_thread(self):
        pipeline = _Pipeline()
        loop = RefreshLoop(pipeline, interval_s=60)
        loop.start()
        try:
            self.assertTrue(loop.running)
            loop.trigger()
            self.assertTrue(pipeline.ran.wait(5))
        finally:
            loop.stop()
        self.assertFalse(loop.running)


if __name__ == "__main__":
    unittest.main()
