import sys
import threading
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "markup"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from styledconsole_core.dispatch import UiDispatcher


class DispatcherTests(unittest.TestCase):
    def test_fifo_per_poster(self):
        dispatcher = UiDispatcher()
        seen = []
        for i in range(5):
            dispatcher.post(seen.append, i)
        self.assertEqual(seen, [])
        self.assertEqual(dispatcher.drain(), 5)
        self.assertEqual(seen, [0, 1, 2, 3, 4])

    def test_runs_on_draining_thread(self):
        dispatcher = UiDispatcher()
        threads = []
        poster = threading.Thread(target=lambda: dispatcher.post(lambda: threads.append(threading.current_thread())))
        poster.start()
        poster.join()
        dispatcher.drain()
        self.assertEqual(threads, [threading.current_thread()])

    def test_failing_callback_does_not_stop_drain(self):
        dispatcher = UiDispatcher()
        seen = []
        dispatcher.post(lambda: 1 / 0)
        dispatcher.post(seen.append, "ok")
        with self.assertLogs("styledconsole.console", level="ERROR"):
            self.assertEqual(dispatcher.drain(), 2)
        self.assertEqual(seen, ["ok"])

    def test_drain_limit(self):
        dispatcher = UiDispatcher()
        for i in range(3):
            dispatcher.post(lambda: None)
        self.assertEqual(dispatcher.drain(limit=2), 2)
        self.assertEqual(dispatcher.pending(), 1)


if __name__ == "__main__":
    unittest.main()
