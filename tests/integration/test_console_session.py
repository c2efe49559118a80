import sys
import threading
import time
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "markup"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from styledconsole_core import InputCaptureBridge, Key, KeyEvent, StyledConsole, UiDispatcher
from styledconsole_markup import FontFamilyTable, MarkupParser


class FakeWindow:
    """Stands in for the UI widgets; only ever touched from the draining thread."""

    def __init__(self):
        self.owner = None
        self.fields = {}

    def _check_thread(self):
        if self.owner is None:
            self.owner = threading.current_thread()
        assert self.owner is threading.current_thread()

    def add_field(self, handle, position):
        self._check_thread()
        self.fields[handle] = {"position": position, "text": ""}

    def append_text(self, handle, chunk):
        self._check_thread()
        self.fields[handle]["text"] += chunk

    def update_input(self, handle, text, cursor):
        self._check_thread()
        self.fields[handle]["text"] = text


class PostingSink:
    def __init__(self, window, dispatcher):
        self.window = window
        self.dispatcher = dispatcher
        self.count = 0

    def create_field(self, position):
        self.count += 1
        self.dispatcher.post(self.window.add_field, self.count, position)
        return self.count

    def set_appearance(self, handle, text_color, bg_color, font):
        pass

    def append_text(self, handle, chunk):
        self.dispatcher.post(self.window.append_text, handle, chunk)

    def update_input(self, handle, text, cursor):
        self.dispatcher.post(self.window.update_input, handle, text, cursor)


class ConsoleSessionTests(unittest.TestCase):
    def test_script_thread_with_ui_loop(self):
        dispatcher = UiDispatcher()
        window = FakeWindow()
        sink = PostingSink(window, dispatcher)
        bridge = InputCaptureBridge(repaint=sink.update_input)
        console = StyledConsole(
            sink,
            parser=MarkupParser(families=FontFamilyTable.of(["Arial"])),
            capture=bridge,
            sleep=lambda _s: None,
        )
        result = {}

        def script():
            console.print("\\ln\\tb<ef: TimedReveal, 1>Hello/tb/ln\\ln\\tb<tc: 00ff00>Name? /tb/ln")
            result["name"] = console.read_line()
            console.print(f"Hi {result['name']}")

        worker = threading.Thread(target=script, daemon=True)
        worker.start()

        # UI loop: drain posted work, deliver keys once the session is armed.
        keys = [KeyEvent.character(c) for c in "Ada"] + [KeyEvent(Key.ENTER)]
        deadline = time.monotonic() + 10.0
        while (worker.is_alive() or dispatcher.pending()) and time.monotonic() < deadline:
            dispatcher.drain()
            if keys and bridge.wait_for_capture(timeout=0.01):
                bridge.handle_key(keys.pop(0))
        worker.join(5.0)
        dispatcher.drain()

        self.assertEqual(result["name"], "Ada")
        texts = [window.fields[h]["text"] for h in sorted(window.fields)]
        self.assertEqual(texts, ["Hello", "Name? ", "Ada", "Hi Ada"])


if __name__ == "__main__":
    unittest.main()
