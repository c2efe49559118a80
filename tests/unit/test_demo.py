import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "desktop"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "markup"))

from styledconsole_app.demo import demo
from styledconsole_markup import FontStyle, Line


class ScriptedConsole:
    def __init__(self, reply):
        self.reply = reply
        self.printed = []

    def print(self, content=None):
        self.printed.append(content)

    def read_line(self):
        return self.reply


class DemoTests(unittest.TestCase):
    def test_name_is_echoed_verbatim(self):
        reply = "a/tb\\tb<tc: ff0000>b\\ln"
        console = ScriptedConsole(reply)
        demo(console)

        echo = console.printed[-1]
        self.assertIsInstance(echo, Line)
        self.assertEqual(len(echo), 2)
        self.assertEqual(echo.blocks[1].text, reply)
        self.assertEqual(echo.blocks[1].font.style, FontStyle.BOLD)
        self.assertEqual(echo.text, "Nice to meet you, " + reply)


if __name__ == "__main__":
    unittest.main()
