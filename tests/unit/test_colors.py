import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "markup"))

from styledconsole_markup.colors import ChannelOutOfRangeError, ColorValue, decode_color, from_channels, from_hex, to_hex


class ColorValueTests(unittest.TestCase):
    def test_channel_bounds(self):
        for bad in (256, -1):
            with self.assertRaises(ChannelOutOfRangeError):
                from_channels(r=bad)
            with self.assertRaises(ChannelOutOfRangeError):
                from_channels(a=bad)
        self.assertEqual(from_channels(0, 0, 0, 0).as_tuple(), (0, 0, 0, 0))
        self.assertEqual(from_channels(255, 255, 255, 255).as_tuple(), (255, 255, 255, 255))

    def test_out_of_range_is_value_error(self):
        with self.assertRaises(ValueError) as ctx:
            ColorValue(0, 300, 0)
        self.assertEqual(ctx.exception.channel, "g")

    def test_defaults(self):
        self.assertEqual(from_channels(), ColorValue(0, 0, 0, 255))

    def test_hex_decoding(self):
        self.assertEqual(from_hex("ff0000"), ColorValue(255, 0, 0, 255))
        self.assertEqual(from_hex("0A0f1D", a=10), ColorValue(10, 15, 29, 10))
        self.assertEqual(from_hex("#8CFFB5"), ColorValue(140, 255, 181))

    def test_bad_hex(self):
        for code in ("ff00", "gg0000", "ff00001"):
            with self.assertRaises(ValueError):
                from_hex(code)

    def test_hex_decimal_agree_on_every_channel_value(self):
        for value in range(256):
            self.assertEqual(from_hex(to_hex(value, 0, 0)), from_channels(value, 0, 0))
            self.assertEqual(from_hex(to_hex(0, value, 0)), from_channels(0, value, 0))
            self.assertEqual(from_hex(to_hex(0, 0, value)), from_channels(0, 0, value))

    def test_to_hex(self):
        self.assertEqual(ColorValue(255, 128, 1).to_hex(), "FF8001")


class DecodeColorTests(unittest.TestCase):
    def test_absent(self):
        self.assertIsNone(decode_color(None))
        self.assertIsNone(decode_color(""))
        self.assertIsNone(decode_color("red"))
        self.assertIsNone(decode_color("1,2"))

    def test_decimal_triple_and_alpha(self):
        self.assertEqual(decode_color("255,0,0"), ColorValue(255, 0, 0, 255))
        self.assertEqual(decode_color(" 1, 2 ,3, 4 "), ColorValue(1, 2, 3, 4))

    def test_hex_with_alpha(self):
        self.assertEqual(decode_color("00ff00"), ColorValue(0, 255, 0))
        self.assertEqual(decode_color("00FF00,128"), ColorValue(0, 255, 0, 128))

    def test_bad_channel_falls_back(self):
        self.assertEqual(decode_color("300,20,x"), ColorValue(0, 20, 0, 255))
        self.assertEqual(decode_color("1,2,3,999"), ColorValue(1, 2, 3, 255))
        self.assertEqual(decode_color("abcdef,-4"), ColorValue(171, 205, 239, 255))

    def test_hex_takes_precedence_over_decimal_tokens(self):
        self.assertEqual(decode_color("ff0000,1,2"), ColorValue(255, 0, 0, 1))
        self.assertEqual(decode_color("ff0000,7,8,9"), ColorValue(255, 0, 0, 7))


if __name__ == "__main__":
    unittest.main()
