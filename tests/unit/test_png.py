import sys
import unittest
from io import BytesIO
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from logopng_renderer import EncodeError, LogoDescription, RenderOptions, encode_png, render_png


class PngTests(unittest.TestCase):
    def test_encode_round_trips_pixels(self):
        rgba = bytes([255, 0, 0, 255, 0, 0, 0, 0])
        png = encode_png(2, 1, rgba)
        self.assertTrue(png.startswith(b"\x89PNG\r\n\x1a\n"))
        img = Image.open(BytesIO(png))
        self.assertEqual(img.mode, "RGBA")
        self.assertEqual(img.size, (2, 1))
        self.assertEqual(img.getpixel((0, 0)), (255, 0, 0, 255))
        self.assertEqual(img.getpixel((1, 0)), (0, 0, 0, 0))

    def test_short_buffer_raises_encode_error(self):
        with self.assertRaises(EncodeError):
            encode_png(4, 4, b"\x00" * 10)

    def test_render_png_uses_options(self):
        logo = LogoDescription(characters=((tuple(["#102030"] * 64),) * 4,))
        png = render_png(logo, RenderOptions(pixel_size=2, character=0))
        img = Image.open(BytesIO(png))
        self.assertEqual(img.size, (16, 64))
        self.assertEqual(img.getpixel((1, 1)), (16, 32, 48, 255))


if __name__ == "__main__":
    unittest.main()
