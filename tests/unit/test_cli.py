import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from logopng_app.cli import build_parser


class CliTests(unittest.TestCase):
    def test_refresh_command(self):
        args = build_parser().parse_args(["refresh"])
        self.assertEqual(args.command, "refresh")

    def test_render_command(self):
        args = build_parser().parse_args(["render", "--size", "4", "--character", "2", "--crop", "--out", "x.png"])
        self.assertEqual(args.command, "render")
        self.assertEqual((args.size, args.character, args.crop, args.out), (4, 2, True, "x.png"))

    def test_render_defaults(self):
        args = build_parser().parse_args(["render"])
        self.assertIsNone(args.size)
        self.assertIsNone(args.character)
        self.assertFalse(args.crop)

    def test_render_rejects_bad_character(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["render", "--character", "7"])

    def test_history_command(self):
        args = build_parser().parse_args(["--database", "t.db", "history", "--limit", "2", "--decode"])
        self.assertEqual(args.database, "t.db")
        self.assertEqual(args.limit, 2)
        self.assertTrue(args.decode)

    def test_history_rejects_zero_limit(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["history", "--limit", "0"])


if __name__ == "__main__":
    unittest.main()
