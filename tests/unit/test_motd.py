import random
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "display_protocol"))

from termgreet_core.motd import MotdConfig, format_motd, load_motd, pick_message


class MotdTests(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(load_motd(Path(tmp) / "motd.toml"), MotdConfig())

    def test_load_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "motd.toml"
            path.write_text('random = false\ncolor = "yellow"\nmessages = ["hi", "bye"]\n', encoding="utf-8")
            cfg = load_motd(path)
            self.assertEqual(cfg.messages, ["hi", "bye"])
            self.assertFalse(cfg.random)
            self.assertEqual(format_motd(cfg), "\x1b[33mhi\x1b[0m")

    def test_pick_first_or_random(self):
        cfg = MotdConfig(messages=["a", "b", "c"], random=False)
        self.assertEqual(pick_message(cfg), "a")
        cfg.random = True
        self.assertIn(pick_message(cfg, random.Random(4)), ["a", "b", "c"])

    def test_disabled_or_empty(self):
        self.assertIsNone(pick_message(MotdConfig(enabled=False)))
        self.assertIsNone(format_motd(MotdConfig(messages=[])))


if __name__ == "__main__":
    unittest.main()
