import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "display_protocol"))

from termgreet_core.config import AppConfig, ColorsConfig
from termgreet_core.info_lines import build_header, build_info_lines, enabled_modules

FACTS = {"os": "Linux", "kernel": "6.1", "cpu": "x86_64 (8 cores)", "memory": "Unknown", "locale": "C"}


def _plain_config():
    cfg = AppConfig()
    cfg.general.colors = ColorsConfig(title="", module="", info="", separator="")
    return cfg


class InfoLinesTests(unittest.TestCase):
    def test_aligned_plain_lines(self):
        lines = build_info_lines(FACTS, _plain_config())
        self.assertEqual(lines, ["OS     -> Linux", "Kernel -> 6.1", "CPU    -> x86_64 (8 cores)"])

    def test_disabled_and_unknown_modules_skipped(self):
        cfg = _plain_config()
        cfg.modules.kernel = False
        lines = build_info_lines(FACTS, cfg)
        self.assertFalse(any(line.startswith("Kernel") for line in lines))
        self.assertFalse(any("Memory" in line for line in lines))
        self.assertFalse(any("Locale" in line for line in lines))

    def test_display_name_override(self):
        cfg = _plain_config()
        cfg.modules.display_names = {"os": "System"}
        self.assertEqual(build_info_lines({"os": "Linux"}, cfg), ["System -> Linux"])

    def test_unaligned_separator(self):
        cfg = _plain_config()
        cfg.general.separator.align_separator = False
        cfg.general.separator.symbol = ":"
        cfg.general.separator.space_before = 0
        self.assertEqual(build_info_lines({"os": "Linux", "kernel": "6.1"}, cfg), ["OS: Linux", "Kernel: 6.1"])

    def test_multi_line_value_indented(self):
        lines = build_info_lines({"os": "Linux", "disk": "/ 10GB\n/home 20GB"}, _plain_config())
        self.assertEqual(lines, ["OS   -> Linux", "Disk -> / 10GB", "        /home 20GB"])

    def test_desktop_modules_follow_module_order(self):
        lines = build_info_lines({"gpu": "RTX 4070", "de": "KDE", "wm": "KWin", "os_age": "3 days"}, _plain_config())
        self.assertEqual(lines, ["OS Age -> 3 days", "DE     -> KDE", "WM     -> KWin", "GPU    -> RTX 4070"])

    def test_enabled_modules(self):
        cfg = AppConfig()
        cfg.modules.theme = True
        keys = enabled_modules(cfg)
        self.assertLess(keys.index("theme"), keys.index("gpu"))
        self.assertNotIn("packages", keys)

    def test_colored_lines(self):
        line = build_info_lines({"os": "Linux"}, AppConfig())[0]
        self.assertTrue(line.startswith("\x1b[96mOS\x1b[0m\x1b[94m -> \x1b[0m\x1b[97mLinux"))

    def test_header(self):
        self.assertEqual(build_header(AppConfig()), ("\x1b[96mSystem Information\x1b[0m", ""))
        cfg = AppConfig()
        cfg.general.show_title = False
        self.assertEqual(build_header(cfg), ())


if __name__ == "__main__":
    unittest.main()
