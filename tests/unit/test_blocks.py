import sys
import unittest
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "display_protocol"))

from termgreet_renderer.blocks import grid_to_lines, render_blocks, validate_block_config
from termgreet_renderer.errors import InvalidRenderConfig
from termgreet_renderer.models import BlockRenderConfig, ColorMode, PixelBuffer, RenderGeometry, SamplingMethod


def _solid(rgba, width=1, height=1):
    return PixelBuffer(width=width, height=height, data=bytes(rgba) * (width * height), channels=4)


def _gray_gradient(width, height=1):
    row = np.linspace(0, 255, width).round().astype(np.uint8)
    return PixelBuffer(width=width, height=height, data=np.tile(row, height).tobytes(), channels=1)


ONE_CELL = RenderGeometry(columns=1, rows=1, pixel_width=10, pixel_height=20)


class BlockRendererTests(unittest.TestCase):
    def test_white_pixel_renders_full_block(self):
        cfg = BlockRenderConfig(
            block_style="custom",
            custom_blocks=("█", "▓", "▒", "░", " "),
            brightness_thresholds=(0.8, 0.6, 0.3, 0.1),
        )
        grid = render_blocks(_solid((255, 255, 255, 255)), ONE_CELL, cfg)
        self.assertEqual(grid.cells[0].glyph, "█")
        self.assertEqual(grid_to_lines(grid), ["\x1b[38;2;255;255;255m█\x1b[0m"])

    def test_monochrome_has_no_escapes(self):
        grid = render_blocks(_solid((255, 255, 255, 255)), ONE_CELL, BlockRenderConfig(color_mode=ColorMode.MONOCHROME))
        self.assertEqual(grid_to_lines(grid), ["█"])

    def test_black_pixel_is_blank(self):
        grid = render_blocks(_solid((0, 0, 0, 255)), ONE_CELL, BlockRenderConfig())
        self.assertEqual(grid_to_lines(grid), [" "])

    def test_transparent_pixel_is_blank(self):
        grid = render_blocks(_solid((255, 255, 255, 0)), ONE_CELL, BlockRenderConfig())
        self.assertEqual(grid.cells[0].glyph, " ")

    def test_same_color_run_emits_one_escape(self):
        geo = RenderGeometry(columns=3, rows=1, pixel_width=30, pixel_height=20)
        grid = render_blocks(_solid((255, 255, 255, 255), width=3), geo, BlockRenderConfig())
        self.assertEqual(grid_to_lines(grid), ["\x1b[38;2;255;255;255m███\x1b[0m"])

    def test_glyph_choice_is_monotonic_in_luminance(self):
        ramp = validate_block_config(BlockRenderConfig())
        slots = [ramp.slot_for(v) for v in np.linspace(0.0, 1.0, 201)]
        self.assertEqual(slots, sorted(slots, reverse=True))
        self.assertEqual(ramp.glyph(slots[0]), " ")
        self.assertEqual(ramp.glyph(slots[-1]), "█")

    def test_thresholds_sorted_descending(self):
        ramp = validate_block_config(BlockRenderConfig(brightness_thresholds=(0.1, 0.8, 0.3, 0.6)))
        self.assertEqual(ramp.thresholds, (0.8, 0.6, 0.3, 0.1))

    def test_unknown_style_uses_default_ramp(self):
        ramp = validate_block_config(BlockRenderConfig(block_style="sparkles"))
        self.assertEqual(ramp.glyphs[0], "█")

    def test_ascii_and_braille_styles(self):
        self.assertEqual(validate_block_config(BlockRenderConfig(block_style="ascii")).glyphs[0], "#")
        self.assertEqual(validate_block_config(BlockRenderConfig(block_style="braille")).glyphs[0], "⣿")

    def test_invalid_configs_fail(self):
        with self.assertRaises(InvalidRenderConfig):
            validate_block_config(BlockRenderConfig(block_style="custom", custom_blocks=()))
        with self.assertRaises(InvalidRenderConfig):
            validate_block_config(BlockRenderConfig(brightness_thresholds=()))
        with self.assertRaises(InvalidRenderConfig):
            validate_block_config(BlockRenderConfig(brightness_thresholds=(1.5, 0.2)))
        with self.assertRaises(InvalidRenderConfig):
            render_blocks(_solid((1, 2, 3, 255)), ONE_CELL, BlockRenderConfig(brightness_thresholds=(-0.1,)))

    def test_wrongly_typed_ramp_values_fail(self):
        for cfg in (
            BlockRenderConfig(brightness_thresholds=("high", 0.2)),
            BlockRenderConfig(brightness_thresholds=(True, 0.2)),
            BlockRenderConfig(brightness_thresholds=0.5),
            BlockRenderConfig(block_style="custom", custom_blocks=("#", 3)),
            BlockRenderConfig(block_style="custom", custom_blocks="#"),
        ):
            with self.assertRaises(InvalidRenderConfig):
                validate_block_config(cfg)

    def test_short_ramp_reuses_last_glyph(self):
        cfg = BlockRenderConfig(block_style="custom", custom_blocks=("#",), brightness_thresholds=(0.8, 0.5))
        grid = render_blocks(_solid((0, 0, 0, 255)), ONE_CELL, cfg)
        self.assertEqual(grid.cells[0].glyph, "#")

    def test_contrast_and_boost(self):
        gray = _solid((150, 150, 150, 255))
        self.assertEqual(render_blocks(gray, ONE_CELL, BlockRenderConfig()).cells[0].glyph, "▒")
        self.assertEqual(render_blocks(gray, ONE_CELL, BlockRenderConfig(contrast=2.0)).cells[0].glyph, "▓")
        boosted = render_blocks(_solid((0, 0, 0, 255)), ONE_CELL, BlockRenderConfig(brightness_boost=0.5))
        self.assertEqual(boosted.cells[0].glyph, "▒")

    def test_average_and_dominant_sampling(self):
        red, blue = (255, 0, 0), (0, 0, 255)
        pixels = PixelBuffer(width=2, height=2, data=bytes([*red, *red, *red, *blue]), channels=3)
        average = render_blocks(pixels, ONE_CELL, BlockRenderConfig())
        self.assertEqual(average.cells[0].color, (191, 0, 64))
        dominant = render_blocks(pixels, ONE_CELL, BlockRenderConfig(sampling_method=SamplingMethod.DOMINANT))
        self.assertEqual(dominant.cells[0].color, (255, 0, 0))

    def test_weighted_sampling_favours_bright_pixels(self):
        pixels = PixelBuffer(width=2, height=1, data=bytes([255, 0]), channels=1)
        average = render_blocks(pixels, ONE_CELL, BlockRenderConfig())
        weighted = render_blocks(pixels, ONE_CELL, BlockRenderConfig(sampling_method=SamplingMethod.WEIGHTED))
        self.assertEqual(average.cells[0].glyph, "▒")
        self.assertEqual(weighted.cells[0].color, (255, 255, 255))
        self.assertEqual(weighted.cells[0].glyph, "█")

    def test_weighted_sampling_all_dark(self):
        pixels = PixelBuffer(width=2, height=1, data=bytes([0, 0]), channels=1)
        grid = render_blocks(pixels, ONE_CELL, BlockRenderConfig(sampling_method=SamplingMethod.WEIGHTED))
        self.assertEqual(grid.cells[0].color, (0, 0, 0))

    def test_palette_modes(self):
        red = _solid((255, 0, 0, 255))
        grid256 = render_blocks(red, ONE_CELL, BlockRenderConfig(color_mode=ColorMode.COLOR256))
        self.assertEqual(grid256.cells[0].color, 9)
        self.assertEqual(grid_to_lines(grid256)[0], "\x1b[38;5;9m░\x1b[0m")
        dark_red = _solid((205, 0, 0, 255))
        grid16 = render_blocks(dark_red, ONE_CELL, BlockRenderConfig(color_mode=ColorMode.COLOR16))
        self.assertEqual(grid16.cells[0].color, 1)
        self.assertTrue(grid_to_lines(grid16)[0].startswith("\x1b[31m"))

    def test_one_row_dithering_drift_is_bounded(self):
        for width in (16, 64, 255, 512):
            geo = RenderGeometry(columns=width, rows=1, pixel_width=width, pixel_height=1)
            grid = render_blocks(_gray_gradient(width), geo, BlockRenderConfig(enable_dithering=True))
            drift = sum(cell.brightness - cell.rendered for cell in grid.cells)
            self.assertLessEqual(abs(drift), 1.0, width)

    def test_grid_dithering_drift_is_bounded(self):
        geo = RenderGeometry(columns=48, rows=12, pixel_width=48, pixel_height=12)
        grid = render_blocks(_gray_gradient(48, 12), geo, BlockRenderConfig(enable_dithering=True))
        drift = sum(cell.brightness - cell.rendered for cell in grid.cells)
        self.assertLessEqual(abs(drift), 1.0)

    def test_dithering_changes_flat_midtone(self):
        geo = RenderGeometry(columns=8, rows=1, pixel_width=8, pixel_height=1)
        flat = _solid((140, 140, 140, 255), width=8)
        plain = render_blocks(flat, geo, BlockRenderConfig())
        dithered = render_blocks(flat, geo, BlockRenderConfig(enable_dithering=True))
        self.assertEqual({cell.glyph for cell in plain.cells}, {"▒"})
        self.assertEqual({cell.glyph for cell in dithered.cells}, {"▒", "▓"})
        self.assertGreater(len({cell.glyph for cell in dithered.cells}), 1)

    def test_grid_matches_geometry(self):
        geo = RenderGeometry(columns=7, rows=3, pixel_width=70, pixel_height=60)
        grid = render_blocks(_gray_gradient(20, 9), geo, BlockRenderConfig())
        self.assertEqual(len(grid.cells), 21)
        self.assertEqual(len(grid_to_lines(grid)), 3)


if __name__ == "__main__":
    unittest.main()
