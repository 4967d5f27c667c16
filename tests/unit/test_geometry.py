import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "display_protocol"))

from termgreet_renderer.errors import InvalidGeometry
from termgreet_renderer.geometry import plan_geometry
from termgreet_renderer.models import GeometryRequest


class GeometryTests(unittest.TestCase):
    def test_explicit_override_ignores_aspect(self):
        geo = plan_geometry(100, 50, GeometryRequest(width=40, height=20, cell_width=10, cell_height=20))
        self.assertEqual((geo.columns, geo.rows), (40, 20))
        self.assertEqual((geo.pixel_width, geo.pixel_height), (400, 400))

    def test_width_only_derives_rows(self):
        geo = plan_geometry(200, 100, GeometryRequest(width=40, height=None, cell_width=10, cell_height=20))
        self.assertEqual((geo.columns, geo.rows), (40, 10))
        self.assertEqual((geo.pixel_width, geo.pixel_height), (400, 200))

    def test_height_only_derives_columns(self):
        geo = plan_geometry(200, 100, GeometryRequest(width=None, height=10, cell_width=10, cell_height=20))
        self.assertEqual((geo.columns, geo.rows), (40, 10))

    def test_neither_maps_source_pixels(self):
        geo = plan_geometry(100, 60, GeometryRequest(width=None, height=None, cell_width=10, cell_height=20))
        self.assertEqual((geo.columns, geo.rows), (10, 3))

    def test_single_axis_preserves_aspect_within_one_cell(self):
        for src_w, src_h in ((640, 480), (37, 91), (1920, 1080), (5, 300)):
            for width in (1, 7, 35, 80):
                req = GeometryRequest(width=width, height=None, cell_width=17, cell_height=24)
                geo = plan_geometry(src_w, src_h, req)
                ideal = width * 17 * (src_h / src_w) / 24
                self.assertLessEqual(abs(geo.rows - max(ideal, 1)), 1, (src_w, src_h, width))
                self.assertGreaterEqual(geo.rows, 1)

    def test_extreme_aspect_keeps_one_row(self):
        geo = plan_geometry(1000, 10, GeometryRequest(width=5, height=None, cell_width=10, cell_height=20))
        self.assertEqual(geo.rows, 1)

    def test_auto_fit_shrinks_to_source_aspect(self):
        req = GeometryRequest(width=40, height=20, cell_width=10, cell_height=20, auto_fit=True)
        geo = plan_geometry(200, 100, req)
        self.assertEqual((geo.pixel_width, geo.pixel_height), (400, 200))
        self.assertEqual((geo.columns, geo.rows), (40, 10))

    def test_auto_fit_cells_within_one_cell_of_pixel_box(self):
        req = GeometryRequest(width=33, height=17, cell_width=9, cell_height=19, auto_fit=True)
        for src in ((123, 457), (800, 333), (64, 64)):
            geo = plan_geometry(src[0], src[1], req)
            self.assertGreaterEqual(geo.columns * 9, geo.pixel_width)
            self.assertLess(geo.columns * 9 - geo.pixel_width, 9)
            self.assertGreaterEqual(geo.rows * 19, geo.pixel_height)
            self.assertLess(geo.rows * 19 - geo.pixel_height, 19)

    def test_zero_width_fails(self):
        with self.assertRaises(InvalidGeometry):
            plan_geometry(100, 100, GeometryRequest(width=0, height=None, cell_width=10, cell_height=20))

    def test_negative_height_fails(self):
        with self.assertRaises(InvalidGeometry):
            plan_geometry(100, 100, GeometryRequest(width=10, height=-3, cell_width=10, cell_height=20))

    def test_zero_cell_size_fails(self):
        with self.assertRaises(InvalidGeometry):
            plan_geometry(100, 100, GeometryRequest(width=10, height=10, cell_width=0, cell_height=20))
        with self.assertRaises(InvalidGeometry):
            plan_geometry(100, 100, GeometryRequest(width=10, height=10, cell_width=10, cell_height=-1))

    def test_non_integer_sizes_fail(self):
        for req in (
            GeometryRequest(width=40.0, height=20, cell_width=10, cell_height=20),
            GeometryRequest(width=40, height="20", cell_width=10, cell_height=20),
            GeometryRequest(width=40, height=None, cell_width=True, cell_height=20),
            GeometryRequest(width=None, height=10, cell_width=10, cell_height=19.5),
        ):
            with self.assertRaises(InvalidGeometry):
                plan_geometry(100, 100, req)


if __name__ == "__main__":
    unittest.main()
