import io
import unittest
from contextlib import redirect_stdout

import numpy as np
from PIL import Image

from dotmap.options import RenderOptions
from dotmap.palette_data import default_palette
from dotmap.synthesize import pick_water_gradient, synthesize, water_blend

GREEN = "#237841"


def _coast_image() -> np.ndarray:
    """32x16 image: grass on the left half, open sea on the right half."""
    img = np.zeros((16, 32, 3), dtype=np.uint8)
    img[:, :16] = (60, 140, 60)
    img[:, 16:] = (20, 60, 160)
    return img


def _stops(grid, col, palette):
    return [palette.water_hexes.index(row[col]) for row in grid]


class SynthesizeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.pal = default_palette()

    def test_all_water(self) -> None:
        img = np.full((2, 2, 3), (10, 10, 80), dtype=np.uint8)
        grid = synthesize(img, 2, 2, self.pal)
        for row in grid:
            for cell in row:
                self.assertIn(cell, self.pal.water_hexes)

    def test_white_land(self) -> None:
        img = np.full((1, 1, 4), 255, dtype=np.uint8)
        self.assertEqual(synthesize(img, 1, 1, self.pal), [["#ffffff"]])

    def test_deterministic(self) -> None:
        rng = np.random.default_rng(3)
        img = rng.integers(0, 256, size=(40, 60, 3), dtype=np.uint8)
        a = synthesize(img, 30, 20, self.pal)
        b = synthesize(img, 30, 20, self.pal)
        self.assertEqual(a, b)

    def test_dimensions_any_detail(self) -> None:
        rng = np.random.default_rng(5)
        img = rng.integers(0, 256, size=(30, 50, 3), dtype=np.uint8)
        for detail in (None, 1, 5, 16, 63, 64, 100):
            with self.subTest(detail=detail):
                grid = synthesize(img, 40, 24, self.pal, detail_resolution=detail)
                self.assertEqual(len(grid), 24)
                self.assertTrue(all(len(row) == 40 for row in grid))
                self.assertTrue(all(cell is not None for row in grid for cell in row))

    def test_detail_upscales_in_blocks(self) -> None:
        rng = np.random.default_rng(11)
        img = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
        grid = synthesize(img, 64, 64, self.pal, detail_resolution=16)
        for r in range(64):
            for c in range(64):
                self.assertEqual(grid[r][c], grid[r - r % 4][c - c % 4])

    def test_detail_at_or_above_size_is_full(self) -> None:
        rng = np.random.default_rng(13)
        img = rng.integers(0, 256, size=(20, 20, 3), dtype=np.uint8)
        full = synthesize(img, 10, 10, self.pal)
        self.assertEqual(synthesize(img, 10, 10, self.pal, detail_resolution=10), full)
        self.assertEqual(synthesize(img, 10, 10, self.pal, detail_resolution=50), full)

    def test_coast_gradient(self) -> None:
        grid = synthesize(_coast_image(), 16, 8, self.pal)
        for row in grid:
            self.assertEqual(row[:8], [GREEN] * 8)
        shore = _stops(grid, 8, self.pal)
        offshore = _stops(grid, 12, self.pal)
        self.assertNotIn(0, shore)
        self.assertGreater(sum(shore) / len(shore), sum(offshore) / len(offshore))

    def test_black_excluded(self) -> None:
        black = self.pal.water[0].hex
        deep = RenderOptions(water_depth=100)
        self.assertIn(
            black, [c for row in synthesize(_coast_image(), 16, 8, self.pal, options=deep) for c in row]
        )
        opts = RenderOptions(water_depth=100, include_black_in_water=False)
        grid = synthesize(_coast_image(), 16, 8, self.pal, options=opts)
        self.assertNotIn(black, [c for row in grid for c in row])

    def test_depth_darkens(self) -> None:
        black = self.pal.water[0].hex

        def count_black(depth: int) -> int:
            opts = RenderOptions(water_depth=depth)
            grid = synthesize(_coast_image(), 16, 8, self.pal, options=opts)
            return sum(row.count(black) for row in grid)

        self.assertEqual(count_black(0), 0)
        self.assertGreater(count_black(100), count_black(0))

    def test_debug_output(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            synthesize(_coast_image(), 16, 8, self.pal, detail_resolution=4, debug=True)
        self.assertIn("[debug]", buf.getvalue())

    def test_accepts_pillow_image(self) -> None:
        img = _coast_image()
        self.assertEqual(
            synthesize(Image.fromarray(img), 16, 8, self.pal),
            synthesize(img, 16, 8, self.pal),
        )

    def test_invalid_arguments(self) -> None:
        img = np.zeros((4, 4, 3), dtype=np.uint8)
        with self.assertRaises(ValueError):
            synthesize(img, 0, 4, self.pal)
        for detail in (0, -3, 2.5, True):
            with self.assertRaises(ValueError):
                synthesize(img, 4, 4, self.pal, detail_resolution=detail)
        with self.assertRaises(TypeError):
            synthesize(img.astype(np.float32), 4, 4, self.pal)


class GradientPickTests(unittest.TestCase):
    def setUp(self) -> None:
        self.gradient = default_palette().water

    def test_ends(self) -> None:
        self.assertIs(pick_water_gradient(0.0, 0.5, self.gradient), self.gradient[0])
        self.assertIs(pick_water_gradient(1.0, 0.0, self.gradient), self.gradient[3])
        self.assertIs(pick_water_gradient(1.0, 0.999, self.gradient), self.gradient[3])

    def test_dither(self) -> None:
        # t = 0.5 scales to 1.5: upper stop when the noise is below 0.5.
        self.assertIs(pick_water_gradient(0.5, 0.2, self.gradient), self.gradient[2])
        self.assertIs(pick_water_gradient(0.5, 0.7, self.gradient), self.gradient[1])

    def test_clamped(self) -> None:
        self.assertIs(pick_water_gradient(-0.4, 0.0, self.gradient), self.gradient[0])
        self.assertIs(pick_water_gradient(1.6, 0.9, self.gradient), self.gradient[3])

    def test_blend_formula(self) -> None:
        opts = RenderOptions()
        self.assertAlmostEqual(water_blend(0.25, 0.5, opts), 0.75 * 0.7 + 0.5 * 0.3)
        self.assertAlmostEqual(water_blend(1.0, 1.0, opts), 0.0)
        shallow = RenderOptions(water_depth=0)
        self.assertAlmostEqual(water_blend(1.0, 1.0, shallow), 0.5)


if __name__ == "__main__":
    unittest.main()
