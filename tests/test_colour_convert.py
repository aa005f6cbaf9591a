import unittest

from dotmap.colour_convert import (
    chromatic_match,
    hsl_distance,
    is_near_achromatic,
    rgb_to_hsl,
)
from dotmap.core_types import PaletteColour
from dotmap.palette_data import default_palette


def _colour(cid: int, name: str, rgb: tuple) -> PaletteColour:
    return PaletteColour(
        id=cid,
        name=name,
        hex="#%02x%02x%02x" % rgb,
        rgb=rgb,
        quantity=10,
        hsl=rgb_to_hsl(*rgb),
    )


class RgbToHslTests(unittest.TestCase):
    def test_primaries(self) -> None:
        self.assertEqual(rgb_to_hsl(255, 0, 0), (0.0, 1.0, 0.5))
        h, s, l = rgb_to_hsl(0, 0, 255)
        self.assertAlmostEqual(h, 240.0)
        self.assertAlmostEqual(s, 1.0)
        self.assertAlmostEqual(l, 0.5)
        h, _s, _l = rgb_to_hsl(0, 255, 0)
        self.assertAlmostEqual(h, 120.0)

    def test_grey_has_no_hue_or_saturation(self) -> None:
        for v in (0, 77, 128, 255):
            h, s, l = rgb_to_hsl(v, v, v)
            self.assertEqual((h, s), (0.0, 0.0))
            self.assertAlmostEqual(l, v / 255.0)

    def test_hue_stays_below_360(self) -> None:
        h, _s, _l = rgb_to_hsl(255, 0, 1)
        self.assertGreaterEqual(h, 0.0)
        self.assertLess(h, 360.0)

    def test_accepts_float_channels(self) -> None:
        h, s, l = rgb_to_hsl(10.5, 10.5, 80.25)
        self.assertAlmostEqual(h, 240.0)
        self.assertGreater(s, 0.5)
        self.assertLess(l, 0.2)


class HslDistanceTests(unittest.TestCase):
    def test_identical_is_zero(self) -> None:
        self.assertEqual(hsl_distance(200.0, 0.5, 0.4, 200.0, 0.5, 0.4), 0.0)

    def test_hue_wraps_around(self) -> None:
        across_zero = hsl_distance(350.0, 0.6, 0.5, 10.0, 0.6, 0.5)
        plain = hsl_distance(10.0, 0.6, 0.5, 30.0, 0.6, 0.5)
        self.assertAlmostEqual(across_zero, plain)

    def test_hue_weighted_by_saturation(self) -> None:
        vivid = hsl_distance(0.0, 1.0, 0.5, 180.0, 1.0, 0.5)
        greyish = hsl_distance(0.0, 0.0, 0.5, 180.0, 0.0, 0.5)
        self.assertAlmostEqual(vivid, 1.0)
        self.assertEqual(greyish, 0.0)


class ChromaticMatchTests(unittest.TestCase):
    def test_near_achromatic_rules(self) -> None:
        self.assertTrue(is_near_achromatic(0.05, 0.3))
        self.assertTrue(is_near_achromatic(0.2, 0.8))
        self.assertFalse(is_near_achromatic(0.2, 0.5))
        self.assertFalse(is_near_achromatic(0.6, 0.9))

    def test_white_matches_white_swatch(self) -> None:
        land = default_palette().land
        self.assertEqual(chromatic_match(255, 255, 255, land).name, "white")

    def test_muted_green_matches_green(self) -> None:
        land = default_palette().land
        self.assertEqual(chromatic_match(60, 140, 60, land).name, "green")

    def test_colourful_pixel_avoids_neutral_swatch(self) -> None:
        white = _colour(1, "white", (255, 255, 255))
        yellow = _colour(2, "yellow", (250, 200, 10))
        # Light, clearly tinted yellow: lightness is close to white's.
        self.assertEqual(chromatic_match(240, 220, 120, [white, yellow]).name, "yellow")

    def test_ties_keep_first_candidate(self) -> None:
        a = _colour(1, "a", (200, 40, 40))
        b = PaletteColour(
            id=2, name="b", hex="#c82828", rgb=a.rgb, quantity=5, hsl=a.hsl
        )
        self.assertIs(chromatic_match(190, 50, 50, [a, b]), a)
        self.assertIs(chromatic_match(128, 128, 128, [b, a]), b)

    def test_empty_candidates_raise(self) -> None:
        with self.assertRaises(ValueError):
            chromatic_match(1, 2, 3, [])


if __name__ == "__main__":
    unittest.main()
