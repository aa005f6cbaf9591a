import json
import tempfile
import unittest
from pathlib import Path

from dotmap.constants import DEFAULT_PALETTE, WATER_NAMES
from dotmap.palette_data import (
    build_palette,
    default_palette,
    load_palette_config,
    parse_palette_config,
)

SMALL = [
    (1, "black", "#000000", 10),
    (2, "navy", "#000080", 10),
    (3, "teal", "#008080", 10),
    (4, "sky", "#87CEEB", 10),
    (5, "grass", "#00ff00", 5),
]
SMALL_WATER = ("black", "navy", "teal", "sky")


class DefaultPaletteTests(unittest.TestCase):
    def test_partition(self) -> None:
        pal = default_palette()
        self.assertEqual(len(pal.colours), len(DEFAULT_PALETTE))
        self.assertEqual(tuple(c.name for c in pal.water), WATER_NAMES)
        self.assertEqual(len(pal.land), len(DEFAULT_PALETTE) - 4)
        self.assertFalse(set(pal.water) & set(pal.land))

    def test_hex_lowercase(self) -> None:
        for c in default_palette().colours:
            self.assertEqual(c.hex, c.hex.lower())
            self.assertEqual(len(c.hex), 7)

    def test_lookup(self) -> None:
        pal = default_palette()
        self.assertEqual(pal.get("#ffffff").name, "white")
        self.assertIsNone(pal.get("#123456"))
        self.assertEqual(pal.quantity_of("#123456"), 0)
        self.assertTrue(pal.is_water("#05131d"))
        self.assertFalse(pal.is_water(None))
        with self.assertRaises(KeyError):
            pal.by_name("magenta")


class BuildPaletteTests(unittest.TestCase):
    def test_normalises_hex(self) -> None:
        pal = build_palette(SMALL, SMALL_WATER)
        self.assertEqual(pal.by_name("sky").hex, "#87ceeb")

    def test_wrong_water_count(self) -> None:
        with self.assertRaises(ValueError):
            build_palette(SMALL, SMALL_WATER[:3])

    def test_duplicate_water_names(self) -> None:
        with self.assertRaises(ValueError):
            build_palette(SMALL, ("black", "black", "teal", "sky"))

    def test_missing_water_name(self) -> None:
        with self.assertRaises(ValueError):
            build_palette(SMALL, ("black", "navy", "teal", "ocean"))

    def test_duplicate_hex(self) -> None:
        entries = SMALL + [(6, "lime", "#00FF00", 1)]
        with self.assertRaises(ValueError):
            build_palette(entries, SMALL_WATER)

    def test_bad_quantity(self) -> None:
        for qty in (-1, 2.5, True):
            entries = SMALL[:4] + [(5, "grass", "#00ff00", qty)]
            with self.assertRaises(ValueError):
                build_palette(entries, SMALL_WATER)

    def test_bad_hex(self) -> None:
        entries = SMALL[:4] + [(5, "grass", "00ff00", 1)]
        with self.assertRaises(ValueError):
            build_palette(entries, SMALL_WATER)

    def test_no_land(self) -> None:
        with self.assertRaises(ValueError):
            build_palette(SMALL[:4], SMALL_WATER)


def _config(**extra):
    data = {
        "colors": [
            {"id": cid, "name": name, "hex": hx, "quantity": qty}
            for cid, name, hx, qty in SMALL
        ],
        "waterColors": list(SMALL_WATER),
    }
    data.update(extra)
    return data


class ConfigTests(unittest.TestCase):
    def test_parse(self) -> None:
        cfg = parse_palette_config(_config(basePlates={"size": [32, 32], "quantity": 2}))
        self.assertEqual(cfg.plate_size, (32, 32))
        self.assertEqual(cfg.plate_quantity, 2)
        self.assertEqual(cfg.palette.by_name("grass").quantity, 5)

    def test_parse_defaults(self) -> None:
        cfg = parse_palette_config(_config())
        self.assertEqual(cfg.plate_size, (16, 16))
        self.assertIsNone(cfg.plate_quantity)

    def test_parse_errors(self) -> None:
        bad = [
            [],
            {},
            {"colors": []},
            {"colors": [{"id": 1, "name": "x", "hex": "#000000"}]},
            _config(basePlates={"size": [0, 16]}),
            _config(basePlates=5),
            _config(basePlates={"quantity": "four"}),
            _config(waterColors="black"),
            _config(colors=[{"id": 1, "name": "x", "hex": 123, "quantity": 1}]),
        ]
        for data in bad:
            with self.assertRaises(ValueError):
                parse_palette_config(data)

    def test_load_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "dotmaps.config.json"
            path.write_text(json.dumps(_config()), encoding="utf-8")
            cfg = load_palette_config(path)
        self.assertEqual(len(cfg.palette.land), 1)

    def test_load_invalid_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.json"
            path.write_text("{ not json", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_palette_config(path)


if __name__ == "__main__":
    unittest.main()
