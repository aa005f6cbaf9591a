import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

from dotmap.image_io import (
    coerce_image_rgba,
    is_image_file,
    load_image_rgba,
    render_grid_preview,
    save_png_rgba,
)


class PreviewTests(unittest.TestCase):
    def test_dots(self) -> None:
        im = render_grid_preview([["#ff0000", None]], cell_px=10)
        self.assertEqual(im.mode, "RGBA")
        self.assertEqual(im.size, (20, 10))
        self.assertEqual(im.getpixel((5, 5)), (255, 0, 0, 255))
        # Corners of a dot cell and empty cells stay transparent.
        self.assertEqual(im.getpixel((0, 0))[3], 0)
        self.assertEqual(im.getpixel((15, 5))[3], 0)

    def test_rejects_tiny_cells(self) -> None:
        with self.assertRaises(ValueError):
            render_grid_preview([["#ff0000"]], cell_px=1)


class FileTests(unittest.TestCase):
    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = save_png_rgba(Path(tmp) / "preview.jpg", Image.new("RGBA", (4, 3), (1, 2, 3, 255)))
            self.assertEqual(out.suffix, ".png")
            self.assertTrue(is_image_file(out))
            arr = load_image_rgba(out)
        self.assertEqual(arr.shape, (3, 4, 4))
        self.assertEqual(arr.dtype, np.uint8)
        self.assertEqual(arr[0, 0].tolist(), [1, 2, 3, 255])

    def test_load_rgb_adds_alpha(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "rgb.png"
            Image.new("RGB", (2, 2), (9, 8, 7)).save(path)
            arr = load_image_rgba(path)
        self.assertEqual(arr[1, 1].tolist(), [9, 8, 7, 255])

    def test_not_an_image(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.png"
            path.write_text("hello", encoding="utf-8")
            self.assertFalse(is_image_file(path))

    def test_coerce(self) -> None:
        arr = coerce_image_rgba(Image.new("RGB", (3, 2), (5, 5, 5)))
        self.assertEqual(arr.shape, (2, 3, 4))
        raw = np.zeros((2, 2, 3), dtype=np.uint8)
        self.assertIs(coerce_image_rgba(raw), raw)
        with self.assertRaises(TypeError):
            coerce_image_rgba(np.zeros((2, 2), dtype=np.uint8))


if __name__ == "__main__":
    unittest.main()
