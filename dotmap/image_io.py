# dotmap/image_io.py
from __future__ import annotations

"""
Image I/O helpers: loading sources as RGBA arrays and drawing grid previews.
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageDraw, ImageOps, UnidentifiedImageError

from .core_types import Grid, U8Image, assert_u8_image_rgb, hex_to_rgb
from .grid_ops import validate_grid

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif"}


def load_image_rgba(path: Path) -> U8Image:
    """Load an image with Pillow (EXIF orientation applied) as uint8 [H,W,4]."""
    with Image.open(path) as im0:
        im = ImageOps.exif_transpose(im0).convert("RGBA")
    return np.array(im, dtype=np.uint8)


def coerce_image_rgba(image: Union[Image.Image, np.ndarray]) -> U8Image:
    """Accept a Pillow image or a uint8 [H,W,3|4] array; return the array form."""
    if isinstance(image, Image.Image):
        return np.array(image.convert("RGBA"), dtype=np.uint8)
    return assert_u8_image_rgb(image)


def render_grid_preview(grid: Grid, cell_px: int = 12, gap_px: int = 1) -> Image.Image:
    """
    Draw each filled cell as a round dot on a transparent canvas.
    Empty cells stay transparent.
    """
    if cell_px < 2:
        raise ValueError("cell_px must be at least 2")
    width, height = validate_grid(grid)
    canvas = Image.new("RGBA", (max(1, width * cell_px), max(1, height * cell_px)), (0, 0, 0, 0))
    draw = ImageDraw.Draw(canvas)
    inset = min(gap_px, (cell_px - 1) // 2)
    for r, row in enumerate(grid):
        y0 = r * cell_px
        for c, cell in enumerate(row):
            if cell is None:
                continue
            x0 = c * cell_px
            draw.ellipse(
                (x0 + inset, y0 + inset, x0 + cell_px - 1 - inset, y0 + cell_px - 1 - inset),
                fill=(*hex_to_rgb(cell), 255),
            )
    return canvas


def save_png_rgba(path: Path, image: Image.Image) -> Path:
    """Save as PNG, forcing the .png suffix."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    image.save(path, format="PNG")
    return path


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.verify()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "IMAGE_EXTS",
    "load_image_rgba",
    "coerce_image_rgba",
    "render_grid_preview",
    "save_png_rgba",
    "is_image_file",
]
