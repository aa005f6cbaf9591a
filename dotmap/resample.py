# dotmap/resample.py
from __future__ import annotations

"""
Grid resampling.

Exports:
  downsample_to_cells(image, grid_w, grid_h) -> float32 [grid_h, grid_w, 3]
  reduced_grid_size(grid_w, grid_h, detail) -> (w, h)
  upscale_nearest(small, grid_w, grid_h) -> Grid
"""

import math
from typing import List, Sequence, Tuple, TypeVar

import numpy as np

from .core_types import CellRGB, U8Image, assert_grid_size, assert_u8_image_rgb

T = TypeVar("T")


def _tile_bounds(n_cells: int, n_src: int) -> List[Tuple[int, int]]:
    """Proportional [start, end) source spans, one per cell."""
    return [
        ((i * n_src) // n_cells, ((i + 1) * n_src) // n_cells) for i in range(n_cells)
    ]


def downsample_to_cells(image: U8Image, grid_w: int, grid_h: int) -> CellRGB:
    """
    Box-filter an image to one average RGB per grid cell.

    Tiles use floor(i*src/grid) boundaries so any size pair works. A tile that
    covers no source pixels (grid larger than the image) averages to 0.
    Alpha is ignored.
    """
    img = assert_u8_image_rgb(image)
    assert_grid_size(grid_w, grid_h)
    img_h, img_w = img.shape[0], img.shape[1]
    rgb = img[..., :3]

    out = np.zeros((grid_h, grid_w, 3), dtype=np.float32)
    xs = _tile_bounds(grid_w, img_w)
    ys = _tile_bounds(grid_h, img_h)
    for gy, (y0, y1) in enumerate(ys):
        if y1 <= y0:
            continue
        band = rgb[y0:y1]
        for gx, (x0, x1) in enumerate(xs):
            if x1 <= x0:
                continue
            tile = band[:, x0:x1].reshape(-1, 3)
            sums = tile.sum(axis=0, dtype=np.float64)
            out[gy, gx] = (sums / tile.shape[0]).astype(np.float32)
    return out


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def reduced_grid_size(grid_w: int, grid_h: int, detail: int) -> Tuple[int, int]:
    """
    Coarse grid with the long side set to detail, aspect ratio preserved.
    The short side never drops below 1.
    """
    aspect = grid_w / grid_h
    if aspect >= 1:
        return detail, max(1, _round_half_up(detail / aspect))
    return max(1, _round_half_up(detail * aspect)), detail


def upscale_nearest(small: Sequence[Sequence[T]], grid_w: int, grid_h: int) -> List[List[T]]:
    """Nearest-neighbour upscale: each output cell copies the cell it maps into."""
    sh = len(small)
    sw = len(small[0]) if sh else 0
    if sh == 0 or sw == 0:
        raise ValueError("cannot upscale an empty grid")
    rows: List[List[T]] = []
    for r in range(grid_h):
        sr = min((r * sh) // grid_h, sh - 1)
        src_row = small[sr]
        rows.append([src_row[min((c * sw) // grid_w, sw - 1)] for c in range(grid_w)])
    return rows


__all__ = ["downsample_to_cells", "reduced_grid_size", "upscale_nearest"]
