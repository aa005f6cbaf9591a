# dotmap/synthesize.py
from __future__ import annotations

"""
Image to dot-grid synthesis.

Pipeline per call:
  downsample -> classify water/land -> distance fields -> assign colours.

Water cells get a dithered gradient: light near the coast and the frame
edge, dark in open water far from both. Land cells are matched to the
land palette on hue. With a detail resolution below the grid size, the grid
is synthesised at the coarser size and upscaled by nearest neighbour.
"""

import math
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .classify import water_mask
from .colour_convert import chromatic_match
from .core_types import (
    Grid,
    Palette,
    PaletteColour,
    U8Image,
    assert_grid_size,
    clamp_value,
)
from .distance import border_distance, distance_field, field_max, normalise_distance
from .grid_ops import new_grid
from .image_io import coerce_image_rgba
from .noise import hash_field
from .options import DEFAULT_OPTIONS, RenderOptions
from .resample import downsample_to_cells, reduced_grid_size, upscale_nearest
from .utils import debug_log, key_value_pairs_to_string


def water_blend(land_norm: float, edge_norm: float, options: RenderOptions) -> float:
    """
    Gradient position for a water cell, 0 = darkest, 1 = lightest (unclamped).
    Near land and near the frame edge both push lighter.
    """
    t = (1 - land_norm) * options.coastline_weight + (1 - edge_norm) * options.inland_weight
    return t + options.depth_bias


def pick_water_gradient(
    t: float, noise: float, gradient: Sequence[PaletteColour]
) -> PaletteColour:
    """
    Dithered pick between the two stops around t.

    t is scaled onto the stops and the fractional part is compared with a
    per-cell noise value, so boundaries between stops scatter instead of
    forming rings.
    """
    top = len(gradient) - 1
    scaled = clamp_value(t * top, 0.0, float(top))
    lower = min(top - 1, int(math.floor(scaled)))
    frac = scaled - lower
    return gradient[lower + 1] if noise < frac else gradient[lower]


def _synthesize_cells(
    image: U8Image,
    grid_w: int,
    grid_h: int,
    palette: Palette,
    options: RenderOptions,
    debug: bool,
) -> Grid:
    cells = downsample_to_cells(image, grid_w, grid_h)
    water = water_mask(cells, options.water_thresholds)

    to_land = distance_field(water, target=False)
    to_edge = border_distance(grid_w, grid_h)
    max_land = field_max(to_land, water)
    max_edge = field_max(to_edge)
    land_norm = normalise_distance(to_land, max_land)
    edge_norm = normalise_distance(to_edge, max_edge)

    gradient = options.water_gradient(palette)
    noise = hash_field(grid_w, grid_h)
    boost = options.saturation_boost

    # Map imagery repeats colours heavily; match each distinct average once.
    land_cache: Dict[Tuple[float, float, float], str] = {}

    grid = new_grid(grid_w, grid_h)
    for y in range(grid_h):
        row = grid[y]
        for x in range(grid_w):
            if water[y, x]:
                t = water_blend(float(land_norm[y, x]), float(edge_norm[y, x]), options)
                row[x] = pick_water_gradient(t, float(noise[y, x]), gradient).hex
                continue
            r, g, b = (clamp_value(float(v), 0.0, 255.0) for v in cells[y, x])
            key = (r, g, b)
            hex_str = land_cache.get(key)
            if hex_str is None:
                hex_str = chromatic_match(r, g, b, palette.land, boost).hex
                land_cache[key] = hex_str
            row[x] = hex_str

    if debug:
        n_water = int(np.count_nonzero(water))
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Grid", f"{grid_w}x{grid_h}"),
                    ("Water", n_water),
                    ("Land", grid_w * grid_h - n_water),
                    ("Max land dist", max_land),
                    ("Max edge dist", max_edge),
                    ("Land uniques", len(land_cache)),
                ]
            )
        )
    return grid


def synthesize(
    image: U8Image,
    grid_width: int,
    grid_height: int,
    palette: Palette,
    *,
    detail_resolution: Optional[int] = None,
    options: Optional[RenderOptions] = None,
    debug: bool = False,
) -> Grid:
    """
    Convert an RGB(A) uint8 image into a grid_height x grid_width dot grid.

    Args:
      image: uint8 [H,W,3|4] array or Pillow image; alpha is ignored
      grid_width, grid_height: positive output size
      palette: validated palette with its water/land split
      detail_resolution: optional long-side size to synthesise at before
        upscaling; ignored when >= max(grid_width, grid_height)
      options: render options; RenderOptions() reproduces the base algorithm
    Returns:
      fresh Grid of lowercase '#rrggbb' strings
    """
    img = coerce_image_rgba(image)
    assert_grid_size(grid_width, grid_height)
    opts = options if options is not None else DEFAULT_OPTIONS

    if detail_resolution is not None:
        if (
            isinstance(detail_resolution, bool)
            or not isinstance(detail_resolution, (int, np.integer))
            or detail_resolution <= 0
        ):
            raise ValueError(
                f"detail_resolution must be a positive integer, got {detail_resolution!r}"
            )
        if detail_resolution < max(grid_width, grid_height):
            sw, sh = reduced_grid_size(grid_width, grid_height, int(detail_resolution))
            if debug:
                debug_log(
                    f"detail {detail_resolution}: sampling {sw}x{sh}, "
                    f"upscaling to {grid_width}x{grid_height}"
                )
            small = _synthesize_cells(img, sw, sh, palette, opts, debug)
            return upscale_nearest(small, grid_width, grid_height)

    return _synthesize_cells(img, grid_width, grid_height, palette, opts, debug)


__all__ = ["synthesize", "water_blend", "pick_water_gradient"]
