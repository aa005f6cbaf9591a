# dotmap/limit.py
from __future__ import annotations

"""
Supply limiting.

limit_quantities() reassigns cells of over-used colours so each colour's
usage fits its configured quantity where an alternative with spare supply
exists. Colours are handled most-constrained first (usage / quantity).

Which cells keep a scarce colour is decided by a priority score:
  - water stops keep the cells where they read best in the gradient
    (lightest near the coast, darkest far out), with a tiny hash jitter
  - land colours keep a hash-ranked, spatially incoherent subset, so the
    shortfall is spread over the whole map instead of one region

Excess water cells move along the gradient and fall back to the darkest
stop of the active gradient (dark blue when black is left out of the
water), which is treated as unlimited. Excess land cells move to the nearest
land colour in HSL with spare supply; when none has supply the cell is left
as is and the colour stays over its quantity.
"""

from typing import Dict, List, Optional, Tuple

import numpy as np

from .colour_convert import hsl_distance, rgb_to_hsl
from .constants import (
    DEEP_EDGE_W,
    DEEP_LAND_W,
    MID_BAND_TARGET,
    PRIORITY_JITTER,
    SHALLOW_EDGE_W,
    SHALLOW_LAND_W,
)
from .core_types import Grid, HexStr, Palette, hex_to_rgb
from .distance import border_distance, distance_field, field_max, normalise_distance
from .grid_ops import copy_grid, validate_grid
from .noise import hash2d
from .options import DEFAULT_OPTIONS, RenderOptions
from .synthesize import pick_water_gradient, water_blend
from .utils import debug_log, key_value_pairs_to_string, warn

Position = Tuple[int, int]  # (row, col)


def _water_priority(stop: int, land_n: float, edge_n: float, jitter: float) -> float:
    """Higher keeps the colour. stop is the gradient index, 0 = darkest."""
    if stop == 3:
        return (1 - land_n) + jitter
    if stop == 2:
        return (1 - land_n) * SHALLOW_LAND_W + edge_n * SHALLOW_EDGE_W + jitter
    if stop == 1:
        return (1 - abs(land_n - MID_BAND_TARGET)) + jitter
    return land_n * DEEP_LAND_W + (1 - edge_n) * DEEP_EDGE_W + jitter


def _usage_ratio(used: int, quantity: int) -> float:
    return used / quantity if quantity > 0 else float("inf")


def limit_quantities(
    grid: Grid,
    palette: Palette,
    options: Optional[RenderOptions] = None,
    *,
    debug: bool = False,
) -> Grid:
    """
    Return a new grid that respects palette quantities where possible.

    The input grid is not modified. Empty cells stay empty and no cell is
    emptied, so the non-empty count is unchanged. Colours missing from the
    palette have zero supply and are reassigned.
    Excess water cells with no stop left in supply take the darkest stop of
    options.water_gradient() even past its quantity; with black left out of
    the water that is dark blue, so black never reappears.
    """
    width, height = validate_grid(grid)
    opts = options if options is not None else DEFAULT_OPTIONS
    if width == 0 or height == 0:
        return copy_grid(grid)

    water_hexes = palette.water_hexes
    is_water_cell = np.array(
        [[palette.is_water(cell) for cell in row] for row in grid], dtype=bool
    )

    to_land = distance_field(is_water_cell, target=False)
    to_edge = border_distance(width, height)
    land_norm = normalise_distance(to_land, field_max(to_land, is_water_cell))
    edge_norm = normalise_distance(to_edge, field_max(to_edge))

    positions: Dict[HexStr, List[Position]] = {}
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell is not None:
                positions.setdefault(cell, []).append((r, c))

    remaining: Dict[HexStr, int] = {c.hex: c.quantity for c in palette.colours}
    over: List[HexStr] = []
    for hex_str, cells in positions.items():
        quantity = palette.quantity_of(hex_str)
        if len(cells) <= quantity:
            remaining[hex_str] = quantity - len(cells)
        else:
            remaining[hex_str] = 0
            over.append(hex_str)

    out = copy_grid(grid)
    if not over:
        return out

    over.sort(
        key=lambda h: _usage_ratio(len(positions[h]), palette.quantity_of(h)),
        reverse=True,
    )

    gradient = opts.water_gradient(palette)
    gradient_hexes: List[HexStr] = []
    for stop in gradient:
        if stop.hex not in gradient_hexes:
            gradient_hexes.append(stop.hex)
    fallback_hex = gradient[0].hex

    moved = 0
    stranded: Dict[HexStr, int] = {}

    for hex_str in over:
        cells = positions[hex_str]
        quantity = palette.quantity_of(hex_str)
        stop = water_hexes.index(hex_str) if hex_str in water_hexes else None

        scored: List[Tuple[float, int, int]] = []
        for r, c in cells:
            if stop is not None:
                jitter = hash2d(r, c) * PRIORITY_JITTER
                priority = _water_priority(
                    stop, float(land_norm[r, c]), float(edge_norm[r, c]), jitter
                )
            else:
                priority = hash2d(r, c)
            scored.append((priority, r, c))

        # Stable: equal priorities keep row-major order.
        scored.sort(key=lambda s: s[0], reverse=True)
        excess = scored[quantity:]

        if stop is not None:
            for _priority, r, c in excess:
                t = water_blend(float(land_norm[r, c]), float(edge_norm[r, c]), opts)
                ideal = pick_water_gradient(t, hash2d(c, r), gradient).hex
                candidates = [ideal] + [h for h in gradient_hexes if h != ideal]
                chosen = fallback_hex
                for cand in candidates:
                    if cand == hex_str:
                        continue
                    if remaining.get(cand, 0) > 0:
                        remaining[cand] -= 1
                        chosen = cand
                        break
                out[r][c] = chosen
                moved += 1
        else:
            h0, s0, l0 = rgb_to_hsl(*hex_to_rgb(hex_str))
            ranked = sorted(
                (pc for pc in palette.land if pc.hex != hex_str),
                key=lambda pc: hsl_distance(h0, s0, l0, *pc.hsl),
            )
            for i, (_priority, r, c) in enumerate(excess):
                target = next((pc.hex for pc in ranked if remaining.get(pc.hex, 0) > 0), None)
                if target is None:
                    stranded[hex_str] = len(excess) - i
                    break
                remaining[target] -= 1
                out[r][c] = target
                moved += 1

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [("Over budget", len(over)), ("Reassigned", moved)]
            )
        )
        for hex_str, n in stranded.items():
            colour = palette.get(hex_str)
            name = colour.name if colour else "?"
            warn(f"{hex_str} {name}: {n} cells over supply, no land colour left")

    return out


__all__ = ["limit_quantities"]
