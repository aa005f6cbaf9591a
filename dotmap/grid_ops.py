# dotmap/grid_ops.py
from __future__ import annotations

"""
Grid helpers for the output contract.

Exports:
  new_grid(width, height) -> Grid
  grid_size(grid) -> (width, height)
  validate_grid(grid) -> (width, height)
  copy_grid(grid) -> Grid
  colour_usage(grid) -> Counter[hex]
  parts_list(grid, palette) -> List[PartsRow]
  base_plates_needed(width, height, plate_size) -> int
  grid_to_json(grid) / grid_from_json(text)
"""

import json
import math
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import BASE_PLATE_SIZE
from .core_types import Cell, Grid, HexStr, Palette, assert_grid_size, normalise_hex


@dataclass(frozen=True)
class PartsRow:
    hex: HexStr
    name: str
    id: Optional[int]
    used: int
    available: int

    @property
    def shortfall(self) -> int:
        return max(0, self.used - self.available)


def new_grid(width: int, height: int) -> Grid:
    """Empty width x height grid."""
    assert_grid_size(width, height)
    return [[None] * width for _ in range(height)]


def grid_size(grid: Grid) -> Tuple[int, int]:
    """(width, height); an empty grid is (0, 0)."""
    height = len(grid)
    return (len(grid[0]) if height else 0), height


def validate_grid(grid: Grid) -> Tuple[int, int]:
    """Check the grid is rectangular and return (width, height)."""
    width, height = grid_size(grid)
    for r, row in enumerate(grid):
        if len(row) != width:
            raise ValueError(f"row {r} has length {len(row)}, expected {width}")
    return width, height


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def colour_usage(grid: Grid) -> Counter:
    """Number of cells holding each colour. Empty cells are not counted."""
    return Counter(cell for row in grid for cell in row if cell is not None)


def parts_list(grid: Grid, palette: Palette) -> List[PartsRow]:
    """
    Per-colour usage against supply, sorted by count descending.
    Colours outside the palette are listed with name '?' and no supply.
    """
    rows: List[PartsRow] = []
    for hex_str, used in sorted(colour_usage(grid).items(), key=lambda kv: -kv[1]):
        colour = palette.get(hex_str)
        rows.append(
            PartsRow(
                hex=hex_str,
                name=colour.name if colour else "?",
                id=colour.id if colour else None,
                used=used,
                available=colour.quantity if colour else 0,
            )
        )
    return rows


def base_plates_needed(
    width: int, height: int, plate_size: Tuple[int, int] = BASE_PLATE_SIZE
) -> int:
    """Base plates needed to tile a width x height grid."""
    assert_grid_size(width, height)
    pw, ph = plate_size
    return math.ceil(width / pw) * math.ceil(height / ph)


def grid_to_json(grid: Grid) -> str:
    """Serialise as {"grid": [[hex|null]], "width": W, "height": H}."""
    width, height = validate_grid(grid)
    return json.dumps({"grid": grid, "width": width, "height": height})


def grid_from_json(text: str) -> Grid:
    """Inverse of grid_to_json; checks the declared size matches the rows."""
    data = json.loads(text)
    if not isinstance(data, dict) or "grid" not in data:
        raise ValueError("grid file must be an object with a 'grid' key")
    raw = data["grid"]
    if not isinstance(raw, list):
        raise ValueError("'grid' must be a list of rows")

    grid: Grid = []
    for r, row in enumerate(raw):
        if not isinstance(row, list):
            raise ValueError(f"row {r} is not a list")
        cells: List[Cell] = []
        for c, cell in enumerate(row):
            if cell is not None and not isinstance(cell, str):
                raise ValueError(f"cell ({r}, {c}) must be a hex string or null, got {cell!r}")
            cells.append(None if cell is None else normalise_hex(cell))
        grid.append(cells)

    width, height = validate_grid(grid)
    declared = (data.get("width", width), data.get("height", height))
    if declared != (width, height):
        raise ValueError(
            f"declared size {declared[0]}x{declared[1]} does not match grid {width}x{height}"
        )
    return grid


__all__ = [
    "PartsRow",
    "new_grid",
    "grid_size",
    "validate_grid",
    "copy_grid",
    "colour_usage",
    "parts_list",
    "base_plates_needed",
    "grid_to_json",
    "grid_from_json",
]
