# dotmap/core_types.py
from __future__ import annotations

"""
Core type aliases, palette value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HSLTuple = Tuple[float, float, float]  # hue [0,360), sat [0,1], light [0,1]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3) or (H, W, 4)
CellRGB = NDArray[np.float32]  # (gh, gw, 3) per-cell averages
BoolMask = NDArray[np.bool_]  # (gh, gw)
Field = NDArray[np.float32]  # (gh, gw) distance scalars

Cell = Optional[HexStr]  # "#rrggbb" or None (empty)
Grid = List[List[Cell]]

# Value objects


@dataclass(frozen=True)
class PaletteColour:
    """Physical palette colour with its supply and precomputed HSL."""

    id: int
    name: str
    hex: HexStr  # lowercase "#rrggbb"
    rgb: RGBTuple
    quantity: int
    hsl: HSLTuple


@dataclass(frozen=True)
class Palette:
    """
    Validated palette split into a water gradient and a land set.

    water is ordered darkest to lightest; land keeps configuration order.
    Build with palette_data.build_palette() rather than directly.
    """

    colours: Tuple[PaletteColour, ...]
    water: Tuple[PaletteColour, ...]
    land: Tuple[PaletteColour, ...]
    _by_hex: Dict[HexStr, PaletteColour] = field(
        default_factory=dict, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self._by_hex:
            self._by_hex.update({c.hex: c for c in self.colours})

    @property
    def water_hexes(self) -> Tuple[HexStr, ...]:
        return tuple(c.hex for c in self.water)

    def get(self, hex_str: HexStr) -> Optional[PaletteColour]:
        return self._by_hex.get(hex_str)

    def is_water(self, hex_str: Cell) -> bool:
        return hex_str is not None and hex_str in self.water_hexes

    def quantity_of(self, hex_str: HexStr) -> int:
        """Configured supply; colours outside the palette have none."""
        colour = self._by_hex.get(hex_str)
        return colour.quantity if colour is not None else 0

    def by_name(self, name: str) -> PaletteColour:
        for c in self.colours:
            if c.name == name:
                return c
        raise KeyError(name)


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def hue_difference_degrees(hue_a: float, hue_b: float) -> float:
    """Minimal absolute difference between two hues in degrees [0, 180]."""
    d = abs(hue_a - hue_b)
    return min(d, 360.0 - d)


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    if not isinstance(hex_str, str):
        raise ValueError(f"hex must be a string: {hex_str!r}")
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError(f"hex must start with '#': {hex_str!r}")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError(f"hex must be '#rrggbb' or '#rgb': {hex_str!r}")
    try:
        return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))
    except ValueError:
        raise ValueError(f"invalid hex digits: {hex_str!r}") from None


def normalise_hex(hex_str: str) -> HexStr:
    """Canonical lowercase '#rrggbb' form."""
    return rgb_to_hex(hex_to_rgb(hex_str))


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3 or 4) image and return it typed as U8Image."""
    if (
        not isinstance(image, np.ndarray)
        or image.dtype != np.uint8
        or image.ndim != 3
        or image.shape[-1] not in (3, 4)
    ):
        raise TypeError("expected uint8 (H,W,3/4) image")
    return image  # type: ignore[return-value]


def assert_grid_size(width: int, height: int) -> None:
    """Grid dimensions must be positive integers."""
    for label, v in (("width", width), ("height", height)):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)) or v <= 0:
            raise ValueError(f"grid {label} must be a positive integer, got {v!r}")


__all__ = [
    # aliases / types
    "RGBTuple",
    "HSLTuple",
    "HexStr",
    "U8Image",
    "CellRGB",
    "BoolMask",
    "Field",
    "Cell",
    "Grid",
    # value objects
    "PaletteColour",
    "Palette",
    # helpers
    "clamp_value",
    "hue_difference_degrees",
    "rgb_to_hex",
    "hex_to_rgb",
    "normalise_hex",
    "assert_u8_image_rgb",
    "assert_grid_size",
]
