# dotmap/palette_data.py
from __future__ import annotations

"""
Palette definitions and builders.

Exports:
  build_palette(entries=DEFAULT_PALETTE, water_names=WATER_NAMES) -> Palette
  default_palette() -> Palette
  load_palette_config(path) -> PaletteConfig

The JSON layout matches dotmaps.config.json:
  {
    "colors": [{"id": 1, "name": "black", "hex": "#05131D", "quantity": 2500}, ...],
    "basePlates": {"size": [16, 16], "quantity": 4},     # optional
    "waterColors": ["black", "dark blue", "turquoise", "light blue"]  # optional
  }
"""

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .colour_convert import rgb_to_hsl
from .constants import BASE_PLATE_SIZE, DEFAULT_PALETTE, GRADIENT_STOPS, WATER_NAMES
from .core_types import Palette, PaletteColour, hex_to_rgb, rgb_to_hex


@dataclass(frozen=True)
class PaletteConfig:
    palette: Palette
    plate_size: Tuple[int, int] = BASE_PLATE_SIZE
    plate_quantity: Optional[int] = None


def build_palette(
    entries: Sequence[Tuple[int, str, str, int]] = DEFAULT_PALETTE,
    water_names: Sequence[str] = WATER_NAMES,
) -> Palette:
    """
    Convert (id, name, hex, quantity) rows into a validated Palette.

    water_names picks the gradient stops, darkest first; every other entry
    is land. Raises ValueError on any configuration problem.
    """
    if len(water_names) != GRADIENT_STOPS:
        raise ValueError(
            f"water set needs exactly {GRADIENT_STOPS} names, got {len(water_names)}"
        )
    if len(set(water_names)) != len(water_names):
        raise ValueError(f"duplicate water names: {list(water_names)}")

    colours: List[PaletteColour] = []
    seen_hex: Dict[str, str] = {}
    for cid, name, hx, qty in entries:
        rgb = hex_to_rgb(hx)
        hex_norm = rgb_to_hex(rgb)
        if hex_norm in seen_hex:
            raise ValueError(
                f"duplicate palette colour {hex_norm} ({seen_hex[hex_norm]!r}, {name!r})"
            )
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 0:
            raise ValueError(f"quantity for {name!r} must be a non-negative int")
        seen_hex[hex_norm] = name
        colours.append(
            PaletteColour(
                id=int(cid),
                name=str(name),
                hex=hex_norm,
                rgb=rgb,
                quantity=qty,
                hsl=rgb_to_hsl(*rgb),
            )
        )

    by_name = {c.name: c for c in colours}
    missing = [n for n in water_names if n not in by_name]
    if missing:
        raise ValueError(f"water colours missing from palette: {missing}")

    water = tuple(by_name[n] for n in water_names)
    water_hex = {c.hex for c in water}
    land = tuple(c for c in colours if c.hex not in water_hex)
    if not land:
        raise ValueError("palette has no land colours")

    return Palette(colours=tuple(colours), water=water, land=land)


@lru_cache(maxsize=1)
def default_palette() -> Palette:
    """Built-in palette; cached since Palette is immutable."""
    return build_palette(DEFAULT_PALETTE, WATER_NAMES)


def _require(obj: Dict[str, Any], key: str, where: str) -> Any:
    if key not in obj:
        raise ValueError(f"{where}: missing '{key}'")
    return obj[key]


def parse_palette_config(data: Dict[str, Any]) -> PaletteConfig:
    """Validate a decoded config mapping and build its PaletteConfig."""
    if not isinstance(data, dict):
        raise ValueError("palette config must be a JSON object")
    raw_colours = _require(data, "colors", "palette config")
    if not isinstance(raw_colours, list) or not raw_colours:
        raise ValueError("palette config: 'colors' must be a non-empty list")

    entries: List[Tuple[int, str, str, int]] = []
    for i, row in enumerate(raw_colours):
        where = f"colors[{i}]"
        if not isinstance(row, dict):
            raise ValueError(f"{where}: expected an object")
        entries.append(
            (
                _require(row, "id", where),
                _require(row, "name", where),
                _require(row, "hex", where),
                _require(row, "quantity", where),
            )
        )

    water_names = data.get("waterColors", list(WATER_NAMES))
    if not isinstance(water_names, list) or not all(isinstance(n, str) for n in water_names):
        raise ValueError("palette config: 'waterColors' must be a list of names")
    palette = build_palette(entries, water_names)

    plate_size = BASE_PLATE_SIZE
    plate_qty: Optional[int] = None
    plates = data.get("basePlates")
    if plates is not None:
        if not isinstance(plates, dict):
            raise ValueError("palette config: 'basePlates' must be an object")
        size = plates.get("size", list(BASE_PLATE_SIZE))
        if (
            not isinstance(size, (list, tuple))
            or len(size) != 2
            or not all(isinstance(v, int) and v > 0 for v in size)
        ):
            raise ValueError(f"basePlates.size must be [w, h] positive ints: {size!r}")
        plate_size = (int(size[0]), int(size[1]))
        qty = plates.get("quantity")
        if qty is not None:
            if isinstance(qty, bool) or not isinstance(qty, int) or qty < 0:
                raise ValueError(f"basePlates.quantity must be a non-negative int: {qty!r}")
            plate_qty = qty

    return PaletteConfig(palette=palette, plate_size=plate_size, plate_quantity=plate_qty)


def load_palette_config(path: Path) -> PaletteConfig:
    """Read and validate a dotmaps.config.json style file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON ({e})") from None
    return parse_palette_config(data)


__all__ = [
    "PaletteConfig",
    "build_palette",
    "default_palette",
    "parse_palette_config",
    "load_palette_config",
]
