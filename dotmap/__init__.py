# dotmap/__init__.py
"""
dotmap package.

Purpose:
  Turn map images into dot-art grids using a small physical palette with a
  limited supply of each colour. See render_dotmap.py for the CLI.

Public API:
  synthesize        : image -> grid (water gradient + land matching).
  limit_quantities  : rework a grid so colour usage fits supply.
  RenderOptions     : immutable render sliders.
  build_palette     : validated palette from (id, name, hex, quantity) rows.
  default_palette   : built-in palette.
  load_palette_config: palette from a dotmaps.config.json file.
  colour_convert    : HSL conversion and colour distances.
  classify          : water/land classification.
  distance          : BFS distance fields.
  grid_ops          : parts lists, base plates, JSON persistence.
  utils             : shared helpers (formatting, logging).

Quick start:
  from dotmap import synthesize, limit_quantities, default_palette
  from dotmap.image_io import load_image_rgba

  pal = default_palette()
  grid = synthesize(load_image_rgba(path), 48, 48, pal)
  grid = limit_quantities(grid, pal)
"""

__version__ = "0.2.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import classify
from . import distance
from . import grid_ops
from . import palette_data
from . import utils

from .core_types import Grid, Palette, PaletteColour  # noqa: E402,F401
from .limit import limit_quantities  # noqa: E402,F401
from .options import RenderOptions  # noqa: E402,F401
from .palette_data import (  # noqa: E402,F401
    build_palette,
    default_palette,
    load_palette_config,
)
from .synthesize import synthesize  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "classify",
    "distance",
    "grid_ops",
    "palette_data",
    "utils",
    "Grid",
    "Palette",
    "PaletteColour",
    "RenderOptions",
    "build_palette",
    "default_palette",
    "load_palette_config",
    "limit_quantities",
    "synthesize",
]
