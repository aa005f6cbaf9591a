# dotmap/constants.py
"""
Default palette and tunables used across the project.

- DEFAULT_PALETTE, WATER_NAMES, BASE_PLATE_SIZE
- Water classification thresholds (WATER_*)
- Land matching weights (MATCH_*)
- Water gradient and limiter priority weights
"""
from __future__ import annotations

from typing import List, Tuple

# =====================================
# Default palette (id, name, hex, qty)
# =====================================
DEFAULT_PALETTE: List[Tuple[int, str, str, int]] = [
    (1, "black", "#05131d", 2500),
    (2, "dark blue", "#0a3463", 600),
    (3, "turquoise", "#008f9b", 450),
    (4, "light blue", "#9fc3e9", 450),
    (5, "white", "#ffffff", 300),
    (6, "bright red", "#cb1220", 150),
    (7, "bright orange", "#fe8a18", 150),
    (8, "bright yellow", "#fac80a", 200),
    (9, "tan", "#e4cd9e", 300),
    (10, "medium nougat", "#aa7d55", 200),
    (11, "reddish brown", "#582a12", 200),
    (12, "lime", "#bbe90b", 200),
    (13, "green", "#237841", 300),
    (14, "sand green", "#a0bcac", 300),
    (15, "olive green", "#9b9a5a", 200),
    (16, "light bluish gray", "#a0a5a9", 200),
    (17, "dark bluish gray", "#6c6e68", 200),
    (18, "bright pink", "#e4adc8", 100),
    (19, "medium lavender", "#ac78ba", 100),
]

# Water gradient stops, darkest to lightest.
WATER_NAMES: Tuple[str, ...] = ("black", "dark blue", "turquoise", "light blue")
GRADIENT_STOPS: int = 4

# Base plate footprint in cells (width, height).
BASE_PLATE_SIZE: Tuple[int, int] = (16, 16)

# Default editor grid.
DEFAULT_GRID_WIDTH: int = 48
DEFAULT_GRID_HEIGHT: int = 48

# ===========================
# Water classification (HSL)
# ===========================
WATER_DARK_L: float = 0.15
WATER_HUE_MIN: float = 170.0
WATER_HUE_MAX: float = 260.0
WATER_SAT_BASE: float = 0.15
WATER_SAT_LIGHT_SLOPE: float = 0.8
WATER_SAT_LIGHT_PIVOT: float = 0.5
WATER_MUTED_L_MAX: float = 0.45
WATER_MUTED_S_MAX: float = 0.2

# Per unit of sensitivity shift k in [-1, 1].
SENS_DARK_L: float = 0.10
SENS_HUE_WIDEN: float = 15.0
SENS_SAT_BASE: float = 0.10
SENS_MUTED_L: float = 0.15
SENS_MUTED_S: float = 0.10

# ====================
# Land colour matching
# ====================
ACHROMATIC_S: float = 0.08
PALE_S: float = 0.25
PALE_L: float = 0.75
MATCH_W_HUE: float = 3.0
MATCH_W_LIGHT: float = 0.5
MATCH_W_SAT: float = 0.15
NEUTRAL_SWATCH_S: float = 0.15
NEUTRAL_SWATCH_PEN: float = 8.0
SAT_BOOST_DEFAULT: float = 2.5

# ================
# Limiter priority
# ================
PRIORITY_JITTER: float = 0.0001
MID_BAND_TARGET: float = 0.35
SHALLOW_LAND_W: float = 0.85
SHALLOW_EDGE_W: float = 0.15
DEEP_LAND_W: float = 0.7
DEEP_EDGE_W: float = 0.3

__all__ = [
    "DEFAULT_PALETTE",
    "WATER_NAMES",
    "GRADIENT_STOPS",
    "BASE_PLATE_SIZE",
    "DEFAULT_GRID_WIDTH",
    "DEFAULT_GRID_HEIGHT",
    "WATER_DARK_L",
    "WATER_HUE_MIN",
    "WATER_HUE_MAX",
    "WATER_SAT_BASE",
    "WATER_SAT_LIGHT_SLOPE",
    "WATER_SAT_LIGHT_PIVOT",
    "WATER_MUTED_L_MAX",
    "WATER_MUTED_S_MAX",
    "SENS_DARK_L",
    "SENS_HUE_WIDEN",
    "SENS_SAT_BASE",
    "SENS_MUTED_L",
    "SENS_MUTED_S",
    "ACHROMATIC_S",
    "PALE_S",
    "PALE_L",
    "MATCH_W_HUE",
    "MATCH_W_LIGHT",
    "MATCH_W_SAT",
    "NEUTRAL_SWATCH_S",
    "NEUTRAL_SWATCH_PEN",
    "SAT_BOOST_DEFAULT",
    "PRIORITY_JITTER",
    "MID_BAND_TARGET",
    "SHALLOW_LAND_W",
    "SHALLOW_EDGE_W",
    "DEEP_LAND_W",
    "DEEP_EDGE_W",
]
