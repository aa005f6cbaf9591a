# dotmap/classify.py
from __future__ import annotations

"""
Water / land classification of sampled colours.

Rules, in order (any match means water):
  1) very dark pixels
  2) blue/cyan hue with enough saturation; the bar rises with lightness so
     pale blue-tinted ice and snow stay land
  3) dark, desaturated, blue-leaning tones
"""

from dataclasses import dataclass

import numpy as np

from .colour_convert import rgb_to_hsl
from .constants import (
    SENS_DARK_L,
    SENS_HUE_WIDEN,
    SENS_MUTED_L,
    SENS_MUTED_S,
    SENS_SAT_BASE,
    WATER_DARK_L,
    WATER_HUE_MAX,
    WATER_HUE_MIN,
    WATER_MUTED_L_MAX,
    WATER_MUTED_S_MAX,
    WATER_SAT_BASE,
    WATER_SAT_LIGHT_PIVOT,
    WATER_SAT_LIGHT_SLOPE,
)
from .core_types import BoolMask, CellRGB


@dataclass(frozen=True)
class WaterThresholds:
    dark_l: float = WATER_DARK_L
    hue_min: float = WATER_HUE_MIN
    hue_max: float = WATER_HUE_MAX
    sat_base: float = WATER_SAT_BASE
    sat_light_slope: float = WATER_SAT_LIGHT_SLOPE
    sat_light_pivot: float = WATER_SAT_LIGHT_PIVOT
    muted_l_max: float = WATER_MUTED_L_MAX
    muted_s_max: float = WATER_MUTED_S_MAX

    @classmethod
    def from_sensitivity(cls, sensitivity: int) -> "WaterThresholds":
        """
        Linear in k = (sensitivity - 50) / 50. k == 0 returns the base
        thresholds unchanged; higher sensitivity classifies more water.
        """
        if sensitivity == 50:
            return cls()
        k = (sensitivity - 50) / 50.0
        return cls(
            dark_l=WATER_DARK_L + SENS_DARK_L * k,
            hue_min=WATER_HUE_MIN - SENS_HUE_WIDEN * k,
            hue_max=WATER_HUE_MAX + SENS_HUE_WIDEN * k,
            sat_base=WATER_SAT_BASE - SENS_SAT_BASE * k,
            muted_l_max=WATER_MUTED_L_MAX + SENS_MUTED_L * k,
            muted_s_max=WATER_MUTED_S_MAX + SENS_MUTED_S * k,
        )


DEFAULT_THRESHOLDS = WaterThresholds()


def is_water(
    r: float, g: float, b: float, thresholds: WaterThresholds = DEFAULT_THRESHOLDS
) -> bool:
    """True if the colour reads as water. Depends only on its inputs."""
    t = thresholds
    h, s, l = rgb_to_hsl(r, g, b)
    if l < t.dark_l:
        return True
    if t.hue_min <= h <= t.hue_max and s > t.sat_base + max(
        0.0, l - t.sat_light_pivot
    ) * t.sat_light_slope:
        return True
    if l < t.muted_l_max and s < t.muted_s_max and b > r:
        return True
    return False


def water_mask(
    cell_rgb: CellRGB, thresholds: WaterThresholds = DEFAULT_THRESHOLDS
) -> BoolMask:
    """Classify every cell of a [gh, gw, 3] average-colour array."""
    gh, gw = cell_rgb.shape[0], cell_rgb.shape[1]
    mask = np.zeros((gh, gw), dtype=bool)
    for y in range(gh):
        for x in range(gw):
            r, g, b = cell_rgb[y, x]
            mask[y, x] = is_water(float(r), float(g), float(b), thresholds)
    return mask


__all__ = ["WaterThresholds", "DEFAULT_THRESHOLDS", "is_water", "water_mask"]
