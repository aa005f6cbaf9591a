# dotmap/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics in HSL.

Exports:
  rgb_to_hsl(r, g, b)
  hsl_distance(h1, s1, l1, h2, s2, l2)
  is_near_achromatic(s, l)
  chromatic_match(r, g, b, candidates, saturation_boost)

Land cells are matched on hue first: map imagery is muted compared to the
physical palette, so source saturation is boosted before comparing.
"""

from typing import Sequence

from .constants import (
    ACHROMATIC_S,
    MATCH_W_HUE,
    MATCH_W_LIGHT,
    MATCH_W_SAT,
    NEUTRAL_SWATCH_PEN,
    NEUTRAL_SWATCH_S,
    PALE_L,
    PALE_S,
    SAT_BOOST_DEFAULT,
)
from .core_types import HSLTuple, PaletteColour, hue_difference_degrees


# RGB to HSL


def rgb_to_hsl(r: float, g: float, b: float) -> HSLTuple:
    """
    RGB in [0,255] to (hue [0,360), saturation [0,1], lightness [0,1]).
    Grey input (max == min) has hue 0 and saturation 0.
    """
    r /= 255.0
    g /= 255.0
    b /= 255.0
    mx = max(r, g, b)
    mn = min(r, g, b)
    light = (mx + mn) / 2.0

    if mx == mn:
        return (0.0, 0.0, light)

    d = mx - mn
    sat = d / (2.0 - mx - mn) if light > 0.5 else d / (mx + mn)

    if mx == r:
        hue = ((g - b) / d + (6.0 if g < b else 0.0)) / 6.0
    elif mx == g:
        hue = ((b - r) / d + 2.0) / 6.0
    else:
        hue = ((r - g) / d + 4.0) / 6.0

    return (hue * 360.0, sat, light)


# Distances


def hsl_distance(
    h1: float, s1: float, l1: float, h2: float, s2: float, l2: float
) -> float:
    """
    HSL distance with hue weighted by mean saturation.

    Hue difference is wrapped and normalised by 180, so two greys differ
    only in saturation and lightness.
    """
    dh = hue_difference_degrees(h1, h2) / 180.0
    ds = s1 - s2
    dl = l1 - l2
    avg_s = (s1 + s2) / 2.0
    return dh * dh * avg_s + ds * ds + dl * dl


def is_near_achromatic(sat: float, light: float) -> bool:
    """Grey, or barely tinted and very light."""
    return sat < ACHROMATIC_S or (sat < PALE_S and light > PALE_L)


def chromatic_match(
    r: float,
    g: float,
    b: float,
    candidates: Sequence[PaletteColour],
    saturation_boost: float = SAT_BOOST_DEFAULT,
) -> PaletteColour:
    """
    Pick the closest candidate for one pixel.

    Near-achromatic pixels use normalised RGB Euclidean distance. Chromatic
    pixels have their saturation boosted, then compare on hue first with a
    penalty against neutral swatches. Ties keep the earliest candidate.
    """
    if not candidates:
        raise ValueError("chromatic_match needs at least one candidate")

    h, s, l = rgb_to_hsl(r, g, b)
    achromatic = is_near_achromatic(s, l)
    boosted_s = min(1.0, s * saturation_boost)

    best = candidates[0]
    best_dist = float("inf")
    for pc in candidates:
        if achromatic:
            pr, pg, pb = pc.rgb
            dist = ((r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2) / (255 * 255 * 3)
        else:
            ph, ps, pl = pc.hsl
            dh = hue_difference_degrees(h, ph) / 180.0
            dl = l - pl
            ds = boosted_s - ps
            dist = dh * dh * MATCH_W_HUE + dl * dl * MATCH_W_LIGHT + ds * ds * MATCH_W_SAT
            if ps < NEUTRAL_SWATCH_S:
                dist += s * s * NEUTRAL_SWATCH_PEN

        if dist < best_dist:
            best_dist = dist
            best = pc
    return best


__all__ = [
    "rgb_to_hsl",
    "hsl_distance",
    "is_near_achromatic",
    "chromatic_match",
]
