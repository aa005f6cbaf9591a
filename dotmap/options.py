# dotmap/options.py
from __future__ import annotations

"""
Render options.

All fields are 0..100 sliders except include_black_in_water. RenderOptions()
reproduces the base algorithm exactly: every derived weight is computed from
the integer slider value so defaults land on the same floats as the literals
(0.7, 0.3, 2.5, bias 0.0).
"""

from dataclasses import dataclass
from typing import Tuple

from .classify import WaterThresholds
from .core_types import Palette, PaletteColour


def _check_slider(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number in 0..100, got {value!r}")
    if not 0 <= value <= 100:
        raise ValueError(f"{name} must be in 0..100, got {value!r}")


@dataclass(frozen=True)
class RenderOptions:
    water_depth: int = 50
    include_black_in_water: bool = True
    colour_vibrancy: int = 60
    coastline_width: int = 70
    water_sensitivity: int = 50

    def __post_init__(self) -> None:
        _check_slider("water_depth", self.water_depth)
        _check_slider("colour_vibrancy", self.colour_vibrancy)
        _check_slider("coastline_width", self.coastline_width)
        _check_slider("water_sensitivity", self.water_sensitivity)

    @property
    def depth_bias(self) -> float:
        """Added to the blend scalar; deeper water means darker stops."""
        return (50 - self.water_depth) / 100

    @property
    def saturation_boost(self) -> float:
        return 1.0 + self.colour_vibrancy * 2.5 / 100

    @property
    def coastline_weight(self) -> float:
        return self.coastline_width / 100

    @property
    def inland_weight(self) -> float:
        return (100 - self.coastline_width) / 100

    @property
    def water_thresholds(self) -> WaterThresholds:
        return WaterThresholds.from_sensitivity(self.water_sensitivity)

    def water_gradient(self, palette: Palette) -> Tuple[PaletteColour, ...]:
        """Four gradient stops, darkest first."""
        black, dark, mid, light = palette.water
        if self.include_black_in_water:
            return (black, dark, mid, light)
        return (dark, dark, mid, light)


DEFAULT_OPTIONS = RenderOptions()

__all__ = ["RenderOptions", "DEFAULT_OPTIONS"]
