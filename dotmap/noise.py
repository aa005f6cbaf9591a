# dotmap/noise.py
from __future__ import annotations

"""
Deterministic 2D hash noise.

hash2d(x, y) mixes integer coordinates with 32-bit multiply/xor-shift rounds,
so the field looks like white noise: no axis or diagonal stripes. Used for
dither thresholds and for tie-breaking priorities.
"""

import numpy as np

_MASK32 = 0xFFFFFFFF
_K_X = 374761393
_K_Y = 668265263
_K_MIX = 1274126177
_SCALE = float(1 << 31)


def hash2d(x: int, y: int) -> float:
    """Pseudo-random value in [0, 1) for integer coordinates. Pure."""
    h = (int(x) * _K_X + int(y) * _K_Y) & _MASK32
    h = ((h ^ (h >> 13)) * _K_MIX) & _MASK32
    h ^= h >> 16
    return (h & 0x7FFFFFFF) / _SCALE


def hash_field(width: int, height: int) -> np.ndarray:
    """
    hash2d over a whole grid as float64 [height, width], indexed [y, x].
    Matches hash2d exactly; uint64 holds the 32-bit products without overflow.
    """
    xs = np.arange(width, dtype=np.uint64)[None, :]
    ys = np.arange(height, dtype=np.uint64)[:, None]
    m = np.uint64(_MASK32)
    h = (xs * np.uint64(_K_X) + ys * np.uint64(_K_Y)) & m
    h = ((h ^ (h >> np.uint64(13))) * np.uint64(_K_MIX)) & m
    h ^= h >> np.uint64(16)
    return (h & np.uint64(0x7FFFFFFF)).astype(np.float64) / _SCALE


__all__ = ["hash2d", "hash_field"]
