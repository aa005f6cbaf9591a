# dotmap/distance.py
from __future__ import annotations

"""
Grid distance fields.

distance_field: multi-source BFS over 4-connected cells. Every cell whose mask
value equals the target is a source at distance 0; others get the minimum
number of unit steps to any source, or UNREACHED when there is none.

border_distance: min(x, y, w-1-x, h-1-y), computed directly.
"""

from collections import deque
from typing import Deque, Optional, Tuple

import numpy as np

from .core_types import BoolMask, Field

UNREACHED = np.inf

_STEPS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def distance_field(mask: BoolMask, target: bool) -> Field:
    """Steps from each cell to the nearest cell where mask == target."""
    m = np.asarray(mask, dtype=bool)
    if m.ndim != 2:
        raise ValueError("mask must be 2-D")
    rows, cols = m.shape
    dist = np.full((rows, cols), UNREACHED, dtype=np.float32)

    q: Deque[Tuple[int, int]] = deque()
    ys, xs = np.nonzero(m == bool(target))
    for r, c in zip(ys.tolist(), xs.tolist()):
        dist[r, c] = 0.0
        q.append((r, c))

    while q:
        r, c = q.popleft()
        nd = dist[r, c] + 1.0
        for dr, dc in _STEPS:
            rr, cc = r + dr, c + dc
            if 0 <= rr < rows and 0 <= cc < cols and nd < dist[rr, cc]:
                dist[rr, cc] = nd
                q.append((rr, cc))
    return dist


def border_distance(width: int, height: int) -> Field:
    """Distance of each cell to the nearest grid edge, [height, width]."""
    xs = np.arange(width, dtype=np.float32)[None, :]
    ys = np.arange(height, dtype=np.float32)[:, None]
    return np.minimum(
        np.minimum(xs, (width - 1) - xs), np.minimum(ys, (height - 1) - ys)
    ).astype(np.float32)


def field_max(values: Field, where: Optional[BoolMask] = None) -> float:
    """
    Largest finite value (optionally only where the mask is set), clamped to
    at least 1 so it is always a safe divisor.
    """
    v = values if where is None else values[where]
    finite = v[np.isfinite(v)]
    if finite.size == 0:
        return 1.0
    return max(1.0, float(finite.max()))


def normalise_distance(values: Field, divisor: float) -> np.ndarray:
    """values / divisor as float64, with UNREACHED mapped to 1.0."""
    out = values.astype(np.float64) / divisor
    out[~np.isfinite(values)] = 1.0
    return out


__all__ = [
    "UNREACHED",
    "distance_field",
    "border_distance",
    "field_max",
    "normalise_distance",
]
