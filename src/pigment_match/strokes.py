from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .errors import InvalidInputError

DENSITY_FACTOR = 0.1
PX_TO_ML = 0.01

PILE_THICKNESS_MM = 2.0
PILE_DENSITY = 0.8
PILE_MIN_RADIUS = 8.0


@dataclass(frozen=True)
class StrokePoint:
    x: float
    y: float
    pressure: Optional[float] = None


@dataclass(frozen=True)
class Stroke:
    pigment_id: str
    volume: float  # mL

    def __post_init__(self) -> None:
        v = float(self.volume)
        if not math.isfinite(v) or v < 0.0:
            raise InvalidInputError(f"stroke volume must be a finite value ≥ 0, got {self.volume!r}")
        object.__setattr__(self, "volume", v)


def stroke_volume(points: Sequence[StrokePoint], brush_radius: float) -> float:
    """Paint laid down by a brush path, in mL.

    Swept area (path length × π r²) scaled by mean pen pressure; points
    without a pressure reading count as 1.
    """
    if brush_radius < 0:
        raise InvalidInputError(f"brush radius must be ≥ 0, got {brush_radius}")
    if not points:
        return 0.0

    xy = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    length = float(np.hypot(*np.diff(xy, axis=0).T).sum()) if len(points) > 1 else 0.0
    pressure = np.array(
        [1.0 if not p.pressure else p.pressure for p in points], dtype=np.float64
    ).mean()
    return float(DENSITY_FACTOR * math.pi * brush_radius**2 * length * pressure * PX_TO_ML)


def pile_radius(total_volume: float) -> float:
    """Radius of the mixed paint pile drawn for ``total_volume`` mL."""
    if total_volume <= 0:
        return 0.0
    r = math.sqrt(total_volume * 1000.0 / (math.pi * PILE_THICKNESS_MM * PILE_DENSITY))
    return max(r, PILE_MIN_RADIUS)


__all__ = ["StrokePoint", "Stroke", "stroke_volume", "pile_radius"]
