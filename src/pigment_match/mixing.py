from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .colorspace import OKLab
from .errors import InvalidInputError

log = logging.getLogger(__name__)

WHITE = OKLab(1.0, 0.0, 0.0)


@dataclass(frozen=True)
class WeightedColor:
    color: OKLab
    weight: float

    def __post_init__(self) -> None:
        w = float(self.weight)
        if not math.isfinite(w) or w < 0.0:
            raise InvalidInputError(f"weight must be a finite value ≥ 0, got {w}")
        object.__setattr__(self, "weight", w)


@dataclass(frozen=True)
class SubtractiveMixer:
    """Volume-weighted OKLab average with a luminance loss per extra pigment.

    The darkening term is a tuned stand-in for real subtractive mixing:
    ``base + min(n / saturation, 1) * extra`` where ``n`` counts pigments with
    a strictly positive weight.
    """

    base_darkening: float = 0.15
    extra_darkening: float = 0.15
    complexity_saturation: int = 3
    lightness_range: tuple[float, float] = (0.05, 1.0)
    chroma_limit: float = 0.5

    def darkening_factor(self, n: int) -> float:
        complexity = min(n / self.complexity_saturation, 1.0)
        return self.base_darkening + complexity * self.extra_darkening

    def mix(self, colors: Iterable[WeightedColor]) -> OKLab:
        colors = list(colors)
        if not colors:
            return WHITE

        weights = np.array([c.weight for c in colors], dtype=np.float64)
        total = weights.sum()
        if total <= 0.0:
            return WHITE

        labs = np.array([c.color.coords() for c in colors], dtype=np.float64)
        L, a, b = (weights[:, None] * labs).sum(axis=0) / total

        n = int(np.count_nonzero(weights > 0.0))
        L *= 1.0 - self.darkening_factor(n)

        lo, hi = self.lightness_range
        lim = self.chroma_limit
        out = OKLab(
            float(np.clip(L, lo, hi)),
            float(np.clip(a, -lim, lim)),
            float(np.clip(b, -lim, lim)),
        )
        log.debug("mixed %d pigment(s), total weight %.3f → %s", n, total, out)
        return out


DEFAULT_MIXER = SubtractiveMixer()


def darkening_factor(n: int) -> float:
    return DEFAULT_MIXER.darkening_factor(n)


def mix_oklab(colors: Iterable[WeightedColor]) -> OKLab:
    return DEFAULT_MIXER.mix(colors)


__all__ = [
    "WHITE",
    "WeightedColor",
    "SubtractiveMixer",
    "DEFAULT_MIXER",
    "darkening_factor",
    "mix_oklab",
]
