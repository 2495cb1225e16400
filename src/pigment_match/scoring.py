from __future__ import annotations

import math
from dataclasses import dataclass

from .colorspace import RGB, Lab, rgb_to_lab

SCORE_PER_DISTANCE = 2.3

# (minimum score, label), checked top-down
SCORE_CATEGORIES: tuple[tuple[int, str], ...] = (
    (95, "Perfect!"),
    (85, "Excellent"),
    (75, "Good"),
    (60, "Fair"),
    (40, "Close"),
)


@dataclass(frozen=True)
class ScoreResult:
    score: int
    distance: float


def color_distance(lab1: Lab, lab2: Lab, kL: float = 1.0, kC: float = 1.0, kH: float = 1.0) -> float:
    """ΔE between two Lab colours.

    Lightness, chroma and hue differences are each divided by a weighting
    term before the Euclidean sum: ``SL`` is the CIEDE2000 lightness
    compensation, ``SC``/``SH`` are linear in mean chroma (CIE94 style).
    Hue rotation is not applied.
    """
    dL = lab2.L - lab1.L
    c1 = math.hypot(lab1.a, lab1.b)
    c2 = math.hypot(lab2.a, lab2.b)
    dC = c2 - c1
    dE_ab2 = (lab2.a - lab1.a) ** 2 + (lab2.b - lab1.b) ** 2
    dH = math.sqrt(max(0.0, dE_ab2 - dC * dC))

    l_bar = (lab1.L + lab2.L) / 2.0
    c_bar = (c1 + c2) / 2.0

    sl = 1.0 + 0.015 * (l_bar - 50.0) ** 2 / math.sqrt(20.0 + (l_bar - 50.0) ** 2)
    sc = 1.0 + 0.045 * c_bar
    sh = 1.0 + 0.015 * c_bar

    return math.sqrt((dL / (kL * sl)) ** 2 + (dC / (kC * sc)) ** 2 + (dH / (kH * sh)) ** 2)


def score_from_distance(distance: float) -> int:
    raw = min(100.0, max(0.0, 100.0 - distance * SCORE_PER_DISTANCE))
    return int(math.floor(raw + 0.5))


def calculate_color_score(target: RGB, mixed: RGB) -> ScoreResult:
    distance = color_distance(rgb_to_lab(target), rgb_to_lab(mixed))
    return ScoreResult(score=score_from_distance(distance), distance=distance)


def score_category(score: int) -> str:
    for threshold, label in SCORE_CATEGORIES:
        if score >= threshold:
            return label
    return "Try Again"


__all__ = [
    "SCORE_PER_DISTANCE",
    "ScoreResult",
    "color_distance",
    "score_from_distance",
    "calculate_color_score",
    "score_category",
]
