from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Sequence

from .colorspace import RGB


@dataclass(frozen=True)
class Target:
    rgb: RGB
    name: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "rgb": {"r": self.rgb.r, "g": self.rgb.g, "b": self.rgb.b},
            "hex": self.rgb.to_hex(),
        }


TARGET_COLORS: tuple[Target, ...] = (
    Target(RGB(139, 90, 60), "Burnt Sienna Tint"),
    Target(RGB(155, 173, 157), "Sage Green"),
    Target(RGB(188, 143, 143), "Dusty Rose"),
    Target(RGB(128, 118, 105), "Warm Gray"),
    Target(RGB(108, 91, 123), "Muted Purple"),
    Target(RGB(107, 142, 35), "Olive Drab"),
    Target(RGB(255, 127, 80), "Coral Pink"),
    Target(RGB(70, 130, 180), "Steel Blue"),
    Target(RGB(204, 78, 92), "Terracotta"),
    Target(RGB(85, 107, 47), "Forest Shadow"),
)


def random_target(
    rng: Optional[random.Random] = None, targets: Sequence[Target] = TARGET_COLORS
) -> Target:
    return (rng or random).choice(targets)


__all__ = ["Target", "TARGET_COLORS", "random_target"]
