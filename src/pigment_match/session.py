from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import Mapping, Optional

from .colorspace import RGB, OKLab, oklab_to_rgb
from .config import GameConfig
from .errors import SessionStateError, UnknownPigmentError
from .mixing import DEFAULT_MIXER, SubtractiveMixer, WeightedColor
from .pigments import PigmentCatalog, get_catalog
from .scoring import calculate_color_score, score_category
from .stats import MatchHistory, MatchResult, SessionStats
from .storage import MemoryStore, StatsStore
from .strokes import Stroke, pile_radius
from .targets import Target, random_target

log = logging.getLogger(__name__)


class GamePhase(str, enum.Enum):
    PAINTING = "painting"
    MIXED = "mixed"


class SessionAccumulator:
    """Per-pigment paint volumes plus the stroke log used for undo.

    Amounts only ever hold strictly positive volumes; a pigment whose total
    reaches zero is dropped on the spot.
    """

    def __init__(self) -> None:
        self._strokes: list[Stroke] = []
        self._amounts: dict[str, float] = {}

    def add(self, stroke: Stroke) -> None:
        self._strokes.append(stroke)
        if stroke.volume > 0.0:
            pid = stroke.pigment_id
            self._amounts[pid] = self._amounts.get(pid, 0.0) + stroke.volume

    def undo(self) -> Optional[Stroke]:
        if not self._strokes:
            return None
        stroke = self._strokes.pop()
        pid = stroke.pigment_id
        if pid in self._amounts:
            # re-sum instead of subtracting so the amount is bit-identical
            # to what it was before the stroke
            remaining = 0.0
            for s in self._strokes:
                if s.pigment_id == pid:
                    remaining += s.volume
            if remaining > 0.0:
                self._amounts[pid] = remaining
            else:
                del self._amounts[pid]
        return stroke

    def clear(self) -> None:
        self._strokes.clear()
        self._amounts.clear()

    @property
    def amounts(self) -> dict[str, float]:
        return dict(self._amounts)

    @property
    def total(self) -> float:
        return sum(self._amounts.values())

    @property
    def strokes(self) -> tuple[Stroke, ...]:
        return tuple(self._strokes)

    def __len__(self) -> int:
        return len(self._strokes)

    def __bool__(self) -> bool:
        return bool(self._amounts)


@dataclass(frozen=True)
class MixResult:
    rgb: RGB
    oklab: OKLab
    score: int
    distance: float

    def to_dict(self) -> dict:
        return {
            "rgb": {"r": self.rgb.r, "g": self.rgb.g, "b": self.rgb.b},
            "hex": self.rgb.to_hex(),
            "oklab": {"L": self.oklab.L, "a": self.oklab.a, "b": self.oklab.b},
            "score": self.score,
            "deltaE": self.distance,
            "category": score_category(self.score),
        }


class GameSession:
    """One player's round: target, paint on the palette, result, statistics."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        catalog: Optional[PigmentCatalog] = None,
        store: Optional[StatsStore] = None,
        mixer: SubtractiveMixer = DEFAULT_MIXER,
        rng: Optional[random.Random] = None,
        target: Optional[Target] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.catalog = catalog or get_catalog(self.config.catalog)
        self.store = store or MemoryStore(self.config.history_limit)
        self.mixer = mixer
        self.rng = rng or random.Random(self.config.seed)

        self.target = target or random_target(self.rng)
        self.accumulator = SessionAccumulator()
        self.phase = GamePhase.PAINTING
        self.result: Optional[MixResult] = None
        self.result_stale = False

        limit = self.config.history_limit
        self.stats = self.store.load_stats()
        self.history = MatchHistory(self.store.load_history().matches[:limit], limit)

    # ---- painting ----

    def _check_unlocked(self, action: str) -> None:
        if self.config.lock_after_mix and self.phase is GamePhase.MIXED:
            raise SessionStateError(f"cannot {action} while reviewing a mix; clear or pick a new target")

    def _touch(self) -> None:
        if self.result is not None:
            self.result_stale = True
        self.phase = GamePhase.PAINTING

    def add_stroke(self, pigment_id: str, volume: float) -> Stroke:
        self._check_unlocked("paint")
        stroke = Stroke(pigment_id, volume)
        if pigment_id not in self.catalog:
            raise UnknownPigmentError(pigment_id)
        self.accumulator.add(stroke)
        self._touch()
        log.debug("stroke %s %.4f mL (total %.4f)", pigment_id, stroke.volume, self.total_volume)
        return stroke

    def undo(self) -> Optional[Stroke]:
        self._check_unlocked("undo")
        stroke = self.accumulator.undo()
        if stroke is not None:
            self._touch()
        return stroke

    def clear(self) -> None:
        self.accumulator.clear()
        self.result = None
        self.result_stale = False
        self.phase = GamePhase.PAINTING

    @property
    def amounts(self) -> Mapping[str, float]:
        return self.accumulator.amounts

    @property
    def total_volume(self) -> float:
        return self.accumulator.total

    # ---- scoring ----

    def mix(self) -> Optional[MixResult]:
        """Blend everything on the palette and score it against the target.

        Returns ``None`` without touching any state when there is no paint.
        """
        amounts = self.accumulator.amounts
        if not amounts:
            log.debug("mix requested with an empty palette")
            return None

        colors = [WeightedColor(self.catalog.get(pid).colorant, amt) for pid, amt in amounts.items()]
        oklab = self.mixer.mix(colors)
        rgb = oklab_to_rgb(oklab)
        scored = calculate_color_score(self.target.rgb, rgb)

        self.result = MixResult(rgb=rgb, oklab=oklab, score=scored.score, distance=scored.distance)
        self.result_stale = False
        self.phase = GamePhase.MIXED

        self.stats = self.stats.record(scored.score)
        self.history = self.history.add(
            MatchResult(
                target_color=self.target.rgb,
                target_name=self.target.name,
                mixed_color=rgb,
                score=scored.score,
                distance=scored.distance,
                pigments_used=amounts,
            )
        )
        self._persist()
        log.info(
            "mixed %s for %r: score %d (ΔE %.2f)",
            rgb.to_hex(), self.target.name, scored.score, scored.distance,
        )
        return self.result

    def _persist(self) -> None:
        try:
            self.store.save_stats(self.stats)
            self.store.save_history(self.history)
        except Exception:
            log.exception("Failed to persist session stats")

    # ---- round control ----

    def new_target(self) -> Target:
        self.target = random_target(self.rng)
        if self.config.reset_on_new_target:
            self.clear()
        else:
            self._touch()
        log.info("new target %r %s", self.target.name, self.target.rgb.to_hex())
        return self.target

    def reset(self) -> None:
        self.clear()
        self.target = random_target(self.rng)

    def reset_stats(self) -> None:
        self.stats = SessionStats()
        self.history = MatchHistory(limit=self.config.history_limit)
        try:
            self.store.clear()
        except Exception:
            log.exception("Failed to clear stored session stats")

    def to_dict(self) -> dict:
        return {
            "target": self.target.to_dict(),
            "phase": self.phase.value,
            "amounts": self.accumulator.amounts,
            "totalAmount": self.total_volume,
            "pileRadius": pile_radius(self.total_volume),
            "strokes": len(self.accumulator),
            "result": self.result.to_dict() if self.result else None,
            "resultStale": self.result_stale,
        }


__all__ = ["GamePhase", "SessionAccumulator", "MixResult", "GameSession"]
