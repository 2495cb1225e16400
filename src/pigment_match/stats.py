from __future__ import annotations

import math
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Sequence

from .colorspace import RGB

HISTORY_LIMIT = 10


@dataclass(frozen=True)
class SessionStats:
    attempts: int = 0
    total_score: int = 0
    average_score: int = 0
    best_score: int = 0
    games_played: int = 0

    def record(self, score: int) -> "SessionStats":
        attempts = self.attempts + 1
        total = self.total_score + score
        return SessionStats(
            attempts=attempts,
            total_score=total,
            average_score=int(math.floor(total / attempts + 0.5)),
            best_score=max(self.best_score, score),
            games_played=self.games_played + 1,
        )

    def to_dict(self) -> dict:
        return {
            "attempts": self.attempts,
            "totalScore": self.total_score,
            "averageScore": self.average_score,
            "bestScore": self.best_score,
            "gamesPlayed": self.games_played,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionStats":
        return cls(
            attempts=int(data.get("attempts", 0)),
            total_score=int(data.get("totalScore", 0)),
            average_score=int(data.get("averageScore", 0)),
            best_score=int(data.get("bestScore", 0)),
            games_played=int(data.get("gamesPlayed", 0)),
        )


def _rgb_dict(rgb: RGB) -> dict:
    return {"r": rgb.r, "g": rgb.g, "b": rgb.b}


def _rgb_from(data: Mapping[str, Any]) -> RGB:
    return RGB(int(data["r"]), int(data["g"]), int(data["b"]))


@dataclass(frozen=True)
class MatchResult:
    target_color: RGB
    target_name: str
    mixed_color: RGB
    score: int
    distance: float
    pigments_used: Mapping[str, float]
    timestamp: float = field(default_factory=time.time)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "targetColor": _rgb_dict(self.target_color),
            "targetName": self.target_name,
            "mixedColor": _rgb_dict(self.mixed_color),
            "score": self.score,
            "deltaE": self.distance,
            # milliseconds, like Date.now() on the client
            "timestamp": int(self.timestamp * 1000),
            "pigmentsUsed": dict(self.pigments_used),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchResult":
        return cls(
            target_color=_rgb_from(data["targetColor"]),
            target_name=str(data["targetName"]),
            mixed_color=_rgb_from(data["mixedColor"]),
            score=int(data["score"]),
            distance=float(data["deltaE"]),
            pigments_used={str(k): float(v) for k, v in data.get("pigmentsUsed", {}).items()},
            timestamp=float(data["timestamp"]) / 1000.0,
            id=str(data["id"]),
        )


@dataclass(frozen=True)
class MatchHistory:
    """Most recent matches first, capped at ``limit`` entries."""

    matches: tuple[MatchResult, ...] = ()
    limit: int = HISTORY_LIMIT

    def add(self, match: MatchResult) -> "MatchHistory":
        return replace(self, matches=((match,) + self.matches)[: self.limit])

    def __len__(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict:
        return {"matches": [m.to_dict() for m in self.matches]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], limit: int = HISTORY_LIMIT) -> "MatchHistory":
        matches: Sequence[Mapping[str, Any]] = data.get("matches", [])
        return cls(tuple(MatchResult.from_dict(m) for m in matches[:limit]), limit)


def best_match(history: MatchHistory) -> Optional[MatchResult]:
    if not history.matches:
        return None
    return max(history.matches, key=lambda m: m.score)


__all__ = ["SessionStats", "MatchResult", "MatchHistory", "HISTORY_LIMIT", "best_match"]
