from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from .stats import HISTORY_LIMIT, MatchHistory, SessionStats

log = logging.getLogger(__name__)


class StatsStore:
    """Where session statistics and match history live between rounds.

    Writes are best effort: implementations log failures instead of raising
    so a broken store never fails the mix that produced the numbers.
    """

    def load_stats(self) -> SessionStats:
        raise NotImplementedError

    def save_stats(self, stats: SessionStats) -> None:
        raise NotImplementedError

    def load_history(self) -> MatchHistory:
        raise NotImplementedError

    def save_history(self, history: MatchHistory) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemoryStore(StatsStore):
    def __init__(self, history_limit: int = HISTORY_LIMIT) -> None:
        self._stats = SessionStats()
        self._history = MatchHistory(limit=history_limit)

    def load_stats(self) -> SessionStats:
        return self._stats

    def save_stats(self, stats: SessionStats) -> None:
        self._stats = stats

    def load_history(self) -> MatchHistory:
        return self._history

    def save_history(self, history: MatchHistory) -> None:
        self._history = history

    def clear(self) -> None:
        self._stats = SessionStats()
        self._history = MatchHistory(limit=self._history.limit)


class JsonFileStore(StatsStore):
    """One JSON document ``{"stats": ..., "history": ...}`` on disk."""

    def __init__(self, path: Union[str, os.PathLike], history_limit: int = HISTORY_LIMIT) -> None:
        self.path = Path(path)
        self.history_limit = history_limit

    def _read(self) -> dict:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            log.error("Failed to load session stats from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            log.error("Ignoring malformed stats file %s", self.path)
            return {}
        return data

    def _write(self, key: str, value: dict) -> None:
        data = self._read()
        data[key] = value
        tmp = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".stats-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp, self.path)
        except OSError as exc:
            log.warning("Failed to save %s to %s: %s", key, self.path, exc)
            if tmp is not None and os.path.exists(tmp):
                os.unlink(tmp)

    def load_stats(self) -> SessionStats:
        raw = self._read().get("stats")
        if not raw:
            return SessionStats()
        try:
            return SessionStats.from_dict(raw)
        except (TypeError, ValueError, AttributeError) as exc:
            log.error("Discarding unreadable stats in %s: %s", self.path, exc)
            return SessionStats()

    def save_stats(self, stats: SessionStats) -> None:
        self._write("stats", stats.to_dict())

    def load_history(self) -> MatchHistory:
        raw = self._read().get("history")
        if not raw:
            return MatchHistory(limit=self.history_limit)
        try:
            return MatchHistory.from_dict(raw, limit=self.history_limit)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            log.error("Discarding unreadable match history in %s: %s", self.path, exc)
            return MatchHistory(limit=self.history_limit)

    def save_history(self, history: MatchHistory) -> None:
        self._write("history", history.to_dict())

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            log.warning("Failed to clear %s: %s", self.path, exc)


__all__ = ["StatsStore", "MemoryStore", "JsonFileStore"]
