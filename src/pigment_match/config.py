from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .errors import InvalidInputError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    v = str(value).strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise InvalidInputError(f"{key} must be a boolean, got {value!r}")


def _as_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{key} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class GameConfig:
    catalog: str = "default"
    reset_on_new_target: bool = True
    # False: painting may continue after a mix and the result goes stale.
    # True: the session stays in review until clear/new target.
    lock_after_mix: bool = False
    history_limit: int = 10
    seed: Optional[int] = None
    stats_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.history_limit < 1:
            raise InvalidInputError(f"history_limit must be ≥ 1, got {self.history_limit}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GameConfig":
        """Read upper-case keys (``LOCK_AFTER_MIX``...) as found in a Flask config."""
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            key = f.name.upper()
            if key not in mapping or mapping[key] is None:
                continue
            value = mapping[key]
            if f.name in ("reset_on_new_target", "lock_after_mix"):
                kwargs[f.name] = _as_bool(key, value)
            elif f.name in ("history_limit", "seed"):
                kwargs[f.name] = _as_int(key, value)
            else:
                kwargs[f.name] = str(value)
        return cls(**kwargs)


__all__ = ["GameConfig"]
