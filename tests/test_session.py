import logging
import random

import pytest

from pigment_match.config import GameConfig
from pigment_match.errors import InvalidInputError, SessionStateError, UnknownPigmentError
from pigment_match.session import GamePhase, GameSession, SessionAccumulator
from pigment_match.stats import SessionStats
from pigment_match.storage import MemoryStore
from pigment_match.strokes import Stroke, pile_radius
from pigment_match.targets import TARGET_COLORS, Target

SAGE = TARGET_COLORS[1]


def make_session(**config):
    return GameSession(GameConfig(seed=1, **config), target=SAGE)


def test_accumulator_prunes_and_totals():
    acc = SessionAccumulator()
    acc.add(Stroke("a", 1.5))
    acc.add(Stroke("b", 0.0))
    acc.add(Stroke("a", 2.0))
    assert acc.amounts == {"a": 3.5}
    assert acc.total == 3.5
    assert len(acc) == 3
    assert acc.undo() == Stroke("a", 2.0)
    assert acc.undo() == Stroke("b", 0.0)
    assert acc.amounts == {"a": 1.5}
    acc.undo()
    assert acc.amounts == {} and acc.total == 0 and not acc
    assert acc.undo() is None


def test_add_then_undo_restores_total_exactly():
    s = make_session()
    s.add_stroke("pw6", 0.1)
    s.add_stroke("py35", 0.7)
    s.add_stroke("pw6", 0.2)
    before_total, before_amounts = s.total_volume, s.amounts
    s.add_stroke("pw6", 5)
    s.undo()
    assert s.total_volume == before_total
    assert s.amounts == before_amounts
    s.add_stroke("pb29", 5)
    s.undo()
    assert s.total_volume == before_total
    assert "pb29" not in s.amounts


def test_undo_on_empty_session_is_noop():
    s = make_session()
    assert s.undo() is None
    assert s.phase is GamePhase.PAINTING


def test_stroke_validation():
    s = make_session()
    with pytest.raises(InvalidInputError):
        s.add_stroke("pw6", -1)
    with pytest.raises(ValueError):
        s.add_stroke("pw6", float("nan"))
    with pytest.raises(UnknownPigmentError):
        s.add_stroke("ghost", 1)
    assert s.total_volume == 0


def test_mix_with_no_paint_is_noop():
    s = make_session()
    assert s.mix() is None
    assert s.stats == SessionStats()
    assert len(s.history) == 0
    assert s.phase is GamePhase.PAINTING


def test_mix_scores_and_records():
    s = make_session()
    s.add_stroke("pw6", 3)
    s.add_stroke("pg7", 1)
    result = s.mix()
    assert result is not None
    assert 0 <= result.score <= 100
    assert result.distance >= 0
    assert s.phase is GamePhase.MIXED
    assert s.stats.attempts == 1 and s.stats.best_score == result.score
    match = s.history.matches[0]
    assert match.target_name == SAGE.name
    assert match.pigments_used == {"pw6": 3.0, "pg7": 1.0}
    assert match.mixed_color == result.rgb


def test_perfect_match_scores_100():
    s = make_session()
    s.add_stroke("py35", 2)
    first = s.mix()
    s.target = Target(first.rgb, "exact")
    again = s.mix()
    assert again.score == 100
    assert again.distance == 0.0


def test_mix_with_desynced_catalog_is_fatal():
    s = make_session()
    s.accumulator.add(Stroke("ghost", 1.0))
    with pytest.raises(UnknownPigmentError):
        s.mix()


def test_painting_after_mix_marks_result_stale():
    s = make_session()
    s.add_stroke("pw6", 1)
    result = s.mix()
    s.add_stroke("pbk9", 1)
    assert s.phase is GamePhase.PAINTING
    assert s.result is result
    assert s.result_stale
    s.mix()
    assert not s.result_stale
    assert s.stats.attempts == 2


def test_lock_after_mix_policy():
    s = make_session(lock_after_mix=True)
    s.add_stroke("pw6", 1)
    s.mix()
    with pytest.raises(SessionStateError):
        s.add_stroke("pw6", 1)
    with pytest.raises(SessionStateError):
        s.undo()
    s.clear()
    assert s.result is None
    s.add_stroke("pw6", 1)
    assert s.phase is GamePhase.PAINTING


def test_clear_resets_palette_and_result():
    s = make_session()
    s.add_stroke("pw6", 1)
    s.mix()
    s.clear()
    assert s.amounts == {} and s.total_volume == 0
    assert s.result is None
    assert s.phase is GamePhase.PAINTING
    assert s.stats.attempts == 1


def test_new_target_resets_by_default():
    s = make_session()
    s.add_stroke("pw6", 1)
    target = s.new_target()
    assert target in TARGET_COLORS
    assert s.total_volume == 0


def test_new_target_can_keep_paint():
    s = make_session(reset_on_new_target=False)
    s.add_stroke("pw6", 1)
    s.mix()
    s.new_target()
    assert s.amounts == {"pw6": 1.0}
    assert s.result_stale
    assert s.phase is GamePhase.PAINTING


def test_seeded_targets_are_reproducible():
    a = GameSession(GameConfig(seed=42))
    b = GameSession(GameConfig(seed=42))
    assert a.target == b.target
    assert [a.new_target() for _ in range(5)] == [b.new_target() for _ in range(5)]


def test_history_is_bounded_newest_first():
    s = make_session(history_limit=3)
    results = []
    for i in range(5):
        s.add_stroke("pw6", 1)
        results.append(s.mix())
    assert len(s.history) == 3
    assert s.history.matches[0].mixed_color == results[-1].rgb
    assert s.stats.attempts == 5


def test_stats_record():
    stats = SessionStats().record(80).record(91)
    assert stats.attempts == 2
    assert stats.total_score == 171
    assert stats.average_score == 86
    assert stats.best_score == 91
    assert stats.games_played == 2


class BrokenStore(MemoryStore):
    def save_stats(self, stats):
        raise OSError("disk on fire")


def test_storage_failure_does_not_fail_mix(caplog):
    s = GameSession(GameConfig(), store=BrokenStore(), rng=random.Random(0))
    s.add_stroke("pw6", 1)
    with caplog.at_level(logging.ERROR, logger="pigment_match.session"):
        result = s.mix()
    assert result is not None
    assert s.stats.attempts == 1
    assert "Failed to persist" in caplog.text


def test_session_restores_from_store():
    store = MemoryStore()
    s = GameSession(GameConfig(seed=2), store=store)
    s.add_stroke("pw6", 1)
    s.mix()
    again = GameSession(GameConfig(seed=2), store=store)
    assert again.stats.attempts == 1
    assert len(again.history) == 1


def test_reset_stats():
    s = make_session()
    s.add_stroke("pw6", 1)
    s.mix()
    s.reset_stats()
    assert s.stats == SessionStats()
    assert len(s.history) == 0
    assert s.store.load_stats() == SessionStats()


def test_to_dict():
    s = make_session()
    s.add_stroke("py35", 2)
    d = s.to_dict()
    assert d["target"]["name"] == SAGE.name
    assert d["amounts"] == {"py35": 2.0}
    assert d["pileRadius"] == pile_radius(2.0)
    assert d["phase"] == "painting"
    assert d["result"] is None


def test_reset_keeps_stats():
    s = make_session()
    s.add_stroke("pw6", 1)
    s.mix()
    s.reset()
    assert s.total_volume == 0 and s.result is None
    assert s.target in TARGET_COLORS
    assert s.stats.attempts == 1
