import pytest
from core.models import Emotion
from core.smoothing import EmotionSmoother

H, S = Emotion.HAPPY, Emotion.SAD


def test_history_is_bounded():
    sm = EmotionSmoother(history_size=8)
    for _ in range(8 + 5):
        assert sm.observe(Emotion.ANGRY) == Emotion.ANGRY
    assert len(sm) == 8
    assert sm.dominant == Emotion.ANGRY

def test_fifo_eviction():
    sm = EmotionSmoother(history_size=3)
    for e in (H, S, S, H):
        sm.observe(e)
    assert sm.history == (S, S, H)

def test_reset_then_single_observe():
    sm = EmotionSmoother(history_size=8)
    for _ in range(6):
        sm.observe(H)
    sm.reset()
    assert len(sm) == 0
    assert sm.dominant is None
    assert sm.observe(Emotion.SURPRISED) == Emotion.SURPRISED

def test_tie_goes_to_first_seen():
    sm = EmotionSmoother(history_size=8)
    out = [sm.observe(e) for e in (H, H, S, H, S, S, S, H)]
    assert out[-1] == H
    assert sm.history.count(H) == 4 and sm.history.count(S) == 4

def test_tie_after_eviction_uses_window_order():
    sm = EmotionSmoother(history_size=4)
    for e in (H, S, S, H, H):
        sm.observe(e)
    # window is S, S, H, H -> S appears first
    assert sm.dominant == S

def test_majority_wins():
    sm = EmotionSmoother(history_size=5)
    for e in (H, S, S, Emotion.NEUTRAL):
        last = sm.observe(e)
    assert last == S

def test_accepts_string_labels():
    sm = EmotionSmoother()
    assert sm.observe("happy") == H

def test_invalid_history_size():
    with pytest.raises(ValueError):
        EmotionSmoother(history_size=0)
