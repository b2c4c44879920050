"""
Majority-vote smoothing over the last N raw emotion labels.
"""
from __future__ import annotations
from collections import Counter, deque
from typing import Deque, Optional, Tuple

from core.models import Emotion


class EmotionSmoother:
    """Bounded FIFO of raw labels; the smoothed label is the window's mode."""
    def __init__(self, history_size: int = 8):
        if int(history_size) < 1:
            raise ValueError(f"history_size must be >= 1, got {history_size}")
        self.history_size = int(history_size)
        self._history: Deque[Emotion] = deque(maxlen=self.history_size)

    def observe(self, emotion: Emotion) -> Emotion:
        """
        Push a raw label and return the dominant one.

        Ties go to the label that appears first in the window (oldest first).
        """
        self._history.append(Emotion(emotion))
        return self._mode()

    def reset(self) -> None:
        self._history.clear()

    @property
    def history(self) -> Tuple[Emotion, ...]:
        return tuple(self._history)

    @property
    def dominant(self) -> Optional[Emotion]:
        return self._mode() if self._history else None

    def __len__(self) -> int:
        return len(self._history)

    def _mode(self) -> Emotion:
        # Counter keeps first-seen order and most_common is stable for equal counts
        return Counter(self._history).most_common(1)[0][0]
