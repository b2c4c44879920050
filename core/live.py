# core/live.py
"""
Per-stream frame loop: classify -> smooth -> suppress unchanged display updates.

One EmotionTracker per independent face-tracking stream. Instances are not
thread safe; callers that share one across threads must serialize access
(see core.sessions).
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from core.config import Settings
from core.emotion import classify
from core.models import DisplayUpdate, Emotion, FrameResult
from core.smoothing import EmotionSmoother

logger = logging.getLogger(__name__)

NO_FACE_STATUS = "no face detected"

DisplaySink = Callable[[DisplayUpdate], None]


class DisplayState:
    """Remembers what the UI currently shows and only reports changes."""
    def __init__(self):
        self.current: Optional[Emotion] = None

    def update(self, emotion: Emotion, confidence: float) -> Optional[DisplayUpdate]:
        if emotion == self.current:
            return None
        self.current = emotion
        return DisplayUpdate(
            emotion=emotion,
            confidence=confidence,
            status=f"detected: {emotion.value}",
        )

    def clear(self) -> Optional[DisplayUpdate]:
        if self.current is None:
            return None
        self.current = None
        return DisplayUpdate(emotion=None, confidence=0.0, status=NO_FACE_STATUS)


class EmotionTracker:
    """Owns the smoother and display state for one stream of frames."""
    def __init__(self, settings: Settings | None = None, sink: Optional[DisplaySink] = None):
        self.s = settings or Settings()
        self.smoother = EmotionSmoother(self.s.HISTORY_SIZE)
        self.display = DisplayState()
        self._sink = sink

    def process_frame(self, snapshot: Optional[Mapping[str, float]]) -> FrameResult:
        """
        Run one frame through the pipeline.

        ``snapshot=None`` means no face was detected: history and display are
        cleared rather than decayed.
        """
        if snapshot is None:
            return FrameResult(update=self.reset())

        raw = classify(snapshot, confidence_scale=self.s.CONFIDENCE_SCALE)
        dominant = self.smoother.observe(raw.emotion)
        update = self.display.update(dominant, raw.confidence)
        if update is not None:
            logger.debug(
                f"[tracker] display -> {dominant.value} "
                f"(raw={raw.emotion.value} conf={raw.confidence:.2f} window={len(self.smoother)})"
            )
        return FrameResult(raw=raw, dominant=dominant, update=self._notify(update))

    def reset(self) -> Optional[DisplayUpdate]:
        self.smoother.reset()
        update = self.display.clear()
        if update is not None:
            logger.debug("[tracker] face lost; history cleared")
        return self._notify(update)

    def _notify(self, update: Optional[DisplayUpdate]) -> Optional[DisplayUpdate]:
        if update is not None and self._sink is not None:
            self._sink(update)
        return update
