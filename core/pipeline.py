# core/pipeline.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from core.config import Settings
from core.live import EmotionTracker
from core.models import TimelineEntry

logger = logging.getLogger(__name__)

def _category_field(category: Any, *names: str) -> Any:
    for name in names:
        if isinstance(category, Mapping):
            if name in category:
                return category[name]
        elif hasattr(category, name):
            return getattr(category, name)
    return None

def snapshot_from_categories(categories: Iterable[Any]) -> Dict[str, float]:
    """
    Turn a MediaPipe blend-shape category list into a snapshot.

    Accepts ``{"categoryName": ..., "score": ...}`` dicts (JS/JSON shape),
    objects with ``category_name``/``score`` attributes (Python tasks API) and
    BlendShapeCategory models. Entries without a name are skipped; later
    duplicates overwrite earlier ones.
    """
    snapshot: Dict[str, float] = {}
    for category in categories or []:
        name = _category_field(category, "categoryName", "category_name")
        if not isinstance(name, str) or not name:
            continue
        snapshot[name] = _category_field(category, "score")
    return snapshot

def coerce_snapshot(frame: Any) -> Optional[Dict[str, float]]:
    """
    Normalize one frame of input. ``None`` means no face in the frame.
    """
    if frame is None:
        return None
    if isinstance(frame, Mapping):
        return dict(frame)
    if isinstance(frame, (list, tuple)):
        return snapshot_from_categories(frame)
    raise TypeError(f"Unsupported frame type: {type(frame).__name__}")

def analyze_frames(
    frames: Iterable[Any],
    settings: Settings,
    fps: float | None = None,
) -> List[TimelineEntry]:
    """
    Run a fresh tracker over a recorded sequence of frames.

    Returns one TimelineEntry per frame; frames without a face carry
    flag="NO_FACE" and reset the smoothing window.
    """
    tracker = EmotionTracker(settings)
    timeline: List[TimelineEntry] = []
    for index, frame in enumerate(frames):
        snapshot = coerce_snapshot(frame)
        result = tracker.process_frame(snapshot)
        timestamp = round(index / fps, 2) if fps else None
        if result.raw is None:
            timeline.append(TimelineEntry(
                frame=index,
                time=timestamp,
                changed=result.update is not None,
                flag="NO_FACE",
            ))
            continue
        timeline.append(TimelineEntry(
            frame=index,
            time=timestamp,
            emotion=result.raw.emotion,
            confidence=result.raw.confidence,
            dominant=result.dominant,
            changed=result.update is not None,
        ))
    logger.debug(f"[pipeline] analyze_frames finished; entries={len(timeline)}")
    return timeline
