"""
Pydantic data models for the classifier, the tracker and API IO.
"""
from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Literal


class Emotion(str, Enum):
    """Closed set of labels. Adding one means adding a scoring rule and a display asset."""
    HAPPY = "happy"
    SAD = "sad"
    SURPRISED = "surprised"
    ANGRY = "angry"
    NEUTRAL = "neutral"
    EXCITED = "excited"


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    emotion: Emotion
    confidence: float = Field(ge=0.0, le=1.0)


class DisplayUpdate(BaseModel):
    """What the UI sink should show. ``emotion=None`` clears the display."""
    model_config = ConfigDict(frozen=True)

    emotion: Optional[Emotion] = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    status: str


class FrameResult(BaseModel):
    raw: Optional[ClassificationResult] = None
    dominant: Optional[Emotion] = None
    update: Optional[DisplayUpdate] = None


class TimelineEntry(BaseModel):
    frame: int
    time: Optional[float] = None
    emotion: Optional[Emotion] = None
    confidence: Optional[float] = None
    dominant: Optional[Emotion] = None
    changed: bool = False
    flag: Optional[Literal["NO_FACE"]] = None



# api models


class BlendShapeCategory(BaseModel):
    """One MediaPipe blend shape as it arrives on the wire."""
    model_config = ConfigDict(populate_by_name=True)

    category_name: str = Field(alias="categoryName")
    score: Any = None


class FrameRequest(BaseModel):
    # Channel values stay loose; the classifier reads malformed scores as 0
    blend_shapes: Optional[Dict[str, Any]] = None
    categories: Optional[List[BlendShapeCategory]] = None

    def has_face(self) -> bool:
        return self.blend_shapes is not None or self.categories is not None


class FramesRequest(BaseModel):
    frames: List[FrameRequest] = Field(default_factory=list)
    fps: Optional[float] = Field(default=None, gt=0)


class FrameResponse(BaseModel):
    session_id: str
    raw: Optional[ClassificationResult] = None
    dominant: Optional[Emotion] = None
    update: Optional[DisplayUpdate] = None
    image: Optional[str] = None


class SessionStatus(BaseModel):
    session_id: str
    history: List[Emotion] = Field(default_factory=list)
    displayed: Optional[Emotion] = None
