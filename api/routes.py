"""
REST endpoints for frame classification and per-stream smoothing.
"""
from typing import Dict, Optional
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
import logging

from core.config import Settings
from core.emotion import classify
from core.models import (
    ClassificationResult,
    Emotion,
    FrameRequest,
    FrameResponse,
    FramesRequest,
    SessionStatus,
)
from core.pipeline import analyze_frames, snapshot_from_categories
from core.sessions import SessionRegistry


# Display assets served by the front-end; must cover every Emotion
EMOTION_IMAGES: Dict[Emotion, str] = {
    Emotion.HAPPY: "./images/expressions/happy.jpeg",
    Emotion.SAD: "./images/expressions/sad.jpeg",
    Emotion.SURPRISED: "./images/expressions/surprised.jpeg",
    Emotion.ANGRY: "./images/expressions/angry.jpeg",
    Emotion.NEUTRAL: "./images/expressions/neutral.jpeg",
    Emotion.EXCITED: "./images/expressions/excited.jpeg",
}

router = APIRouter()
settings = Settings()
sessions = SessionRegistry(settings)
logger = logging.getLogger(__name__)


def _snapshot(req: FrameRequest) -> Optional[Dict[str, float]]:
    if not req.has_face():
        return None
    snapshot: Dict[str, float] = {}
    if req.categories is not None:
        snapshot.update(snapshot_from_categories(req.categories))
    if req.blend_shapes is not None:
        snapshot.update(req.blend_shapes)
    return snapshot


def _unknown_session(session_id: str) -> HTTPException:
    logger.debug(f"[api] unknown session {session_id}")
    return HTTPException(status_code=404, detail=f"Unknown session: {session_id}")


@router.post("/classify", response_model=ClassificationResult)
def classify_frame(req: FrameRequest) -> ClassificationResult:
    """
    Classify a single frame without any smoothing.

    An empty request classifies an all-zero snapshot (neutral).
    """
    return classify(_snapshot(req) or {}, confidence_scale=settings.CONFIDENCE_SCALE)


@router.post("/sessions")
def create_session() -> dict:
    return {"session_id": sessions.create()}


@router.post("/sessions/{session_id}/frames", response_model=FrameResponse)
def process_frame(session_id: str, req: FrameRequest) -> FrameResponse:
    """
    Feed one frame to a session's tracker.

    A request without blend shapes means no face was detected and clears the
    session. ``update`` is only set when the displayed label changes.
    """
    try:
        result = sessions.process(session_id, _snapshot(req))
    except KeyError:
        raise _unknown_session(session_id)
    image = None
    if result.update is not None and result.update.emotion is not None:
        image = EMOTION_IMAGES[result.update.emotion]
    return FrameResponse(
        session_id=session_id,
        raw=result.raw,
        dominant=result.dominant,
        update=result.update,
        image=image,
    )


@router.post("/sessions/{session_id}/reset")
def reset_session(session_id: str) -> dict:
    try:
        update = sessions.reset(session_id)
    except KeyError:
        raise _unknown_session(session_id)
    return {"status": "reset", "cleared": update is not None}


@router.get("/sessions/{session_id}", response_model=SessionStatus)
def session_status(session_id: str) -> SessionStatus:
    try:
        return sessions.status(session_id)
    except KeyError:
        raise _unknown_session(session_id)


@router.delete("/sessions/{session_id}")
def delete_session(session_id: str) -> dict:
    try:
        sessions.drop(session_id)
    except KeyError:
        raise _unknown_session(session_id)
    return {"status": "deleted"}


@router.post("/analyze/frames")
def analyze_recorded_frames(req: FramesRequest):
    """
    Run a recorded sequence of frames through a fresh tracker.

    Returns:
        JSONResponse: {"timeline": [...]} with one entry per frame.
    """
    logger.debug(f"[api] /analyze/frames frames={len(req.frames)} fps={req.fps}")
    try:
        timeline = analyze_frames((_snapshot(f) for f in req.frames), settings, fps=req.fps)
    except Exception as e:
        logger.exception("[api] analyze_frames failed")
        raise HTTPException(status_code=500, detail=str(e))
    return JSONResponse({"timeline": [entry.model_dump(mode="json") for entry in timeline]})
