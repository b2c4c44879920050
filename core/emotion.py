"""
Rule-based emotion classification from MediaPipe blend-shape scores.

A snapshot (channel name -> score) is reduced to a handful of symmetric
aggregates, each emotion gets a fixed linear score over those aggregates, and
the best one wins. No state is kept between calls.
"""
# core/emotion.py
from __future__ import annotations
from typing import Callable, Dict, Mapping, Tuple
import logging
import math

from core.models import ClassificationResult, Emotion

logger = logging.getLogger(__name__)

CONFIDENCE_SCALE = 1.5

# Aggregate name -> blend-shape channels averaged into it
FEATURE_CHANNELS: Dict[str, Tuple[str, ...]] = {
    "smile": ("mouthSmileLeft", "mouthSmileRight"),
    "frown": ("mouthFrownLeft", "mouthFrownRight"),
    "dimple": ("mouthDimpleLeft", "mouthDimpleRight"),
    "pucker": ("mouthPucker",),
    "jawOpen": ("jawOpen",),
    "browUp": ("browOuterUpLeft", "browOuterUpRight"),
    "browInner": ("browInnerUp",),
    "browDown": ("browDownLeft", "browDownRight"),
    "eyeWide": ("eyeWideLeft", "eyeWideRight"),
    "cheekSquint": ("cheekSquintLeft", "cheekSquintRight"),
    "sneer": ("noseSneerLeft", "noseSneerRight"),
    "mouthShrug": ("mouthShrugUpper", "mouthShrugLower"),
    "eyeSquint": ("eyeSquintLeft", "eyeSquintRight"),
    "eyeLookDown": ("eyeLookDownLeft", "eyeLookDownRight"),
}


def _neutral(f: Dict[str, float]) -> float:
    activity = (
        f["smile"] + f["frown"] + f["jawOpen"] + f["browUp"]
        + f["browDown"] + f["eyeWide"] + f["eyeSquint"] + f["mouthShrug"]
    )
    return 1.1 - activity / 4


# Evaluation order doubles as the tie-break order: on equal scores the earlier rule wins.
EMOTION_RULES: Dict[Emotion, Callable[[Dict[str, float]], float]] = {
    Emotion.HAPPY: lambda f: f["smile"] * 1.5 + f["cheekSquint"] * 0.5,
    Emotion.EXCITED: lambda f: f["smile"] * 1.0 + f["eyeWide"] * 0.8 + f["browUp"] * 0.6 + f["jawOpen"] * 0.4,
    Emotion.SURPRISED: lambda f: f["jawOpen"] * 1.4 + f["eyeWide"] * 1.0 + f["browUp"] * 0.6 + f["browInner"] * 0.4,
    Emotion.SAD: lambda f: (
        f["frown"] * 1.4 + f["browInner"] * 0.7 + (1.0 - f["dimple"]) * 0.2 + (1.0 - f["pucker"]) * 0.2
    ),
    Emotion.ANGRY: lambda f: (
        f["eyeSquint"] * 1.2
        + f["mouthShrug"] * 1.0
        + f["eyeLookDown"] * 0.7
        + f["browDown"] * 0.5
        + f["sneer"] * 0.5
        - f["smile"] * 0.5
    ),
    Emotion.NEUTRAL: _neutral,
}


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))

def _safe_float(v, d=0.0) -> float:
    try:
        out = float(v)
    except (TypeError, ValueError):
        return float(d)
    return out if math.isfinite(out) else float(d)


def channel(snapshot: Mapping[str, float], name: str) -> float:
    """Read one channel; missing, non-numeric or non-finite values read as 0."""
    return clamp01(_safe_float(snapshot.get(name, 0.0)))


def extract_features(snapshot: Mapping[str, float]) -> Dict[str, float]:
    """
    Average symmetric channel pairs into the named aggregates used by the rules.
    """
    features: Dict[str, float] = {}
    for feature, names in FEATURE_CHANNELS.items():
        if len(names) == 1:
            features[feature] = channel(snapshot, names[0])
        else:
            features[feature] = sum(channel(snapshot, n) for n in names) / len(names)
    return features


def score_emotions(features: Dict[str, float]) -> Dict[Emotion, float]:
    """Apply every rule and clamp negative scores to 0."""
    return {emotion: max(0.0, rule(features)) for emotion, rule in EMOTION_RULES.items()}


def select_winner(scores: Mapping[Emotion, float]) -> Tuple[Emotion, float]:
    """
    Pick the strictly greatest score, scanning in ``scores`` order.
    """
    best = Emotion.NEUTRAL
    best_score = -1.0
    for emotion, score in scores.items():
        if score > best_score:
            best, best_score = emotion, score
    return best, best_score


def classify(
    snapshot: Mapping[str, float],
    confidence_scale: float = CONFIDENCE_SCALE,
) -> ClassificationResult:
    """
    Classify one frame of blend shapes.

    Args:
      snapshot: channel name -> activation score. Missing channels count as 0.
      confidence_scale: winning score that maps to full confidence.

    Returns:
      ClassificationResult with confidence = min(score / confidence_scale, 1).
    """
    scores = score_emotions(extract_features(snapshot or {}))
    emotion, best = select_winner(scores)
    scale = confidence_scale if confidence_scale > 0 else CONFIDENCE_SCALE
    confidence = min(best / scale, 1.0)
    logger.debug(f"[classify] winner={emotion.value} score={best:.3f} confidence={confidence:.3f}")
    return ClassificationResult(emotion=emotion, confidence=confidence)
