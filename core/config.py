"""
Configuration for the emotion classification pipeline.
"""
from pydantic import BaseModel
import logging
import os

class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    HISTORY_SIZE: int = int(os.getenv("HISTORY_SIZE", "8"))
    CONFIDENCE_SCALE: float = float(os.getenv("CONFIDENCE_SCALE", "1.5"))
    MAX_SESSIONS: int = int(os.getenv("MAX_SESSIONS", "64"))
    LOG_LEVEL: str = (os.getenv("LOG_LEVEL", "INFO") or "INFO")

    def __init__(self, **data):
        super().__init__(**data)
        # Fall back to defaults instead of failing on nonsense values
        if self.HISTORY_SIZE < 1:
            object.__setattr__(self, "HISTORY_SIZE", 8)
        if self.CONFIDENCE_SCALE <= 0:
            object.__setattr__(self, "CONFIDENCE_SCALE", 1.5)
        if self.MAX_SESSIONS < 1:
            object.__setattr__(self, "MAX_SESSIONS", 64)
        level = (self.LOG_LEVEL or "").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(level), int):
            level = "INFO"
        object.__setattr__(self, "LOG_LEVEL", level)
