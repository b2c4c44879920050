"""
Registry of independent trackers, one per client stream.
"""
from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Mapping, Optional

from core.config import Settings
from core.live import EmotionTracker
from core.models import DisplayUpdate, FrameResult, SessionStatus

logger = logging.getLogger(__name__)


class _Session:
    def __init__(self, settings: Settings):
        self.tracker = EmotionTracker(settings)
        self.lock = threading.Lock()


class SessionRegistry:
    """
    Thread-safe map of session id -> EmotionTracker.

    Each tracker has its own lock so frames of one stream are processed in
    order while different streams run independently. Unknown ids raise KeyError.
    """
    def __init__(self, settings: Settings):
        self.s = settings
        self._sessions: "OrderedDict[str, _Session]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = _Session(self.s)
            while len(self._sessions) > self.s.MAX_SESSIONS:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info(f"[sessions] evicted least recently used session {evicted}")
        logger.debug(f"[sessions] created {session_id}")
        return session_id

    def _get(self, session_id: str) -> _Session:
        with self._lock:
            session = self._sessions[session_id]
            # Recently used sessions go last so eviction drops idle ones first
            self._sessions.move_to_end(session_id)
            return session

    def process(self, session_id: str, snapshot: Optional[Mapping[str, float]]) -> FrameResult:
        session = self._get(session_id)
        with session.lock:
            return session.tracker.process_frame(snapshot)

    def reset(self, session_id: str) -> Optional[DisplayUpdate]:
        session = self._get(session_id)
        with session.lock:
            return session.tracker.reset()

    def status(self, session_id: str) -> SessionStatus:
        session = self._get(session_id)
        with session.lock:
            return SessionStatus(
                session_id=session_id,
                history=list(session.tracker.smoother.history),
                displayed=session.tracker.display.current,
            )

    def drop(self, session_id: str) -> None:
        with self._lock:
            del self._sessions[session_id]
        logger.debug(f"[sessions] dropped {session_id}")

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
