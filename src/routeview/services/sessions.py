"""In-memory registry of displayed optimization results."""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass

from ..config import settings
from ..schemas.routing import RouteRequest, RouteResponse
from .viewport import ViewportController

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OptimizationSession:
    """One displayed result: what was sent, what came back, and its viewport."""

    request: RouteRequest
    response: RouteResponse
    controller: ViewportController


class SessionStore:
    """Maps session ids to displayed results, evicting the oldest beyond ``max_sessions``."""

    def __init__(self, max_sessions: int | None = None) -> None:
        self.max_sessions = max_sessions or settings.max_sessions
        self._sessions: OrderedDict[str, OptimizationSession] = OrderedDict()
        self._lock = threading.Lock()

    def add(self, session: OptimizationSession) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info(f"Evicted session {evicted} (limit {self.max_sessions})")
        return session_id

    def get(self, session_id: str) -> OptimizationSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
            return session

    def remove(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


sessions = SessionStore()
