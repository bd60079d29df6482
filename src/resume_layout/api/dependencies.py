"""Shared dependencies for API routes."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from resume_layout.services.measurement import MeasurementSession
from resume_layout.services.rasterizer import PdfServiceRasterizer, Rasterizer

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1024


class SessionRegistry:
    """In-memory measurement sessions keyed by resume id.

    Sessions only order measurement passes; losing them on restart just
    makes the next report stale.  At most *max_sessions* are kept and the
    least recently used one is dropped first.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            msg = f"max_sessions must be at least 1, got {max_sessions}"
            raise ValueError(msg)
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, MeasurementSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get(self, resume_id: str) -> MeasurementSession:
        with self._lock:
            session = self._sessions.get(resume_id)
            if session is not None:
                self._sessions.move_to_end(resume_id)
                return session
            session = MeasurementSession()
            self._sessions[resume_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted measurement session for %s", evicted)
            return session

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


_REGISTRY = SessionRegistry()


def get_session_registry() -> SessionRegistry:
    """Return the process-wide measurement session registry."""
    return _REGISTRY


def get_rasterizer() -> Rasterizer:
    """Return the rasterizer used for PDF export."""
    return PdfServiceRasterizer()
