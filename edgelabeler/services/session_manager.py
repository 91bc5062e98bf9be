"""
Session manager for tracking live labeling sessions.
"""

from __future__ import annotations
import logging
import uuid
from collections import OrderedDict

from edgelabeler.services.labeling_session import LabelingSession
from edgelabeler.services.errors import SessionNotFoundError

logger = logging.getLogger(__name__)


class SessionManager:
    """In-memory registry of labeling sessions, least recently used evicted first."""

    def __init__(self, max_sessions: int = 100) -> None:
        self.max_sessions = max_sessions
        self.sessions: OrderedDict[str, LabelingSession] = OrderedDict()

    def add(self, session: LabelingSession) -> str:
        session_id = str(uuid.uuid4())
        self.sessions[session_id] = session

        while len(self.sessions) > self.max_sessions:
            evicted, _ = self.sessions.popitem(last=False)
            logger.warning(f"Session limit reached, dropped session {evicted}")

        logger.info(f"Created session {session_id} for measurement {session.measurement_id}")
        return session_id

    def get(self, session_id: str) -> LabelingSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        self.sessions.move_to_end(session_id)
        return session

    def discard(self, session_id: str) -> None:
        """Forget a session once it has been saved or cancelled."""
        if self.sessions.pop(session_id, None) is not None:
            logger.info(f"Discarded session {session_id}")
