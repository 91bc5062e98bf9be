"""Errors raised by the labeling services."""

from __future__ import annotations


class LabelingError(Exception):
    """Base class for labeling session errors."""


class EdgeNotFoundError(LabelingError, KeyError):
    def __init__(self, edge_id: str) -> None:
        super().__init__(f"Edge {edge_id} not found")
        self.edge_id = edge_id

    def __str__(self) -> str:
        return f"Edge {self.edge_id} not found"


class SessionNotFoundError(LabelingError, KeyError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session {self.session_id} not found"


class SessionClosedError(LabelingError):
    """The session was already saved or cancelled."""


class SaveError(LabelingError):
    """The edge store rejected the save; the session is unchanged."""


class SessionBusyError(LabelingError):
    """A save is in flight; the session accepts no changes until it settles."""
