"""Implementation of (Session)Repository keeping everything in a dictionary"""

from threading import Lock
from uuid import UUID, uuid4

from src.rules.session import GameSession


class InMemorySessionRepository:
    """Sessions are kept for the lifetime of the process. Nothing is written to disk."""

    def __init__(self) -> None:
        self._sessions: dict[UUID, GameSession] = {}
        self._lock = Lock()

    def get_session(self, session_id: UUID) -> GameSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def create_session(self, session: GameSession) -> UUID:
        new_id = uuid4()
        with self._lock:
            self._sessions[new_id] = session
        return new_id

    def delete_session(self, session_id: UUID) -> GameSession | None:
        with self._lock:
            return self._sessions.pop(session_id, None)

    def list_sessions(self) -> list[UUID]:
        with self._lock:
            return list(self._sessions.keys())
