"""Protocol repository (sessions only live in memory for now, but the service should not care)"""

from typing import Protocol
from uuid import UUID

from src.rules.session import GameSession


class SessionRepository(Protocol):
    """Storage of running game sessions"""

    def get_session(self, session_id: UUID) -> GameSession | None:
        """Get session by ID, if it exists."""
        ...

    def create_session(self, session: GameSession) -> UUID:
        """Store new session and return its newly created ID."""
        ...

    def delete_session(self, session_id: UUID) -> GameSession | None:
        """Remove a session."""
        ...

    def list_sessions(self) -> list[UUID]:
        """IDs of all stored sessions."""
        ...
