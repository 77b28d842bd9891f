"""Orchestration of communication from API models to the rules engine and the session storage (and the reverse direction)."""

from threading import Lock
from typing import Optional
from uuid import UUID

from loguru import logger

from src.api.models import (
    CastlingAvailabilityRequest,
    CastlingAvailabilityResponse,
    CreateSessionRequest,
    DeleteSessionRequest,
    GetSessionRequest,
    LegalDestinationsRequest,
    LegalDestinationsResponse,
    MoveRequest,
    MoveResponse,
    PieceModel,
    SessionResponse,
    UndoRequest,
    UndoResponse,
)
from src.core.exceptions import SessionNotFoundError
from src.rules.board import Board, BoardSnapshot
from src.rules.pieces import Piece
from src.rules.session import GameSession
from src.storage.repository import SessionRepository


class SessionService:
    """Orchestration of layers for chess sessions."""

    def __init__(self, repository: SessionRepository) -> None:
        self.repo = repository
        # every call touching a session (reads included) holds that session's lock,
        # so nobody sees a board in the middle of a move
        self._session_locks: dict[UUID, Lock] = {}
        self._locks_guard = Lock()

    # -- Request handling ---
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Start a new game, in the standard position unless a custom one is supplied."""
        if request.starting_diagram is None:
            session = GameSession.new()
        else:
            session = GameSession.from_position(Board.from_diagram(request.starting_diagram))

        session_id = self.repo.create_session(session)
        logger.info(f"Created session {session_id}")
        return self._session_response(session_id, session)

    def get_session(self, request: GetSessionRequest) -> SessionResponse:
        """Current state of the game (used for polling by a frontend)."""
        session = self._fetch_session(request.session_id)
        with self._session_lock(request.session_id):
            return self._session_response(request.session_id, session)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt. A rejected move is not an error: the response says why it was rejected."""
        session = self._fetch_session(request.session_id)
        with self._session_lock(request.session_id):
            result = session.apply_move(request.from_square, request.to_square)

        return MoveResponse(
            session_id=request.session_id,
            accepted=result.accepted,
            rejection_reason=result.reason,
            message=result.message,
            board=_board_rows(result.board),
            captured_piece=_piece_model(result.captured_piece),
            promoted=result.promoted,
            castling_side=result.castling_side,
            status=result.outcome.status,
            winner=result.outcome.winner,
        )

    def undo(self, request: UndoRequest) -> UndoResponse:
        """Take back the last move, or rewind to the requested move number."""
        session = self._fetch_session(request.session_id)
        with self._session_lock(request.session_id):
            if request.to_move_number is None:
                result = session.undo()
            else:
                result = session.undo_to(request.to_move_number)

        return UndoResponse(
            session_id=request.session_id,
            undone=result.undone,
            board=_board_rows(result.board),
            move_number=result.move_number,
            restored_piece=_piece_model(result.restored_piece),
        )

    def legal_destinations(self, request: LegalDestinationsRequest) -> LegalDestinationsResponse:
        """Move guide for the piece on the requested square."""
        session = self._fetch_session(request.session_id)
        with self._session_lock(request.session_id):
            destinations = session.legal_destinations(request.square)
        return LegalDestinationsResponse(
            session_id=request.session_id,
            square=request.square,
            destinations=[square.to_algebraic() for square in destinations],
        )

    def castling_availability(
        self, request: CastlingAvailabilityRequest
    ) -> CastlingAvailabilityResponse:
        session = self._fetch_session(request.session_id)
        with self._session_lock(request.session_id):
            availability = session.castling_availability(request.color, request.side)
        return CastlingAvailabilityResponse(
            session_id=request.session_id,
            color=availability.color,
            side=availability.side,
            available=availability.available,
        )

    def delete_session(self, request: DeleteSessionRequest) -> None:
        """Handle a request to end and forget a session."""
        if self.repo.delete_session(request.session_id) is None:
            raise SessionNotFoundError(f"Session with {request.session_id=} not found.")
        with self._locks_guard:
            self._session_locks.pop(request.session_id, None)
        logger.info(f"Deleted session {request.session_id}")

    # -- Internal helpers --
    def _session_response(self, session_id: UUID, session: GameSession) -> SessionResponse:
        return SessionResponse(
            session_id=session_id,
            board=_board_rows(session.snapshot()),
            turn=session.turn,
            move_number=session.move_number,
            status=session.outcome.status,
            winner=session.outcome.winner,
            captured_pieces=[
                PieceModel(type=piece.type, color=piece.color)
                for piece in session.captured_pieces()
            ],
        )

    def _session_lock(self, session_id: UUID) -> Lock:
        with self._locks_guard:
            return self._session_locks.setdefault(session_id, Lock())

    def _fetch_session(self, session_id: UUID) -> GameSession:
        """Attempt to find the session in the repository and raise error if it fails."""
        session = self.repo.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session with {session_id=} not found.")
        return session


def _board_rows(snapshot: BoardSnapshot) -> list[str]:
    return snapshot.to_diagram().splitlines()


def _piece_model(piece: Optional[Piece]) -> Optional[PieceModel]:
    if piece is None:
        return None
    return PieceModel(type=piece.type, color=piece.color)
