"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import CastlingSide, Color, PieceType, RejectionReason, Status

FILE_LETTERS = "abcdefgh"
RANK_DIGITS = "12345678"
DIAGRAM_SYMBOLS = ".pnbrqkPNBRQK"


def validate_square_name(value: str) -> str:
    """Squares are sent as a file letter (a-h, either case) followed by a rank number (1-8)"""
    if len(value) != 2 or value[0].lower() not in FILE_LETTERS or value[1] not in RANK_DIGITS:
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value.lower()


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    """Optionally start from a custom position (8 rows of 8 characters, '.' for empty squares)"""

    starting_diagram: Optional[str] = None

    @field_validator("starting_diagram")
    @classmethod
    def validate_starting_diagram(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        rows = [row.strip() for row in value.strip().splitlines() if row.strip()]
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise InvalidRequestError("A board diagram must contain 8 rows of 8 squares.")

        squares = "".join(rows)
        unknown = sorted(set(squares) - set(DIAGRAM_SYMBOLS))
        if unknown:
            raise InvalidRequestError(f"Unrecognized piece symbol(s) in board diagram: {unknown}")
        if squares.count("K") != 1 or squares.count("k") != 1:
            raise InvalidRequestError("A board diagram must contain exactly one king per color.")
        return "\n".join(rows)


class GetSessionRequest(BaseModel):
    session_id: UUID


class MoveRequest(BaseModel):
    session_id: UUID
    from_square: str
    to_square: str

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class UndoRequest(BaseModel):
    session_id: UUID
    # rewind until this move number, or a single move if not given
    to_move_number: Optional[int] = None


class LegalDestinationsRequest(BaseModel):
    session_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class CastlingAvailabilityRequest(BaseModel):
    session_id: UUID
    color: Color
    side: CastlingSide


class DeleteSessionRequest(BaseModel):
    session_id: UUID


# --- RESPONSE MODELS ---
class PieceModel(BaseModel):
    type: PieceType
    color: Color


class SessionResponse(BaseModel):
    session_id: UUID
    board: list[str]
    turn: Color
    move_number: int
    status: Status
    winner: Optional[Color] = None
    captured_pieces: list[PieceModel] = []


class MoveResponse(BaseModel):
    session_id: UUID
    accepted: bool
    rejection_reason: Optional[RejectionReason] = None
    message: str = ""
    board: list[str]
    captured_piece: Optional[PieceModel] = None
    promoted: bool = False
    castling_side: Optional[CastlingSide] = None
    status: Status
    winner: Optional[Color] = None


class UndoResponse(BaseModel):
    session_id: UUID
    undone: bool
    board: list[str]
    move_number: int
    restored_piece: Optional[PieceModel] = None


class LegalDestinationsResponse(BaseModel):
    session_id: UUID
    square: str
    destinations: list[str]


class CastlingAvailabilityResponse(BaseModel):
    session_id: UUID
    color: Color
    side: CastlingSide
    available: bool
