"""
The final verdict on a move: is it legal?

Combines the pseudo-legal movement rules (moves.py), castling (castling.py) and king safety (attacks.py).
The board passed in is never modified: hypothetical moves are played on a copy.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from loguru import logger

from src.core.shared_types import CastlingSide, PieceType, RejectionReason
from src.rules.attacks import is_attacked
from src.rules.board import Board
from src.rules.castling import CastlingRights, can_castle, castle_on_board, castling_side
from src.rules.moves import (
    can_move,
    fits_shape,
    is_castling_shape,
    is_path_clear,
    is_promotion,
)
from src.rules.pieces import Piece
from src.rules.square import Square


class MoveContext(Enum):
    """
    Who is asking?
    Only a real move by a player gets a warning when rejected; probes (move guide, endgame detection) stay silent.
    The verdict itself never depends on the context.
    """

    PLAYER_MOVE = auto()
    MOVE_GUIDE = auto()
    STALEMATE = auto()
    CHECKMATE = auto()


REJECTION_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.EMPTY_SQUARE: "There is no piece on that square.",
    RejectionReason.NOT_YOUR_TURN: "It is not your turn.",
    RejectionReason.GAME_OVER: "The game is over.",
    RejectionReason.OWN_PIECE_AT_DESTINATION: "You cannot capture your own piece.",
    RejectionReason.WRONG_SHAPE: "That piece does not move like that.",
    RejectionReason.BLOCKED_PATH: "Another piece is in the way.",
    RejectionReason.CASTLING_UNAVAILABLE: "Castling is not allowed right now.",
    RejectionReason.OWN_KING_EXPOSED: "King cannot be moved into check!",
    RejectionReason.KING_STILL_IN_CHECK: "King is in check!",
}


@dataclass(frozen=True)
class LegalityVerdict:
    reason: Optional[RejectionReason] = None

    @property
    def legal(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> str:
        return REJECTION_MESSAGES[self.reason] if self.reason else ""

    def __bool__(self) -> bool:
        return self.legal


ACCEPTED = LegalityVerdict()


@dataclass(frozen=True)
class ExecutedMove:
    """What happened on the board when a move got played"""

    piece: Piece
    from_square: Square
    to_square: Square
    captured: Optional[Piece] = None
    promoted: bool = False
    castling_side: Optional[CastlingSide] = None


def execute_move(board: Board, from_square: Square, to_square: Square) -> ExecutedMove:
    """
    Play a move on the given board, no questions asked.
    ---

    * castling displaces both the king and the rook
    * a pawn reaching the far rank becomes a queen
    """
    piece = board.piece(from_square)
    # for the type checker: only called for moves that passed the legality check
    assert piece is not None

    side: Optional[CastlingSide] = None
    captured: Optional[Piece] = None
    if is_castling_shape(piece, from_square, to_square):
        side = castling_side(from_square, to_square)
        castle_on_board(board, piece.color, side)
    else:
        captured = board.move_piece(from_square, to_square)

    promoted = is_promotion(piece, to_square)
    if promoted:
        board.place_piece(piece.promoted(PieceType.QUEEN), to_square)

    return ExecutedMove(piece, from_square, to_square, captured, promoted, side)


def check_move(
    from_square: Square,
    to_square: Square,
    board: Board,
    rights: CastlingRights,
    context: MoveContext = MoveContext.PLAYER_MOVE,
) -> LegalityVerdict:
    """
    Decide if the piece on from_square may move to to_square
    ----

    1. the piece must be able to get there (movement rules, or castling for a king moving two squares)
    2. copy the board, and make the move on the copy
    3. find your king before and after the move
    4. king in check before and after: the move does not resolve the check --> rejected
    5. king not in check before, but after: the move exposes your king --> rejected
    """
    verdict = _verdict(from_square, to_square, board, rights)
    if not verdict.legal and context == MoveContext.PLAYER_MOVE:
        logger.warning(f"Rejected {from_square}{to_square}: {verdict.message}")
    return verdict


def is_legal(
    from_square: Square,
    to_square: Square,
    board: Board,
    rights: CastlingRights,
    context: MoveContext = MoveContext.PLAYER_MOVE,
) -> bool:
    return check_move(from_square, to_square, board, rights, context).legal


def _verdict(
    from_square: Square, to_square: Square, board: Board, rights: CastlingRights
) -> LegalityVerdict:
    piece = board.piece(from_square)
    if piece is None:
        return LegalityVerdict(RejectionReason.EMPTY_SQUARE)

    if board.is_occupied_by(to_square, piece.color):
        return LegalityVerdict(RejectionReason.OWN_PIECE_AT_DESTINATION)

    reason = _pseudo_legal_rejection(piece, from_square, to_square, board, rights)
    if reason is not None:
        return LegalityVerdict(reason)

    # play the move on a copy of the board
    after = board.copy()
    execute_move(after, from_square, to_square)

    color = piece.color
    checked_before = is_attacked(color, board.find_king(color), board)
    checked_after = is_attacked(color, after.find_king(color), after)

    if checked_before and checked_after:
        return LegalityVerdict(RejectionReason.KING_STILL_IN_CHECK)
    if checked_after:
        return LegalityVerdict(RejectionReason.OWN_KING_EXPOSED)
    return ACCEPTED


def _pseudo_legal_rejection(
    piece: Piece,
    from_square: Square,
    to_square: Square,
    board: Board,
    rights: CastlingRights,
) -> Optional[RejectionReason]:
    """None if the piece can get there (ignoring king safety), otherwise the reason it cannot"""
    if is_castling_shape(piece, from_square, to_square):
        side = castling_side(from_square, to_square)
        if can_castle(piece.color, side, board, rights):
            return None
        return RejectionReason.CASTLING_UNAVAILABLE

    if can_move(piece.type, piece.color, from_square, to_square, board):
        return None

    if fits_shape(piece.type, piece.color, from_square, to_square) and _is_blocked(
        piece, from_square, to_square, board
    ):
        return RejectionReason.BLOCKED_PATH
    return RejectionReason.WRONG_SHAPE


def _is_blocked(piece: Piece, from_square: Square, to_square: Square, board: Board) -> bool:
    """Right shape, but something stands in the way (knights jump, kings only take single steps)"""
    if piece.type in (PieceType.KNIGHT, PieceType.KING):
        return False
    if piece.type == PieceType.PAWN:
        # diagonal pawn moves cannot be blocked: they need something to capture instead
        if from_square.col != to_square.col:
            return False
        return not board.is_empty(to_square) or not is_path_clear(from_square, to_square, board)
    return not is_path_clear(from_square, to_square, board)
