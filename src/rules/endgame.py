"""
Has the game ended? Classifies a position for the player about to move.

A game of chess ends in one of two ways here:
* checkmate: the king is in check, and no move of any piece gets it out of check.
* stalemate: the king is NOT in check, but the player has no move at all.
  Only two kings left on the board also counts as stalemate: neither side can ever win.
"""

from typing import Iterator

from src.core.shared_types import Color, Status
from src.rules.attacks import is_attacked
from src.rules.board import Board
from src.rules.castling import CastlingRights
from src.rules.legality import MoveContext, is_legal
from src.rules.moves import Move
from src.rules.square import Square, all_squares


def legal_destinations(
    square: Square,
    board: Board,
    rights: CastlingRights,
    context: MoveContext = MoveContext.MOVE_GUIDE,
) -> list[Square]:
    """Every square the piece on the given square may legally move to (e.g. for a move guide)"""
    if board.piece(square) is None:
        return []
    return [
        destination
        for destination in all_squares()
        if is_legal(square, destination, board, rights, context)
    ]


def iter_legal_moves(
    color: Color,
    board: Board,
    rights: CastlingRights,
    context: MoveContext = MoveContext.MOVE_GUIDE,
) -> Iterator[Move]:
    """
    Brute force: try every piece of the given color on every square of the board.
    Lazy, so callers that only need to know IF a move exists can stop at the first one.
    """
    for from_square in board.locate_color(color):
        for to_square in all_squares():
            if is_legal(from_square, to_square, board, rights, context):
                yield Move(from_square, to_square)


def legal_moves(color: Color, board: Board, rights: CastlingRights) -> list[Move]:
    return list(iter_legal_moves(color, board, rights))


def has_legal_move(
    color: Color, board: Board, rights: CastlingRights, context: MoveContext
) -> bool:
    return next(iter_legal_moves(color, board, rights, context), None) is not None


def is_checkmate(color: Color, board: Board, rights: CastlingRights) -> bool:
    king_square = board.find_king(color)
    if not is_attacked(color, king_square, board):
        return False
    return not has_legal_move(color, board, rights, MoveContext.CHECKMATE)


def is_stalemate(color: Color, board: Board, rights: CastlingRights) -> bool:
    # NOTE: a board with only the two kings is a dead position, whatever else is going on.
    if board.only_kings_remain():
        return True

    king_square = board.find_king(color)
    if is_attacked(color, king_square, board):
        return False
    return not has_legal_move(color, board, rights, MoveContext.STALEMATE)


def classify(color: Color, board: Board, rights: CastlingRights) -> Status:
    """Status of the game, seen from the player with the given color, who is about to move."""
    if is_stalemate(color, board, rights):
        return Status.STALEMATE
    if is_checkmate(color, board, rights):
        return Status.CHECKMATE
    return Status.IN_PROGRESS
