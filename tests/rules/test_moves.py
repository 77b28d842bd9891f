"""Unit tests for src/rules/moves.py"""

from typing import Callable
from unittest.mock import patch

import pytest

import src.rules.moves as mv
from src.core.exceptions import UnknownPieceKindError
from src.core.shared_types import Color, PieceType
from src.rules.board import Board
from src.rules.moves import (
    Move,
    attacks,
    can_move,
    fits_shape,
    is_castling_shape,
    is_promotion,
    squares_between,
)
from src.rules.pieces import Piece
from src.rules.square import Square


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


# --- MOVE ---
def test_move_from_algebraic() -> None:
    move = Move.from_algebraic("e2", "e4")
    assert move.from_square == sq("e2")
    assert move.to_square == sq("e4")
    assert str(move) == "e2e4"


# --- GEOMETRY ---
@pytest.mark.parametrize(
    "from_name, to_name, expected",
    [
        ("a1", "a4", ["a2", "a3"]),
        ("a1", "d4", ["b2", "c3"]),
        ("h8", "e8", ["g8", "f8"]),
        ("e1", "f1", []),
    ],
)
def test_squares_between(from_name: str, to_name: str, expected: list[str]) -> None:
    assert squares_between(sq(from_name), sq(to_name)) == [sq(name) for name in expected]


def test_squares_between_requires_a_line() -> None:
    with pytest.raises(ValueError):
        squares_between(sq("a1"), sq("b3"))


@pytest.mark.parametrize(
    "piece_type, from_name, to_name, expected",
    [
        (PieceType.KNIGHT, "b1", "c3", True),
        (PieceType.KNIGHT, "b1", "b3", False),
        (PieceType.BISHOP, "c1", "h6", True),
        (PieceType.BISHOP, "c1", "c4", False),
        (PieceType.ROOK, "a1", "a8", True),
        (PieceType.ROOK, "a1", "b2", False),
        (PieceType.QUEEN, "d1", "h5", True),
        (PieceType.QUEEN, "d1", "e3", False),
        (PieceType.KING, "e1", "f2", True),
        (PieceType.KING, "e1", "e3", False),
    ],
)
def test_fits_shape(piece_type: PieceType, from_name: str, to_name: str, expected: bool) -> None:
    assert fits_shape(piece_type, Color.WHITE, sq(from_name), sq(to_name)) == expected


def test_castling_shape_and_promotion() -> None:
    white_king = Piece(PieceType.KING, Color.WHITE)
    assert is_castling_shape(white_king, sq("e1"), sq("g1"))
    assert is_castling_shape(white_king, sq("e1"), sq("c1"))
    assert not is_castling_shape(Piece(PieceType.ROOK, Color.WHITE), sq("e1"), sq("g1"))

    assert is_promotion(Piece(PieceType.PAWN, Color.WHITE), sq("e8"))
    assert is_promotion(Piece(PieceType.PAWN, Color.BLACK), sq("e1"))
    assert not is_promotion(Piece(PieceType.PAWN, Color.BLACK), sq("e8"))
    assert not is_promotion(Piece(PieceType.QUEEN, Color.WHITE), sq("e8"))


# --- PAWNS ---
PAWN_POSITION = """
....k...
........
........
........
...p....
....P..p
P...P...
....K...
"""


@pytest.mark.parametrize(
    "color, from_name, to_name, expected",
    [
        (Color.WHITE, "a2", "a3", True),
        (Color.WHITE, "a2", "a4", True),  # two squares from the starting rank
        (Color.WHITE, "a2", "a5", False),
        (Color.WHITE, "a2", "b3", False),  # nothing to capture
        (Color.WHITE, "a2", "a1", False),  # backwards
        (Color.WHITE, "e3", "e4", True),
        (Color.WHITE, "e3", "e5", False),  # not on the starting rank anymore
        (Color.WHITE, "e3", "d4", True),  # capture
        (Color.WHITE, "e2", "e3", False),  # blocked
        (Color.WHITE, "e2", "e4", False),  # cannot jump over e3
        (Color.BLACK, "d4", "d3", True),
        (Color.BLACK, "d4", "e3", True),  # capture
        (Color.BLACK, "h3", "h2", True),
        (Color.BLACK, "h3", "g2", False),
    ],
)
def test_pawn_moves(
    board_from: Callable[[str], Board], color: Color, from_name: str, to_name: str, expected: bool
) -> None:
    board = board_from(PAWN_POSITION)
    assert can_move(PieceType.PAWN, color, sq(from_name), sq(to_name), board) == expected


def test_pawn_cannot_capture_straight_ahead(board_from: Callable[[str], Board]) -> None:
    board = board_from(
        """
        ....k...
        ........
        ........
        ....p...
        ....P...
        ........
        ........
        ....K...
        """
    )
    assert not can_move(PieceType.PAWN, Color.WHITE, sq("e4"), sq("e5"), board)


# --- SLIDING AND JUMPING PIECES ---
BLOCKING_POSITION = """
....k...
........
........
........
........
..p.....
.P......
R...K..N
"""


@pytest.mark.parametrize(
    "piece_type, from_name, to_name, expected",
    [
        (PieceType.ROOK, "a1", "a8", True),
        (PieceType.ROOK, "a1", "d1", True),
        (PieceType.ROOK, "a1", "e1", False),  # own king on e1
        (PieceType.ROOK, "a1", "f1", False),  # jumps over the king
        (PieceType.KNIGHT, "h1", "g3", True),
        (PieceType.KNIGHT, "h1", "f2", True),
        (PieceType.KNIGHT, "h1", "h3", False),
    ],
)
def test_sliding_and_jumping(
    board_from: Callable[[str], Board],
    piece_type: PieceType,
    from_name: str,
    to_name: str,
    expected: bool,
) -> None:
    board = board_from(BLOCKING_POSITION)
    assert can_move(piece_type, Color.WHITE, sq(from_name), sq(to_name), board) == expected


def test_bishop_blocked_and_capture(board_from: Callable[[str], Board]) -> None:
    board = board_from(BLOCKING_POSITION)
    board.place_piece(Piece(PieceType.BISHOP, Color.WHITE), sq("a3"))
    assert can_move(PieceType.BISHOP, Color.WHITE, sq("a3"), sq("c5"), board)
    # b2 holds a white pawn
    assert not can_move(PieceType.BISHOP, Color.WHITE, sq("a3"), sq("c1"), board)

    board.place_piece(Piece(PieceType.BISHOP, Color.BLACK), sq("a5"))
    assert can_move(PieceType.BISHOP, Color.BLACK, sq("a5"), sq("c3"), board) is False
    assert can_move(PieceType.BISHOP, Color.BLACK, sq("a5"), sq("b4"), board)


def test_queen_moves_like_rook_and_bishop(kings_only_board: Board) -> None:
    d4 = sq("d4")
    for target in ("d8", "a4", "h8", "a1", "g1"):
        assert can_move(PieceType.QUEEN, Color.WHITE, d4, sq(target), kings_only_board)
    assert not can_move(PieceType.QUEEN, Color.WHITE, d4, sq("e6"), kings_only_board)


def test_king_single_steps(kings_only_board: Board) -> None:
    e1 = sq("e1")
    assert can_move(PieceType.KING, Color.WHITE, e1, sq("d2"), kings_only_board)
    assert not can_move(PieceType.KING, Color.WHITE, e1, sq("e3"), kings_only_board)


def test_king_may_not_approach_opposing_king(board_from: Callable[[str], Board]) -> None:
    board = board_from(
        """
        ........
        ........
        ........
        ....k...
        ........
        ....K...
        ........
        ........
        """
    )
    assert not can_move(PieceType.KING, Color.WHITE, sq("e3"), sq("e4"), board)
    assert not can_move(PieceType.KING, Color.WHITE, sq("e3"), sq("d4"), board)
    assert can_move(PieceType.KING, Color.WHITE, sq("e3"), sq("e2"), board)


def test_out_of_bounds_is_never_a_move(kings_only_board: Board) -> None:
    assert not can_move(PieceType.ROOK, Color.WHITE, sq("a1"), Square(7, 8), kings_only_board)


# --- ATTACKS ---
def test_pawn_attacks_only_where_it_could_capture(kings_only_board: Board) -> None:
    """An empty diagonal is not attacked by a pawn, an opposing piece standing there is."""
    assert not attacks(PieceType.PAWN, Color.WHITE, sq("e4"), sq("d5"), kings_only_board)
    kings_only_board.place_piece(Piece(PieceType.KNIGHT, Color.BLACK), sq("d5"))
    assert attacks(PieceType.PAWN, Color.WHITE, sq("e4"), sq("d5"), kings_only_board)

    kings_only_board.place_piece(Piece(PieceType.KNIGHT, Color.WHITE), sq("f3"))
    assert attacks(PieceType.PAWN, Color.BLACK, sq("e4"), sq("f3"), kings_only_board)
    # never straight ahead, never backwards, never its own pieces
    kings_only_board.place_piece(Piece(PieceType.KNIGHT, Color.BLACK), sq("e5"))
    assert not attacks(PieceType.PAWN, Color.WHITE, sq("e4"), sq("e5"), kings_only_board)
    assert not attacks(PieceType.PAWN, Color.BLACK, sq("e4"), sq("d5"), kings_only_board)
    assert not attacks(PieceType.PAWN, Color.WHITE, sq("e4"), sq("f3"), kings_only_board)


def test_attacks_ignore_the_occupant_of_the_target(standard_board: Board) -> None:
    """A piece 'attacks' its own pieces too (they are defended)."""
    assert attacks(PieceType.ROOK, Color.WHITE, sq("a1"), sq("a2"), standard_board)
    assert not attacks(PieceType.ROOK, Color.WHITE, sq("a1"), sq("a3"), standard_board)


def test_king_attacks_next_to_opposing_king(board_from: Callable[[str], Board]) -> None:
    board = board_from(
        """
        ........
        ........
        ........
        ....k...
        ........
        ....K...
        ........
        ........
        """
    )
    assert attacks(PieceType.KING, Color.BLACK, sq("e5"), sq("e4"), board)
    assert not attacks(PieceType.KING, Color.BLACK, sq("e5"), sq("g5"), board)


def test_missing_rule_raises(kings_only_board: Board) -> None:
    with patch.dict(mv.MOVEMENT_RULES, clear=True):
        with pytest.raises(UnknownPieceKindError):
            can_move(PieceType.ROOK, Color.WHITE, sq("a1"), sq("a2"), kings_only_board)
