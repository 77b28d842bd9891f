"""Unit tests for src/rules/board.py"""

from typing import Callable

import pytest

from src.core.exceptions import InvalidDiagramError, MissingKingError, UnknownPieceKindError
from src.core.shared_types import Color, PieceType
from src.rules.board import STARTING_DIAGRAM, Board
from src.rules.pieces import Piece
from src.rules.square import Square

E4 = Square.from_algebraic("e4")
E2 = Square.from_algebraic("e2")


def test_standard_board_layout(standard_board: Board) -> None:
    assert standard_board.piece_count() == 32
    assert standard_board.piece(Square.from_algebraic("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert standard_board.piece(Square.from_algebraic("d8")) == Piece(PieceType.QUEEN, Color.BLACK)
    assert standard_board.piece(Square.from_algebraic("a7")) == Piece(PieceType.PAWN, Color.BLACK)
    assert standard_board.is_empty(E4)


def test_diagram_survives_a_board_conversion(standard_board: Board) -> None:
    assert standard_board.to_diagram() == STARTING_DIAGRAM.strip()


@pytest.mark.parametrize(
    "diagram",
    [
        "........\n" * 7,  # only 7 rows
        "........\n" * 8 + "........",  # 9 rows
        ".......\n" * 8,  # rows of 7 squares
    ],
)
def test_malformed_diagram_raises(diagram: str) -> None:
    with pytest.raises(InvalidDiagramError):
        Board.from_diagram(diagram)


def test_unknown_symbol_in_diagram_raises() -> None:
    diagram = "x.......\n" + "........\n" * 7
    with pytest.raises(UnknownPieceKindError):
        Board.from_diagram(diagram)


def test_snapshot_is_detached_from_the_board(standard_board: Board) -> None:
    snapshot = standard_board.snapshot()
    standard_board.move_piece(E2, E4)
    assert snapshot.piece_at(E2) == Piece(PieceType.PAWN, Color.WHITE)
    assert snapshot.piece_at(E4) is None


def test_copy_is_independent(standard_board: Board) -> None:
    copy = standard_board.copy()
    copy.move_piece(E2, E4)
    assert standard_board.piece(E4) is None
    assert copy.piece(E4) == Piece(PieceType.PAWN, Color.WHITE)


def test_move_piece_returns_captured_piece(board_from: Callable[[str], Board]) -> None:
    board = board_from(
        """
        ....k...
        ........
        ........
        ...p....
        ....P...
        ........
        ........
        ....K...
        """
    )
    captured = board.move_piece(E4, Square.from_algebraic("d5"))
    assert captured == Piece(PieceType.PAWN, Color.BLACK)
    assert board.is_empty(E4)
    assert board.piece_count() == 3


def test_place_and_remove_piece(kings_only_board: Board) -> None:
    rook = Piece(PieceType.ROOK, Color.WHITE)
    kings_only_board.place_piece(rook, E4)
    assert kings_only_board.is_occupied_by(E4, Color.WHITE)
    assert not kings_only_board.is_occupied_by(E4, Color.BLACK)
    assert kings_only_board.remove_piece(E4) == rook
    assert kings_only_board.remove_piece(E4) is None


def test_locate_color(standard_board: Board) -> None:
    white_squares = standard_board.locate_color(Color.WHITE)
    assert len(white_squares) == 16
    assert all(square.row in (6, 7) for square in white_squares)


def test_find_king(kings_only_board: Board) -> None:
    assert kings_only_board.find_king(Color.WHITE) == Square.from_algebraic("e1")
    assert kings_only_board.find_king(Color.BLACK) == Square.from_algebraic("e8")


def test_missing_king_raises(kings_only_board: Board) -> None:
    kings_only_board.remove_piece(Square.from_algebraic("e8"))
    with pytest.raises(MissingKingError):
        kings_only_board.find_king(Color.BLACK)


def test_only_kings_remain(kings_only_board: Board, standard_board: Board) -> None:
    assert kings_only_board.only_kings_remain()
    assert not standard_board.only_kings_remain()
    assert not Board().only_kings_remain()
