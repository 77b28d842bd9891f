"""Unit tests for src/rules/endgame.py"""

from typing import Callable

import pytest

from src.core.shared_types import Color, Status
from src.rules.board import Board
from src.rules.castling import CastlingRights
from src.rules.endgame import (
    classify,
    has_legal_move,
    is_checkmate,
    is_stalemate,
    legal_destinations,
    legal_moves,
)
from src.rules.legality import MoveContext
from src.rules.moves import Move
from src.rules.square import Square


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


BACK_RANK_MATE = """
....k...
........
........
........
........
........
.....PPP
r.....K.
"""

# black to move: not in check, but no move at all
CORNERED_KING = """
k.......
........
.Q......
........
........
........
........
....K...
"""

# black king in check from the queen, but can take it
CHECK_WITH_ESCAPE = """
k.......
.Q......
........
........
........
........
........
....K...
"""


def test_twenty_moves_at_the_start(standard_board: Board, fresh_rights: CastlingRights) -> None:
    assert len(legal_moves(Color.WHITE, standard_board, fresh_rights)) == 20
    assert len(legal_moves(Color.BLACK, standard_board, fresh_rights)) == 20


def test_legal_destinations_of_a_knight(standard_board: Board, fresh_rights: CastlingRights) -> None:
    destinations = legal_destinations(sq("g1"), standard_board, fresh_rights)
    assert set(destinations) == {sq("f3"), sq("h3")}


def test_legal_destinations_of_an_empty_square(
    standard_board: Board, fresh_rights: CastlingRights
) -> None:
    assert legal_destinations(sq("e4"), standard_board, fresh_rights) == []


def test_legal_destinations_include_castling(
    castling_ready_board: Board, fresh_rights: CastlingRights
) -> None:
    destinations = legal_destinations(sq("e1"), castling_ready_board, fresh_rights)
    assert sq("g1") in destinations
    assert sq("c1") in destinations


@pytest.mark.parametrize(
    "diagram, color, expected",
    [
        (BACK_RANK_MATE, Color.WHITE, Status.CHECKMATE),
        (CORNERED_KING, Color.BLACK, Status.STALEMATE),
        (CHECK_WITH_ESCAPE, Color.BLACK, Status.IN_PROGRESS),
        (CORNERED_KING, Color.WHITE, Status.IN_PROGRESS),
    ],
)
def test_classify(
    board_from: Callable[[str], Board],
    fresh_rights: CastlingRights,
    diagram: str,
    color: Color,
    expected: Status,
) -> None:
    assert classify(color, board_from(diagram), fresh_rights) == expected


@pytest.mark.parametrize(
    "diagram, color",
    [
        (BACK_RANK_MATE, Color.WHITE),
        (CORNERED_KING, Color.BLACK),
        (CHECK_WITH_ESCAPE, Color.BLACK),
    ],
)
def test_checkmate_and_stalemate_exclude_each_other(
    board_from: Callable[[str], Board], fresh_rights: CastlingRights, diagram: str, color: Color
) -> None:
    board = board_from(diagram)
    assert not (is_checkmate(color, board, fresh_rights) and is_stalemate(color, board, fresh_rights))


def test_only_kings_is_stalemate(kings_only_board: Board, fresh_rights: CastlingRights) -> None:
    """Both kings can still move, but the position is dead."""
    assert has_legal_move(Color.WHITE, kings_only_board, fresh_rights, MoveContext.STALEMATE)
    assert is_stalemate(Color.WHITE, kings_only_board, fresh_rights)
    assert not is_checkmate(Color.WHITE, kings_only_board, fresh_rights)
    assert classify(Color.BLACK, kings_only_board, fresh_rights) == Status.STALEMATE


def test_escape_by_capture_is_found(
    board_from: Callable[[str], Board], fresh_rights: CastlingRights
) -> None:
    board = board_from(CHECK_WITH_ESCAPE)
    assert Move(sq("a8"), sq("b7")) in legal_moves(Color.BLACK, board, fresh_rights)


def test_evaluation_logs_nothing(
    board_from: Callable[[str], Board], fresh_rights: CastlingRights, log_messages: list[str]
) -> None:
    classify(Color.WHITE, board_from(BACK_RANK_MATE), fresh_rights)
    classify(Color.BLACK, board_from(CORNERED_KING), fresh_rights)
    assert log_messages == []
