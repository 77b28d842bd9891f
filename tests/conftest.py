"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

from typing import Callable, Iterator

import pytest
from loguru import logger

from src.rules.board import Board
from src.rules.castling import CastlingRights
from src.rules.session import GameSession

# Kings only, on their home squares
KINGS_ONLY = """
....k...
........
........
........
........
........
........
....K...
"""

# Both sides only have their king and rooks left, all on their home squares
CASTLING_READY = """
r...k..r
........
........
........
........
........
........
R...K..R
"""


@pytest.fixture
def standard_board() -> Board:
    return Board.standard()


@pytest.fixture
def board_from() -> Callable[[str], Board]:
    """Factory: build a board from an 8x8 diagram."""
    return Board.from_diagram


@pytest.fixture
def fresh_rights() -> CastlingRights:
    return CastlingRights()


@pytest.fixture
def new_session() -> GameSession:
    return GameSession.new()


@pytest.fixture
def session_from() -> Callable[..., GameSession]:
    """Factory: session starting from a diagram (white to move unless a move number is given)."""

    def _make(diagram: str, move_number: int = 1, rights: CastlingRights | None = None) -> GameSession:
        return GameSession.from_position(Board.from_diagram(diagram), rights, move_number)

    return _make


@pytest.fixture
def kings_only_board() -> Board:
    return Board.from_diagram(KINGS_ONLY)


@pytest.fixture
def castling_ready_board() -> Board:
    return Board.from_diagram(CASTLING_READY)


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect everything loguru logs at WARNING level or above while the test runs."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    try:
        yield messages
    finally:
        logger.remove(handler_id)
