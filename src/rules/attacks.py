"""
Is a square attacked?

Only uses the ATTACK_RULES from moves.py (pseudo-legal reach), never the full legality check.
That way attack detection can never recurse back into king-safety checks.
"""

from src.core.shared_types import Color
from src.rules.board import Board
from src.rules.moves import attacks
from src.rules.square import Square


def is_attacked(color: Color, square: Square, board: Board) -> bool:
    """
    Is the player with the given color under attack on the given square?
    ---

    Scan the whole board for pieces of the opposing color, and test if any of those can hit the square.
    """
    opponent = color.opponent
    for attacker_square in board.locate_color(opponent):
        attacker = board.piece(attacker_square)
        # for the type checker: locate_color only returns occupied squares
        assert attacker is not None
        if attacker_square == square:
            continue
        if attacks(attacker.type, opponent, attacker_square, square, board):
            return True
    return False


def attackers_of(color: Color, square: Square, board: Board) -> list[Square]:
    """Where do the attacks on the square come from? (e.g. to show which piece is giving check)"""
    opponent = color.opponent
    found: list[Square] = []
    for attacker_square in board.locate_color(opponent):
        attacker = board.piece(attacker_square)
        assert attacker is not None
        if attacker_square != square and attacks(
            attacker.type, opponent, attacker_square, square, board
        ):
            found.append(attacker_square)
    return found


def is_in_check(color: Color, board: Board) -> bool:
    """Raises MissingKingError if the player has no king."""
    return is_attacked(color, board.find_king(color), board)
