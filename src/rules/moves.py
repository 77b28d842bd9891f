"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define a pseudo-legal move predicate for each piece type.
"Pseudo-legal" means the piece is allowed to go there, ignoring whether that leaves its own king in check.

Legality (king safety, castling) is checked later in legality.py
"""

from dataclasses import dataclass
from typing import Callable, Protocol, TypeVar

from src.core.exceptions import UnknownPieceKindError
from src.core.shared_types import Color, PieceType
from src.rules.pieces import Piece
from src.rules.square import BOARD_SIZE, Square


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, square: Square) -> Piece | None: ...
    def is_empty(self, square: Square) -> bool: ...
    def is_occupied_by(self, square: Square, color: Color) -> bool: ...


Vector = tuple[int, int]
T = TypeVar("T")


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_algebraic(cls, from_sq: str, to_sq: str) -> "Move":
        return cls(Square.from_algebraic(from_sq), Square.from_algebraic(to_sq))

    def __str__(self) -> str:
        return f"{self.from_square}{self.to_square}"


# --- PAWN GEOMETRY ---
# White moves UP the board (towards row 0), Black moves DOWN (towards row 7)
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: BOARD_SIZE - 2, Color.BLACK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_SIZE - 1}


def _deltas(from_square: Square, to_square: Square) -> Vector:
    return to_square.row - from_square.row, to_square.col - from_square.col


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Squares strictly in between two squares on the same row, column or diagonal.

    Needed for checking if sliding pieces are blocked, and if you can still castle.
    """
    d_row, d_col = _deltas(from_square, to_square)
    if not (d_row == 0 or d_col == 0 or abs(d_row) == abs(d_col)):
        raise ValueError(
            f"squares_between requires both squares on a single line. \n from: {from_square}\n to: {to_square}"
        )

    step_row, step_col = _sign(d_row), _sign(d_col)
    squares_found: list[Square] = []
    square = from_square.offset(step_row, step_col)
    while square != to_square:
        squares_found.append(square)
        square = square.offset(step_row, step_col)
    return squares_found


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    return all(board.is_empty(square) for square in squares_between(from_square, to_square))


def is_enterable(to_square: Square, color: Color, board: Board) -> bool:
    """Destination must be empty or hold an opposing piece"""
    return not board.is_occupied_by(to_square, color)


def is_adjacent_to_king(square: Square, king_color: Color, board: Board) -> bool:
    """Is the king of the given color standing within one square (diagonals included)?"""
    king = Piece(PieceType.KING, king_color)
    for d_row in (-1, 0, 1):
        for d_col in (-1, 0, 1):
            neighbour = square.offset(d_row, d_col)
            if neighbour.is_within_bounds() and board.piece(neighbour) == king:
                return True
    return False


# --- SHAPES (pure geometry, no board) ---
def is_straight(d_row: int, d_col: int) -> bool:
    return (d_row == 0) != (d_col == 0)


def is_diagonal(d_row: int, d_col: int) -> bool:
    return abs(d_row) == abs(d_col) != 0


def is_knight_jump(d_row: int, d_col: int) -> bool:
    return (abs(d_row), abs(d_col)) in {(2, 1), (1, 2)}


def is_single_step(d_row: int, d_col: int) -> bool:
    return max(abs(d_row), abs(d_col)) == 1


def pawn_shape(from_square: Square, to_square: Square, color: Color) -> bool:
    d_row, d_col = _deltas(from_square, to_square)
    direction = PAWN_DIRECTION[color]
    if d_col == 0:
        double_step = d_row == 2 * direction and from_square.row == PAWN_START_ROW[color]
        return d_row == direction or double_step
    return abs(d_col) == 1 and d_row == direction


def knight_shape(from_square: Square, to_square: Square, color: Color) -> bool:
    return is_knight_jump(*_deltas(from_square, to_square))


def bishop_shape(from_square: Square, to_square: Square, color: Color) -> bool:
    return is_diagonal(*_deltas(from_square, to_square))


def rook_shape(from_square: Square, to_square: Square, color: Color) -> bool:
    return is_straight(*_deltas(from_square, to_square))


def queen_shape(from_square: Square, to_square: Square, color: Color) -> bool:
    return rook_shape(from_square, to_square, color) or bishop_shape(
        from_square, to_square, color
    )


def king_shape(from_square: Square, to_square: Square, color: Color) -> bool:
    return is_single_step(*_deltas(from_square, to_square))


ShapeFn = Callable[[Square, Square, Color], bool]
SHAPE_RULES: dict[PieceType, ShapeFn] = {
    PieceType.PAWN: pawn_shape,
    PieceType.KNIGHT: knight_shape,
    PieceType.BISHOP: bishop_shape,
    PieceType.ROOK: rook_shape,
    PieceType.QUEEN: queen_shape,
    PieceType.KING: king_shape,
}


def fits_shape(piece_type: PieceType, color: Color, from_square: Square, to_square: Square) -> bool:
    """Could the piece make this move on an empty board? Lets callers tell a blocked path apart from a wrong shape."""
    return _lookup(SHAPE_RULES, piece_type)(from_square, to_square, color)


def is_castling_shape(piece: Piece, from_square: Square, to_square: Square) -> bool:
    """A king moving two squares sideways. Whether it may actually castle is up to castling.py"""
    d_row, d_col = _deltas(from_square, to_square)
    return piece.type == PieceType.KING and d_row == 0 and abs(d_col) == 2


def is_promotion(piece: Piece, to_square: Square) -> bool:
    """Pawn reaching the far rank for its color"""
    return piece.type == PieceType.PAWN and to_square.row == PROMOTION_ROW[piece.color]


# --- MOVEMENT RULES ---
def can_pawn_move(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - can move by two from its starting rank, if both squares it passes are empty
    - takes diagonally (only when there is an opposing piece to take)

    NOTE: No en passant.
    """
    if not pawn_shape(from_square, to_square, color):
        return False

    d_row, d_col = _deltas(from_square, to_square)
    if d_col != 0:
        return board.is_occupied_by(to_square, color.opponent)

    passed = from_square.offset(PAWN_DIRECTION[color], 0)
    if abs(d_row) == 2 and not board.is_empty(passed):
        return False
    return board.is_empty(to_square)


def can_knight_move(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    """Knights jump: |delta_row|, |delta_col| is (2, 1) or (1, 2). Nothing in between can block them."""
    return is_knight_jump(*_deltas(from_square, to_square)) and is_enterable(
        to_square, color, board
    )


def can_bishop_move(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return (
        is_diagonal(*_deltas(from_square, to_square))
        and is_enterable(to_square, color, board)
        and is_path_clear(from_square, to_square, board)
    )


def can_rook_move(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    """Rooks move either horizontally or vertically"""
    return (
        is_straight(*_deltas(from_square, to_square))
        and is_enterable(to_square, color, board)
        and is_path_clear(from_square, to_square, board)
    )


def can_queen_move(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return can_rook_move(from_square, to_square, color, board) or can_bishop_move(
        from_square, to_square, color, board
    )


def can_king_move(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    It may never step next to the opposing king.
    Castling is modelled as a special king move (handled separately).
    """
    return (
        is_single_step(*_deltas(from_square, to_square))
        and is_enterable(to_square, color, board)
        and not is_adjacent_to_king(to_square, color.opponent, board)
    )


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MoveRuleFn = Callable[[Square, Square, Color, Board], bool]
MOVEMENT_RULES: dict[PieceType, MoveRuleFn] = {
    PieceType.PAWN: can_pawn_move,
    PieceType.KNIGHT: can_knight_move,
    PieceType.BISHOP: can_bishop_move,
    PieceType.ROOK: can_rook_move,
    PieceType.QUEEN: can_queen_move,
    PieceType.KING: can_king_move,
}


def can_move(
    piece_type: PieceType,
    color: Color,
    from_square: Square,
    to_square: Square,
    board: Board,
) -> bool:
    """Pseudo-legal move check for a piece of the given type and color"""
    rule = _lookup(MOVEMENT_RULES, piece_type)
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return False
    return rule(from_square, to_square, color, board)


# --- CAPTURING RULES / ATTACKING RULES ---
# Which squares does a piece hit? Same as movement, except that
# * pawns only attack diagonally, and only where they could capture (an opposing piece stands there)
# * for the other pieces the destination is not checked (an attacked square may hold anything)
# * kings attack every neighbouring square, and never castle
def pawn_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    d_row, d_col = _deltas(from_square, to_square)
    return (
        d_row == PAWN_DIRECTION[color]
        and abs(d_col) == 1
        and board.is_occupied_by(to_square, color.opponent)
    )


def knight_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return is_knight_jump(*_deltas(from_square, to_square))


def bishop_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return is_diagonal(*_deltas(from_square, to_square)) and is_path_clear(
        from_square, to_square, board
    )


def rook_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return is_straight(*_deltas(from_square, to_square)) and is_path_clear(
        from_square, to_square, board
    )


def queen_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return rook_attacks(from_square, to_square, color, board) or bishop_attacks(
        from_square, to_square, color, board
    )


def king_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return is_single_step(*_deltas(from_square, to_square))


# --- STRATEGY PATTERN: ATTACKING RULES ---
ATTACK_RULES: dict[PieceType, MoveRuleFn] = {
    PieceType.PAWN: pawn_attacks,
    PieceType.KNIGHT: knight_attacks,
    PieceType.BISHOP: bishop_attacks,
    PieceType.ROOK: rook_attacks,
    PieceType.QUEEN: queen_attacks,
    PieceType.KING: king_attacks,
}


def attacks(
    piece_type: PieceType,
    color: Color,
    from_square: Square,
    to_square: Square,
    board: Board,
) -> bool:
    return _lookup(ATTACK_RULES, piece_type)(from_square, to_square, color, board)


def _lookup(rules: dict[PieceType, T], piece_type: PieceType) -> T:
    try:
        return rules[piece_type]
    except KeyError:
        raise UnknownPieceKindError(f"No rule defined for piece type {piece_type!r}") from None
