"""The board: which piece stands on which square. Holds no rules, only the position."""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import InvalidDiagramError, MissingKingError
from src.core.shared_types import Color, PieceType
from src.rules.pieces import Piece
from src.rules.square import BOARD_SIZE, Square, all_squares

EMPTY_SYMBOL = "."

STARTING_DIAGRAM = """
rnbqkbnr
pppppppp
........
........
........
........
PPPPPPPP
RNBQKBNR
"""

Grid = tuple[tuple[Optional[Piece], ...], ...]


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only copy of the 8x8 grid, handed to whoever renders the board."""

    rows: Grid

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.rows[square.row][square.col]

    def to_diagram(self) -> str:
        return "\n".join(
            "".join(piece.to_symbol() if piece else EMPTY_SYMBOL for piece in row)
            for row in self.rows
        )


@dataclass
class Board:
    # only occupied squares are stored
    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def standard(cls) -> Self:
        return cls.from_diagram(STARTING_DIAGRAM)

    @classmethod
    def from_diagram(cls, diagram: str) -> Self:
        """Construct a board from the internal display string.

        Eight lines of eight characters, read from the far rank (rank 8) down to rank 1:
        * '.' is an empty square
        * upper case letters are white pieces, lower case letters black pieces (p, n, b, r, q, k)

        ex. standard starting position:
        rnbqkbnr
        pppppppp
        ........ (x4)
        PPPPPPPP
        RNBQKBNR
        """
        rows = [line.strip() for line in diagram.strip().splitlines() if line.strip()]
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise InvalidDiagramError(
                f"A board diagram needs {BOARD_SIZE} rows of {BOARD_SIZE} squares:\n{diagram}"
            )

        position: dict[Square, Piece] = {}
        for row_idx, row in enumerate(rows):
            for col_idx, character in enumerate(row):
                if character != EMPTY_SYMBOL:
                    position[Square(row_idx, col_idx)] = Piece.from_symbol(character)
        return cls(position)

    def to_diagram(self) -> str:
        return self.snapshot().to_diagram()

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            tuple(
                tuple(self.piece(Square(row, col)) for col in range(BOARD_SIZE))
                for row in range(BOARD_SIZE)
            )
        )

    def copy(self) -> Self:
        """Independent board for probing hypothetical moves. Pieces are immutable, so copying the mapping suffices."""
        return type(self)(dict(self.position))

    # --- QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return square not in self.position

    def is_occupied_by(self, square: Square, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color == color

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square in all_squares() if self.is_occupied_by(square, color)]

    def find_king(self, color: Color) -> Square:
        king = Piece(PieceType.KING, color)
        for square, piece in self.position.items():
            if piece == king:
                return square
        raise MissingKingError(f"No {color} king on the board:\n{self.to_diagram()}")

    def piece_count(self) -> int:
        return len(self.position)

    def only_kings_remain(self) -> bool:
        return self.piece_count() == 2 and all(
            piece.type == PieceType.KING for piece in self.position.values()
        )

    # --- UPDATES ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        return self.position.pop(square, None)

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Update the position on the board. Returns the piece that got captured (if any)."""
        piece_that_moved = self.position.pop(from_square)
        captured = self.position.get(to_square)
        self.position[to_square] = piece_that_moved
        return captured
