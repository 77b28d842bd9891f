"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8.
BOARD_SIZE = 8
FILE_LETTERS = "abcdefgh"


@dataclass(frozen=True)
class Square:
    """
    Internal coordinates: row 0 is the far rank (rank 8, black's back rank), row 7 the near rank (rank 1).
    Column 0 is the a-file.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7). Upper case file letters are accepted as well."""
        if len(sq) != 2:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square.")
        file_char, rank_char = sq[0].lower(), sq[1]
        if file_char not in FILE_LETTERS or not rank_char.isdigit():
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square.")

        rank = int(rank_char)
        if not 1 <= rank <= BOARD_SIZE:
            raise InvalidSquareError(f"Rank out of range in {sq!r}.")
        return cls(row=BOARD_SIZE - rank, col=FILE_LETTERS.index(file_char))

    def to_algebraic(self) -> str:
        return f"{FILE_LETTERS[self.col]}{BOARD_SIZE - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return self.to_algebraic()


def all_squares() -> list[Square]:
    """Every square on the board, scanned row by row from the far rank."""
    return [Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]
