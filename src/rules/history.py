"""Undo stack: full snapshots of the game state, taken before every move."""

from dataclasses import dataclass, field
from typing import Optional

from src.rules.board import Board
from src.rules.castling import CastlingRights
from src.rules.pieces import Piece


@dataclass(frozen=True)
class HistoryEntry:
    """State of the game right before a move was made (+ the piece that move captured)"""

    board: Board
    castling_rights: CastlingRights
    move_number: int
    captured: Optional[Piece] = None


@dataclass
class MoveHistory:
    """Stack of HistoryEntry. No capacity limit."""

    entries: list[HistoryEntry] = field(default_factory=list)

    def push(
        self,
        board: Board,
        castling_rights: CastlingRights,
        move_number: int,
        captured: Optional[Piece] = None,
    ) -> HistoryEntry:
        """Stores copies, so later changes to the live board/rights do not leak into the history."""
        entry = HistoryEntry(board.copy(), castling_rights.copy(), move_number, captured)
        self.entries.append(entry)
        return entry

    def pop(self) -> Optional[HistoryEntry]:
        return self.entries.pop() if self.entries else None

    def peek(self) -> Optional[HistoryEntry]:
        return self.entries[-1] if self.entries else None

    def clear(self) -> None:
        self.entries.clear()

    def captured_pieces(self) -> list[Piece]:
        """Every piece taken so far, in order"""
        return [entry.captured for entry in self.entries if entry.captured is not None]

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)
