"""
The GameSession is the entrypoint into the rules engine for the service layer.
It owns the live game state (board, castling rights, move number) and the undo history,
and is responsible for orchestrating everything required to play a move:

validate --> snapshot for undo --> update the board --> update castling rights --> next turn --> has the game ended?
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from loguru import logger

from src.core.exceptions import IllegalMoveError, NoSelectionError
from src.core.shared_types import CastlingSide, Color, RejectionReason, Status
from src.rules.board import Board, BoardSnapshot
from src.rules.castling import CastlingRights, can_castle
from src.rules.endgame import classify, legal_destinations
from src.rules.history import MoveHistory
from src.rules.legality import REJECTION_MESSAGES, MoveContext, check_move, execute_move
from src.rules.pieces import Piece
from src.rules.square import Square

SquareRef = Square | str


@dataclass(frozen=True)
class GameOutcome:
    status: Status = Status.IN_PROGRESS
    winner: Optional[Color] = None

    @property
    def is_over(self) -> bool:
        return self.status != Status.IN_PROGRESS


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    board: BoardSnapshot
    outcome: GameOutcome
    reason: Optional[RejectionReason] = None
    captured_piece: Optional[Piece] = None
    promoted: bool = False
    castling_side: Optional[CastlingSide] = None

    @property
    def message(self) -> str:
        return REJECTION_MESSAGES[self.reason] if self.reason else ""

    def raise_if_rejected(self) -> None:
        if not self.accepted:
            raise IllegalMoveError(self.message, self.reason)


@dataclass(frozen=True)
class UndoResult:
    """undone is False when there was nothing to undo (board and move number are unchanged then)"""

    undone: bool
    board: BoardSnapshot
    move_number: int
    restored_piece: Optional[Piece] = None


@dataclass(frozen=True)
class CastlingAvailability:
    color: Color
    side: CastlingSide
    available: bool


@dataclass
class GameState:
    board: Board
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    # starts at 1 and counts half-moves. Odd: white to move, even: black to move
    move_number: int = 1

    @property
    def turn(self) -> Color:
        return Color.WHITE if self.move_number % 2 == 1 else Color.BLACK


@dataclass
class GameSession:
    state: GameState
    history: MoveHistory = field(default_factory=MoveHistory)
    outcome: GameOutcome = field(default_factory=GameOutcome)
    selection: Optional[Square] = None

    @classmethod
    def new(cls) -> Self:
        """A new game in the standard starting position"""
        return cls(GameState(Board.standard()))

    @classmethod
    def from_position(
        cls,
        board: Board,
        castling_rights: Optional[CastlingRights] = None,
        move_number: int = 1,
    ) -> Self:
        """Start from any position (mostly for tests/puzzles). The position might already be decided."""
        session = cls(GameState(board, castling_rights or CastlingRights(), move_number))
        session._update_outcome()
        return session

    # --- QUERIES ---
    @property
    def turn(self) -> Color:
        return self.state.turn

    @property
    def move_number(self) -> int:
        return self.state.move_number

    @property
    def castling_rights(self) -> CastlingRights:
        return self.state.castling_rights.copy()

    def snapshot(self) -> BoardSnapshot:
        return self.state.board.snapshot()

    def piece(self, square: SquareRef) -> Optional[Piece]:
        return self.state.board.piece(_as_square(square))

    def legal_destinations(self, square: SquareRef) -> list[Square]:
        """Move guide: where can the piece on this square go? Never logs rejections."""
        return legal_destinations(
            _as_square(square),
            self.state.board,
            self.state.castling_rights,
            MoveContext.MOVE_GUIDE,
        )

    def castling_availability(self, color: Color, side: CastlingSide) -> CastlingAvailability:
        available = can_castle(color, side, self.state.board, self.state.castling_rights)
        return CastlingAvailability(color, side, available)

    def captured_pieces(self) -> list[Piece]:
        return self.history.captured_pieces()

    # --- SELECTION ---
    def select(self, square: SquareRef) -> bool:
        """Pick up a piece. Only the pieces of the player to move can be selected, and only while the game is on."""
        target = _as_square(square)
        piece = self.state.board.piece(target)
        if self.outcome.is_over or piece is None or piece.color != self.turn:
            return False
        self.selection = target
        return True

    def deselect(self) -> None:
        self.selection = None

    def move_selected(self, to_square: SquareRef) -> MoveResult:
        if self.selection is None:
            raise NoSelectionError("Select a piece before making a move.")
        return self.apply_move(self.selection, to_square)

    # --- MOVES ---
    def apply_move(self, from_square: SquareRef, to_square: SquareRef) -> MoveResult:
        """
        Attempt to make a move
        -----

        1. the game must still be going, and it must be your piece
        2. the move must be legal
        3. store the current state in the history (for undo)
        4. update the board (castling moves the rook too, pawns on the far rank become queens)
        5. update the castling rights
        6. next turn, and check whether the opponent got checkmated/stalemated

        A rejected move changes nothing.
        """
        origin, destination = _as_square(from_square), _as_square(to_square)
        board = self.state.board

        if self.outcome.is_over:
            return self._rejected(origin, destination, RejectionReason.GAME_OVER)

        piece = board.piece(origin)
        if piece is None:
            return self._rejected(origin, destination, RejectionReason.EMPTY_SQUARE)
        if piece.color != self.turn:
            return self._rejected(origin, destination, RejectionReason.NOT_YOUR_TURN)

        verdict = check_move(
            origin, destination, board, self.state.castling_rights, MoveContext.PLAYER_MOVE
        )
        if verdict.reason is not None:
            # check_move already logged the warning
            return self._rejected(origin, destination, verdict.reason, log=False)

        self.history.push(
            board, self.state.castling_rights, self.state.move_number, board.piece(destination)
        )
        executed = execute_move(board, origin, destination)
        self.state.castling_rights.record_move(
            executed.piece, origin, destination, executed.captured
        )
        self.state.move_number += 1
        self.selection = None
        logger.debug(
            f"Move {self.state.move_number - 1}: {executed.piece.to_symbol()} {origin}{destination}"
        )

        self._update_outcome()
        return MoveResult(
            accepted=True,
            board=self.snapshot(),
            outcome=self.outcome,
            captured_piece=executed.captured,
            promoted=executed.promoted,
            castling_side=executed.castling_side,
        )

    def play(self, *moves: str) -> MoveResult:
        """convenience method to play a sequence of moves written like 'e2e4'. Raises IllegalMoveError on the first rejected one."""
        if not moves:
            raise ValueError("play() needs at least one move")
        result: Optional[MoveResult] = None
        for move in moves:
            result = self.apply_move(move[:2], move[2:4])
            result.raise_if_rejected()
        assert result is not None
        return result

    def undo(self) -> UndoResult:
        """
        Take back the last move: board, castling rights and move number go back to what they were.
        Nothing to take back? Then nothing changes.
        """
        entry = self.history.pop()
        if entry is None:
            return UndoResult(False, self.snapshot(), self.state.move_number)

        # the entry holds its own copies, and it is gone from the history now
        self.state = GameState(entry.board, entry.castling_rights, entry.move_number)
        # moves are only ever made while the game is in progress
        self.outcome = GameOutcome()
        self.selection = None
        logger.debug(f"Undo back to move {entry.move_number}")
        return UndoResult(True, self.snapshot(), entry.move_number, entry.captured)

    def undo_to(self, move_number: int) -> UndoResult:
        """Rewind the game until it is move `move_number` again"""
        result = UndoResult(False, self.snapshot(), self.state.move_number)
        undone = False
        while self.state.move_number > move_number and self.history:
            result = self.undo()
            undone = True
        return UndoResult(undone, result.board, result.move_number, result.restored_piece)

    def reset(self) -> None:
        """Back to the standard starting position. History and castling rights are cleared."""
        self.state = GameState(Board.standard())
        self.history.clear()
        self.outcome = GameOutcome()
        self.selection = None

    # -- PRIVATE HELPERS ---
    def _update_outcome(self) -> None:
        """Is the player to move now checkmated or stalemated?"""
        status = classify(self.turn, self.state.board, self.state.castling_rights)
        winner = self.turn.opponent if status == Status.CHECKMATE else None
        self.outcome = GameOutcome(status, winner)
        if self.outcome.is_over:
            logger.info(
                f"Game over after move {self.state.move_number - 1}: {status} (winner: {winner})"
            )

    def _rejected(
        self,
        from_square: Square,
        to_square: Square,
        reason: RejectionReason,
        log: bool = True,
    ) -> MoveResult:
        if log:
            logger.warning(f"Rejected {from_square}{to_square}: {REJECTION_MESSAGES[reason]}")
        return MoveResult(
            accepted=False, board=self.snapshot(), outcome=self.outcome, reason=reason
        )


def _as_square(square: SquareRef) -> Square:
    return square if isinstance(square, Square) else Square.from_algebraic(square)
