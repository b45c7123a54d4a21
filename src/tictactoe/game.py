"""Core rules for classic 3x3 tic-tac-toe: boards, outcomes, and the game loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class Mark(str, Enum):
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


class GameMode(str, Enum):
    SINGLE_PLAYER = "single"
    TWO_PLAYER = "two"


EMPTY = ""

# Row-major cells, index = row * 3 + col
Board = Tuple[str, ...]

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

_CELL_ALIASES = {None: EMPTY, " ": EMPTY, EMPTY: EMPTY, "X": "X", "O": "O"}


# ---------- Board values ----------


def empty_board() -> Board:
    return (EMPTY,) * 9


def as_board(cells: Iterable[Optional[str]]) -> Board:
    """Normalise any 9-cell sequence into an immutable board.

    ``None`` and ``" "`` are accepted as empty cells. Raises ``ValueError``
    for the wrong number of cells or an unknown cell value.
    """
    board: List[str] = []
    for cell in cells:
        if isinstance(cell, Mark):
            cell = cell.value
        try:
            board.append(_CELL_ALIASES[cell])
        except (KeyError, TypeError):
            raise ValueError(f"Invalid cell value {cell!r}") from None
    if len(board) != 9:
        raise ValueError(f"A board has 9 cells, got {len(board)}")
    return tuple(board)


def available_moves(board: Board) -> List[int]:
    return [i for i, c in enumerate(board) if c == EMPTY]


def place(board: Board, index: int, mark: Mark) -> Board:
    """Return a new board with ``mark`` at ``index``; the input is untouched."""
    if not 0 <= index < 9:
        raise ValueError(f"Cell index {index} is out of range")
    if board[index] != EMPTY:
        raise ValueError("Cell already occupied")
    return board[:index] + (Mark(mark).value,) + board[index + 1 :]


# ---------- Terminal conditions ----------


def has_win(board: Board, mark: Mark) -> bool:
    return any(
        board[a] == mark and board[b] == mark and board[c] == mark
        for a, b, c in WINNING_LINES
    )


def is_full(board: Board) -> bool:
    return all(c != EMPTY for c in board)


class OutcomeStatus(str, Enum):
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameOutcome:
    status: OutcomeStatus
    winner: Optional[Mark] = None

    @classmethod
    def ongoing(cls) -> "GameOutcome":
        return cls(OutcomeStatus.ONGOING)

    @classmethod
    def draw(cls) -> "GameOutcome":
        return cls(OutcomeStatus.DRAW)

    @classmethod
    def win_for(cls, mark: Mark) -> "GameOutcome":
        return cls(OutcomeStatus.WIN, Mark(mark))

    @property
    def is_over(self) -> bool:
        return self.status is not OutcomeStatus.ONGOING


def evaluate_outcome(board: Board) -> GameOutcome:
    """Classify a board. X is checked before O if a board somehow shows both."""
    if has_win(board, Mark.X):
        return GameOutcome.win_for(Mark.X)
    if has_win(board, Mark.O):
        return GameOutcome.win_for(Mark.O)
    if is_full(board):
        return GameOutcome.draw()
    return GameOutcome.ongoing()


# ---------- Game ----------


@dataclass
class TicTacToeGame:
    board: Board = field(default_factory=empty_board)
    current_player: Mark = Mark.X
    mode: GameMode = GameMode.TWO_PLAYER
    # Only consulted in single-player mode
    computer: Mark = Mark.O
    move_log: List[Tuple[Mark, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Accept raw lists and strings from callers
        self.board = as_board(self.board)
        self.current_player = Mark(self.current_player)
        self.computer = Mark(self.computer)
        self.mode = GameMode(self.mode)

    # ---- API used by UI & AI ----

    @property
    def outcome(self) -> GameOutcome:
        return evaluate_outcome(self.board)

    @property
    def is_over(self) -> bool:
        return self.outcome.is_over

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.mode is GameMode.SINGLE_PLAYER
            and not self.is_over
            and self.current_player == self.computer
        )

    def available_moves(self) -> List[int]:
        if self.is_over:
            return []
        return available_moves(self.board)

    def play_move(self, index: int) -> None:
        """Place the current player's mark and hand the turn over."""
        if self.is_over:
            raise ValueError("Game already finished")

        player = self.current_player
        self.board = place(self.board, index, player)
        self.move_log.append((player, index))

        # The last mover stays current once the game has ended
        if not self.is_over:
            self.current_player = player.opponent

    def reset(self) -> None:
        self.board = empty_board()
        self.current_player = Mark.X
        self.move_log.clear()

    def status_message(self) -> str:
        outcome = self.outcome
        if outcome.status is OutcomeStatus.WIN:
            return f"Player {outcome.winner.value} has won!"
        if outcome.status is OutcomeStatus.DRAW:
            return "Game is a draw!"
        return f"It's {self.current_player.value}'s turn"
