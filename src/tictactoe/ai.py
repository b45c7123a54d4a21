"""Exhaustive minimax search for the computer opponent.

The search is deliberately unoptimised: no depth limit, no pruning and no
transposition table. A 3x3 board has few enough positions that a full
game-tree walk from the empty board finishes in seconds.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import List, Optional

from .game import (
    Board,
    Mark,
    TicTacToeGame,
    as_board,
    available_moves,
    has_win,
    is_full,
    place,
)

logger = logging.getLogger("tictactoe.ai")

# Scores are fixed from O's side; recursion must alternate marks every ply
WIN_SCORE = 10


@dataclass(frozen=True)
class MoveCandidate:
    index: Optional[int]
    score: int


def best_move(board: Board, mark: Mark) -> MoveCandidate:
    """Return the optimal move for ``mark`` and its minimax score.

    O maximises and X minimises; ties go to the lowest cell index. Raises
    ``ValueError`` when the board has no empty cell or is already won, since
    no meaningful move exists in either case.
    """
    board = as_board(board)
    mark = Mark(mark)

    if has_win(board, Mark.X) or has_win(board, Mark.O):
        raise ValueError("Game already finished")
    if is_full(board):
        raise ValueError("No valid moves available")

    result = _minimax(board, mark)
    logger.debug(
        "best move for %s: cell %s (score %d)", mark.value, result.index, result.score
    )
    return result


def _minimax(board: Board, mark: Mark) -> MoveCandidate:
    # Terminal checks, in this order, before any children are generated
    if has_win(board, Mark.X):
        return MoveCandidate(index=None, score=-WIN_SCORE)
    if has_win(board, Mark.O):
        return MoveCandidate(index=None, score=WIN_SCORE)
    if is_full(board):
        return MoveCandidate(index=None, score=0)

    candidates: List[MoveCandidate] = []
    for index in available_moves(board):
        child = place(board, index, mark)
        result = _minimax(child, mark.opponent)
        candidates.append(MoveCandidate(index=index, score=result.score))

    best = candidates[0]
    for candidate in candidates[1:]:
        if mark is Mark.O and candidate.score > best.score:
            best = candidate
        elif mark is Mark.X and candidate.score < best.score:
            best = candidate
    return best


@dataclass
class MinimaxAI:
    """Computer opponent bound to one mark of a ``TicTacToeGame``."""

    player: Mark = Mark.O

    def choose(self, game: TicTacToeGame) -> int:
        if game.current_player != self.player:
            raise ValueError("It is not this AI player's turn")
        move = best_move(game.board, self.player)
        if move.index is None:
            raise RuntimeError("No valid moves available")
        return move.index
