"""Tic-tac-toe package exposing game logic, the minimax AI, and the web application."""

from .ai import MinimaxAI, MoveCandidate, best_move
from .game import (
    GameMode,
    GameOutcome,
    Mark,
    OutcomeStatus,
    TicTacToeGame,
    evaluate_outcome,
    has_win,
    is_full,
)
from .ui import app

__all__ = [
    "GameMode",
    "GameOutcome",
    "Mark",
    "MinimaxAI",
    "MoveCandidate",
    "OutcomeStatus",
    "TicTacToeGame",
    "app",
    "best_move",
    "evaluate_outcome",
    "has_win",
    "is_full",
]
