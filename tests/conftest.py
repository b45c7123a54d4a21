"""Shared fixtures for the tic-tac-toe test suite."""

import pytest

from tictactoe.game import Mark, available_moves, empty_board, evaluate_outcome, place


@pytest.fixture(scope="session")
def reachable_boards():
    """Every board reachable by alternating legal play from the empty board."""

    seen = set()
    stack = [(empty_board(), Mark.X)]
    while stack:
        board, mark = stack.pop()
        if board in seen:
            continue
        seen.add(board)
        if evaluate_outcome(board).is_over:
            continue
        for index in available_moves(board):
            stack.append((place(board, index, mark), mark.opponent))
    return seen
