"""FastAPI JSON interface for playing tic-tac-toe against a friend or the computer."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ai import MinimaxAI, best_move
from .game import (
    GameMode,
    GameOutcome,
    Mark,
    TicTacToeGame,
    as_board,
    evaluate_outcome,
)

logger = logging.getLogger("tictactoe.api")


@dataclass
class GameSession:
    """Container for an active game and, in single-player mode, its AI."""

    game: TicTacToeGame
    ai: Optional[MinimaxAI]
    last_active: float = field(default_factory=lambda: time.time())
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
SESSIONS_LOCK = threading.Lock()
SESSION_TTL_SECONDS = 60 * 30  # 30 minutes
app = FastAPI(title="Tic-Tac-Toe", description="Tic-tac-toe with an unbeatable AI")


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    mode: GameMode = Field(
        default=GameMode.SINGLE_PLAYER,
        description="'single' to play the computer, 'two' for two humans",
    )


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=8)


class BoardRequest(BaseModel):
    board: List[Optional[str]] = Field(min_length=9, max_length=9)

    @field_validator("board")
    @classmethod
    def ensure_valid_cells(cls, value: List[Optional[str]]) -> List[Optional[str]]:
        # as_board raises ValueError, which pydantic reports as a 422
        as_board(value)
        return value


class BestMoveRequest(BoardRequest):
    mark: Mark = Mark.O


def _cleanup_sessions() -> None:
    """Remove games nobody has touched within the session TTL."""

    now = time.time()
    expired = [
        game_id
        for game_id, session in list(SESSIONS.items())
        if now - session.last_active >= SESSION_TTL_SECONDS
    ]
    for game_id in expired:
        SESSIONS.pop(game_id, None)
    if expired:
        logger.info("expired %d idle game(s)", len(expired))


def _create_session(mode: GameMode) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    game = TicTacToeGame(mode=mode)
    ai = MinimaxAI(player=game.computer) if mode is GameMode.SINGLE_PLAYER else None
    session = GameSession(game=game, ai=ai)
    session_id = uuid.uuid4().hex
    with SESSIONS_LOCK:
        _cleanup_sessions()
        SESSIONS[session_id] = session
    logger.info("created %s-player game %s", mode.value, session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        session = SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc
    session.last_active = time.time()
    return session


def _run_ai_turn(session: GameSession) -> None:
    # Caller holds session.lock
    game = session.game
    if not session.ai or not game.is_computer_turn:
        return
    cell_index = session.ai.choose(game)
    game.play_move(cell_index)
    logger.info("computer played %s at cell %d", session.ai.player.value, cell_index)


def _serialize_outcome(outcome: GameOutcome) -> Dict[str, object]:
    return {
        "status": outcome.status.value,
        "winner": outcome.winner.value if outcome.winner else None,
    }


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        move_log = [
            {"player": player.value, "cellIndex": index}
            for player, index in game.move_log
        ]
        state: Dict[str, object] = {
            "id": game_id,
            "mode": game.mode.value,
            "currentPlayer": game.current_player.value,
            "board": list(game.board),
            "availableMoves": game.available_moves(),
            "outcome": _serialize_outcome(game.outcome),
            "message": game.status_message(),
            "moveLog": move_log,
        }
        if move_log:
            state["lastMove"] = move_log[-1]
        return state


def _apply_player_move(session: GameSession, cell_index: int) -> None:
    with session.lock:
        game = session.game
        if game.is_over:
            raise HTTPException(status_code=400, detail="Game already finished")

        if game.is_computer_turn:
            raise HTTPException(status_code=400, detail="AI is completing its move")

        try:
            game.play_move(cell_index)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        _run_ai_turn(session)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.mode)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(session, request.cell_index)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.game.reset()
    return _serialize_session(game_id, session)


@app.delete("/api/game/{game_id}", status_code=204)
def delete_game(game_id: str) -> Response:
    with SESSIONS_LOCK:
        removed = SESSIONS.pop(game_id, None)
    if removed is None:
        raise HTTPException(status_code=404, detail="Game not found")
    logger.info("closed game %s", game_id)
    return Response(status_code=204)


@app.post("/api/outcome")
def outcome(request: BoardRequest) -> Dict[str, object]:
    return _serialize_outcome(evaluate_outcome(as_board(request.board)))


@app.post("/api/best-move")
def suggest_move(request: BestMoveRequest) -> Dict[str, object]:
    try:
        move = best_move(as_board(request.board), request.mark)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"index": move.index, "score": move.score}
