"""FastAPI-powered web UI for playing Tic Tac Toe against the computer."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .ai import next_move
from .game import (
    PLAYER_MOVES,
    Board,
    Player,
    apply_move,
    available_moves,
    empty_board,
    has_empty_square,
    square_state,
    winner,
    winning_line,
)

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an active game against the computer."""

    board: Board = field(default_factory=empty_board)
    # None once the game is over
    turn: Optional[Player] = Player.HUMAN
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def reset(self) -> None:
        self.board = empty_board()
        self.turn = Player.HUMAN
        self.move_log = []
        self.ai_pending = False

    def play(self, player: Player, row: int, col: int) -> None:
        """Place ``player``'s mark and hand the turn over (or end the game)."""
        self.board = apply_move(self.board, (row, col), PLAYER_MOVES[player])
        self.move_log.append({"player": player.value, "row": row, "col": col})
        if winner(self.board) is not None or not has_empty_square(self.board):
            self.turn = None
        elif player == Player.HUMAN:
            self.turn = Player.COMPUTER
        else:
            self.turn = Player.HUMAN


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(
    title="Tic Tac Toe", description="Tic tac toe against a minimax opponent"
)


# Seconds the computer appears to "think"; never affects the chosen move.
AI_THINK_DELAY: float = 0.7

STATUS_TEXT: Dict[Optional[Player], str] = {
    Player.HUMAN: "Your turn!",
    Player.COMPUTER: "Thinking...",
    None: "Game over!",
}


class MoveRequest(BaseModel):
    """Request payload for submitting the human's move."""

    row: int = Field(ge=0, le=2)
    col: int = Field(ge=0, le=2)


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession()
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, AI_THINK_DELAY))

    with session.lock:
        try:
            if session.turn != Player.COMPUTER:
                return
            move = next_move(session.board)
            if move is None:
                return
            session.play(Player.COMPUTER, *move)
            logger.info("Game %s: computer played %s", game_id, move)
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        board = session.board
        won_by = winner(board)
        line = winning_line(board)
        state: Dict[str, object] = {
            "id": game_id,
            "board": [[cell.value if cell else "" for cell in row] for row in board],
            "turn": session.turn.value if session.turn else None,
            "winner": won_by.value if won_by else None,
            "winningLine": [list(path) for path in line] if line else None,
            "drawn": won_by is None and not has_empty_square(board),
            "gameOver": session.turn is None,
            "status": STATUS_TEXT[session.turn],
            "availableMoves": (
                [{"row": r, "col": c} for r, c in available_moves(board)]
                if session.turn == Player.HUMAN
                else []
            ),
            "moveLog": list(session.move_log),
            "aiPending": session.ai_pending,
        }
        if session.move_log:
            state["lastMove"] = session.move_log[-1]
        return state


def _apply_player_move(
    game_id: str,
    session: GameSession,
    row: int,
    col: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    with session.lock:
        if session.turn is None:
            raise HTTPException(status_code=400, detail="Game already finished")

        if session.ai_pending or session.turn != Player.HUMAN:
            raise HTTPException(status_code=400, detail="Computer is thinking")

        if square_state(session.board, (row, col)) is not None:
            raise HTTPException(status_code=400, detail="Square already taken")

        session.play(Player.HUMAN, row, col)
        logger.debug("Game %s: human played %s", game_id, (row, col))

        should_schedule_ai = session.turn == Player.COMPUTER
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.row, request.col, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="Computer is thinking")
        session.reset()
    logger.info("Game %s: play again", game_id)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic Tac Toe</title>
    <link rel=\"preconnect\" href=\"https://fonts.googleapis.com\" />
    <link rel=\"preconnect\" href=\"https://fonts.gstatic.com\" crossorigin />
    <link
      href=\"https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap\"
      rel=\"stylesheet\"
    />
    <style>
      :root {
        color-scheme: light;
        font-family: 'Poppins', system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
        font-weight: 400;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: clamp(1.5rem, 4vw, 2.5rem);
        width: min(480px, 100%);
        text-align: center;
      }
      h1 {
        margin: 0 0 0.25rem;
        font-size: clamp(1.8rem, 2.4vw + 1.2rem, 2.6rem);
        letter-spacing: 0.06em;
        color: #0c1a33;
      }
      .underline {
        height: 4px;
        width: 4rem;
        margin: 0 auto 1.25rem;
        border-radius: 2px;
        background: linear-gradient(90deg, #4c6ef5, #f06595);
      }
      .status {
        display: flex;
        justify-content: center;
        align-items: center;
        gap: 1rem;
        min-height: 2.5rem;
        margin-bottom: 1.5rem;
        font-weight: 600;
      }
      .status.thinking {
        font-style: italic;
        font-weight: 400;
      }
      #play-again {
        border: none;
        border-radius: 999px;
        padding: 0.4rem 1.1rem;
        background: #4c6ef5;
        color: #fff;
        font: inherit;
        cursor: pointer;
      }
      #play-again[hidden] {
        display: none;
      }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 8px;
        margin: 0 auto;
        width: min(320px, 100%);
      }
      .square {
        aspect-ratio: 1;
        border: none;
        border-radius: 12px;
        background: #eef1ff;
        font: inherit;
        font-size: 2.6rem;
        font-weight: 700;
        color: #13203a;
        cursor: pointer;
        transition: background 0.2s ease, transform 0.2s ease;
      }
      .square:disabled {
        cursor: default;
      }
      .square:not(:disabled):hover {
        background: #dbe2ff;
      }
      .square.mark-X {
        color: #4c6ef5;
      }
      .square.mark-O {
        color: #f06595;
      }
      .square.winning {
        background: #fff3bf;
        animation: pulse 0.9s ease-in-out infinite alternate;
      }
      @keyframes pulse {
        from { transform: scale(1); }
        to { transform: scale(1.06); }
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic Tac Toe</h1>
      <div class=\"underline\"></div>
      <div id=\"status\" class=\"status\">
        <span id=\"status-text\">Loading...</span>
        <button id=\"play-again\" type=\"button\" hidden>Play again</button>
      </div>
      <div id=\"board\" class=\"board\"></div>
    </main>
    <script>
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const statusTextEl = document.getElementById('status-text');
      const playAgainButton = document.getElementById('play-again');

      let gameId = null;
      let gameState = null;
      let isRequestPending = false;
      let aiPollHandle = null;

      async function request(method, url, body) {
        const response = await fetch(url, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body ? JSON.stringify(body) : undefined,
        });
        const payload = await response.json();
        if (!response.ok) {
          throw new Error(payload.detail || 'Request failed');
        }
        return payload;
      }

      function isWinningSquare(row, col) {
        const line = gameState.winningLine;
        return Boolean(line && line.some(([r, c]) => r === row && c === col));
      }

      function render() {
        statusTextEl.textContent = gameState.status;
        statusEl.classList.toggle('thinking', gameState.turn === 'computer');
        playAgainButton.hidden = !gameState.gameOver;

        boardEl.innerHTML = '';
        gameState.board.forEach((cells, row) => {
          cells.forEach((mark, col) => {
            const square = document.createElement('button');
            square.type = 'button';
            square.className = 'square';
            square.textContent = mark;
            if (mark) {
              square.classList.add(`mark-${mark}`);
            }
            if (isWinningSquare(row, col)) {
              square.classList.add('winning');
            }
            square.disabled = Boolean(mark) || gameState.turn !== 'human' || isRequestPending;
            square.addEventListener('click', () => playSquare(row, col));
            boardEl.appendChild(square);
          });
        });
      }

      function update(state) {
        gameState = state;
        render();
        if (gameState.aiPending) {
          scheduleAiPoll();
        }
      }

      function scheduleAiPoll() {
        if (aiPollHandle !== null) {
          return;
        }
        aiPollHandle = setTimeout(async () => {
          aiPollHandle = null;
          try {
            update(await request('GET', `/api/game/${gameId}`));
          } catch (error) {
            statusTextEl.textContent = error.message;
          }
        }, 250);
      }

      async function playSquare(row, col) {
        if (isRequestPending) {
          return;
        }
        isRequestPending = true;
        try {
          update(await request('POST', `/api/game/${gameId}/move`, { row, col }));
        } catch (error) {
          statusTextEl.textContent = error.message;
        } finally {
          isRequestPending = false;
          render();
        }
      }

      async function startGame() {
        const state = gameId
          ? await request('POST', `/api/game/${gameId}/reset`)
          : await request('POST', '/api/game');
        gameId = state.id;
        update(state);
      }

      playAgainButton.addEventListener('click', () => {
        startGame().catch((error) => {
          statusTextEl.textContent = error.message;
        });
      });

      startGame().catch((error) => {
        statusTextEl.textContent = error.message;
      });
    </script>
  </body>
</html>
"""
