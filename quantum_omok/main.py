# -*- coding: utf-8 -*-
# quantum_omok/main.py

import logging
import uuid
from threading import Lock
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from quantum_omok.board import BOARD_SIZE
from quantum_omok.collapse import default_random_source
from quantum_omok.config import ALLOWED_ORIGINS, OMOK_LOG_LEVEL, OMOK_OBSERVE_DELAY_SEC, OMOK_RANDOM_SEED
from quantum_omok.errors import GameError, GameNotFound
from quantum_omok.game import GameState, QuantumOmokGame
from quantum_omok.stones import STONE_KINDS

logging.basicConfig(level=OMOK_LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)
logger.info("ALLOWED_ORIGINS = %s", ALLOWED_ORIGINS)

app = FastAPI(title="Quantum Omok Backend", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ───────────── 예외 핸들러 ─────────────
@app.exception_handler(GameNotFound)
async def game_not_found_handler(request: Request, exc: GameNotFound):
    return JSONResponse(status_code=404, content={"detail": exc.message, "error": exc.code})


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    logger.debug("[reject] %s %s -> %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=400, content={"detail": exc.message, "error": exc.code})


@app.exception_handler(Exception)
async def all_exception_handler(request: Request, exc: Exception):
    logger.exception("[EXC] %s %s", exc.__class__.__name__, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# ───────────── 메모리 저장 ─────────────
games: Dict[str, QuantumOmokGame] = {}
_games_lock = Lock()


def _new_engine() -> QuantumOmokGame:
    return QuantumOmokGame(
        rng=default_random_source(OMOK_RANDOM_SEED),
        delay=OMOK_OBSERVE_DELAY_SEC,
    )


def _get_game_or_404(game_id: str) -> QuantumOmokGame:
    g = games.get(game_id)
    if g is None:
        raise GameNotFound()
    return g


def _state(g: QuantumOmokGame, game_id: str, message: str = "") -> dict:
    state = {"id": game_id, "game_id": game_id, **g.to_dict()}
    if message:
        state["message"] = message
    return state


# ───────────── 스키마 ─────────────
class MoveRequest(BaseModel):
    row: int
    col: int


class LastPlaced(BaseModel):
    row: int
    col: int
    kind: str


class GameStateResponse(BaseModel):
    id: str
    game_id: str
    board: List[List[Optional[str]]]
    current_turn: int
    move_count: int
    phase: str
    collapsed: bool
    game_over: bool
    winner: Optional[int] = None
    winning_line: Optional[List[List[int]]] = None
    last_placed: Optional[LastPlaced] = None
    next_kind: Optional[str] = None
    observations: int = 0
    message: Optional[str] = None


class StoneKindResponse(BaseModel):
    name: str
    black_probability_percent: int = Field(..., ge=0, le=100)
    placed_by: int
    css_class: str


class StoneCatalogResponse(BaseModel):
    board_size: int
    stones: List[StoneKindResponse]


# ───────────── 라우트 ─────────────
@app.get("/__ping__")
def ping():
    return {"ok": True}


@app.get("/api/stones", response_model=StoneCatalogResponse)
def stone_catalog():
    return {
        "board_size": BOARD_SIZE,
        "stones": [
            {"name": k.name, "black_probability_percent": k.black_probability_percent,
             "placed_by": int(k.placed_by), "css_class": k.css_class}
            for k in STONE_KINDS.values()
        ],
    }


@app.post("/api/game/new", response_model=GameStateResponse)
def new_game():
    gid = str(uuid.uuid4())
    g = _new_engine()
    with _games_lock:
        games[gid] = g
    logger.info("[new] game %s", gid)
    return _state(g, gid)


@app.get("/api/game/{game_id}", response_model=GameStateResponse)
def get_game(game_id: str):
    return _state(_get_game_or_404(game_id), game_id)


@app.delete("/api/game/{game_id}")
def delete_game(game_id: str):
    with _games_lock:
        g = games.pop(game_id, None)
    if g is None:
        raise GameNotFound()
    g.close()
    return {"ok": True, "game_id": game_id}


@app.post("/api/game/{game_id}/move", response_model=GameStateResponse)
def place_move(game_id: str, req: MoveRequest):
    g = _get_game_or_404(game_id)
    s: GameState = g.place_move(int(req.row), int(req.col))
    return _state(g, game_id, message=f"{s.last_placed_kind.name} 돌을 놓았습니다.")


@app.post("/api/game/{game_id}/observe", response_model=GameStateResponse)
def observe(game_id: str):
    g = _get_game_or_404(game_id)
    g.observe()
    return _state(g, game_id, message="관측했습니다. 승리 판정을 기다리는 중입니다.")


@app.post("/api/game/{game_id}/revert", response_model=GameStateResponse)
def revert(game_id: str):
    g = _get_game_or_404(game_id)
    g.revert()
    return _state(g, game_id, message="관측 전 상태로 되돌렸습니다.")


@app.post("/api/game/{game_id}/toggle", response_model=GameStateResponse)
def toggle(game_id: str):
    """관측 / 되돌리기 버튼 하나로 처리"""
    g = _get_game_or_404(game_id)
    g.toggle_observation()
    return _state(g, game_id)


@app.post("/api/game/{game_id}/reset", response_model=GameStateResponse)
def reset(game_id: str):
    g = _get_game_or_404(game_id)
    g.new_game()
    return _state(g, game_id, message="새 게임을 시작합니다.")
