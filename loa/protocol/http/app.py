from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...engine.board import Board, STARTPOS_LAYOUT
from ...engine.game import Game
from ...engine.move import parse_move
from ...engine.perft import perft as perft_nodes
from ...engine.piece import EMPTY, full_name
from ...search.service import DEFAULT_DEPTH, SearchService


logger = logging.getLogger(__name__)

MAX_SEARCH_DEPTH = 5
MAX_PERFT_DEPTH = 4


class CreateGameResponse(BaseModel):
    game_id: str
    layout: str


class SetPositionRequest(BaseModel):
    layout: str = Field(..., description="Layout string, ranks 8..1 then side to move")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move string, e.g. c1-c3")


class MoveLimitRequest(BaseModel):
    limit: int = Field(..., ge=1, description="Moves per side before a tie")


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=MAX_SEARCH_DEPTH)


class PerftRequest(BaseModel):
    layout: str = Field(default=STARTPOS_LAYOUT)
    depth: int = Field(default=1, ge=0, le=MAX_PERFT_DEPTH)


class GameState(BaseModel):
    game_id: str
    layout: str
    turn: str
    legal_moves: List[str]
    moves_made: int
    move_limit: int
    game_over: bool
    winner: Optional[str]
    last_move: Optional[str]
    move_history: List[str]


def create_app(search_depth: int = DEFAULT_DEPTH) -> FastAPI:
    """Build the HTTP application.

    Args:
        search_depth (int): Plies searched when a request names no depth.
    """
    app = FastAPI(title="Lines of Action Engine API", version="0.1.0")

    logging.basicConfig(level=logging.INFO)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game_id = store.create(Game.new())
        game = _require_game(store, game_id)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, layout=game.to_layout())

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _game_state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(store, game_id)
        try:
            store.set(game_id, Game.from_layout(req.layout))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid layout: {e}")
        return _game_state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            move = parse_move(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if game.game_over():
            raise HTTPException(status_code=409, detail="game is over")
        try:
            game.apply_move(move)
        except ValueError:
            raise HTTPException(status_code=400, detail="illegal move")
        return _game_state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _game_state(game_id, game)

    @app.post("/api/games/{game_id}/move-limit", response_model=GameState)
    async def set_move_limit(game_id: str, req: MoveLimitRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.set_move_limit(req.limit)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _game_state(game_id, game)

    @app.post("/api/games/{game_id}/search")
    async def search(game_id: str, req: SearchRequest) -> Dict[str, Any]:
        game = _require_game(store, game_id)
        if game.game_over():
            raise HTTPException(status_code=409, detail="game is over")
        res = SearchService(depth=search_depth).search(game.board, depth=req.depth)
        return {
            "best_move": res.best_move.to_str() if res.best_move else None,
            "score": res.score,
            "decisive": res.decisive,
            "nodes": res.nodes,
            "depth": res.depth,
            "time_ms": res.time_ms,
        }

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, Any]:
        try:
            board = Board.from_layout(req.layout)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid layout: {e}")
        return {"nodes": perft_nodes(board, req.depth), "depth": req.depth}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _game_state(game_id: str, game: Game) -> GameState:
    board = game.board
    winner = game.winner()
    history = game.move_history()
    return GameState(
        game_id=game_id,
        layout=game.to_layout(),
        turn=full_name(board.turn),
        legal_moves=[] if winner is not None else [m.to_str() for m in game.legal_moves()],
        moves_made=board.moves_made(),
        move_limit=board.move_limit,
        game_over=winner is not None,
        winner=None if winner is None else ("tie" if winner == EMPTY else full_name(winner)),
        last_move=history[-1] if history else None,
        move_history=history,
    )


# Default app for non-factory servers
app = create_app()
