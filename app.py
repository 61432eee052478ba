from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from game import (  # noqa: E402
    Board,
    Cell,
    ConfigError,
    Decoration,
    Explosion,
    GameConfig,
    GameState,
    config_from_env,
    decorate,
    draw_message,
    new_game,
    player_name,
    turn_message,
    winner_message,
)

DEFAULT_CONFIG = config_from_env()

app = Flask(__name__)


# ---------- JSON (de)serialization ----------

def _config_to_json(cfg: GameConfig) -> Dict[str, Any]:
    return {
        "rows": cfg.rows,
        "cols": cfg.cols,
        "players": cfg.players,
        "startPower": cfg.start_power,
        "capacity": cfg.capacity,
    }


def _json_to_config(obj: Dict[str, Any], base: GameConfig) -> GameConfig:
    if not isinstance(obj, dict):
        raise ValueError("config must be an object")
    return GameConfig(
        rows=int(obj.get("rows", base.rows)),
        cols=int(obj.get("cols", base.cols)),
        players=int(obj.get("players", base.players)),
        start_power=int(obj.get("startPower", base.start_power)),
        capacity=int(obj.get("capacity", base.capacity)),
    )


def _board_to_json(b: Board) -> Dict[str, Any]:
    return {
        "width": int(b.width),
        "height": int(b.height),
        "cells": [[cell.owner, int(cell.power)] for cell in b.grid],
    }


def _json_to_board(obj: Dict[str, Any], cfg: GameConfig) -> Board:
    if not isinstance(obj, dict):
        raise ValueError("board must be an object")
    width = int(obj["width"])
    height = int(obj["height"])
    raw = obj["cells"]
    if len(raw) != width * height:
        raise ValueError(f"expected {width * height} cells, got {len(raw)}")
    grid: List[Cell] = []
    for owner_in, power_in in raw:
        owner = None if owner_in is None else int(owner_in)
        power = int(power_in)
        if owner is not None and not 0 <= owner < cfg.players:
            raise ValueError(f"unknown owner {owner}")
        if not 0 <= power < cfg.capacity:
            raise ValueError(f"power {power} outside [0, {cfg.capacity})")
        if (owner is None) != (power == 0):
            raise ValueError("a cell has power without an owner or an owner without power")
        grid.append(Cell(owner=owner, power=power))
    return Board(width=width, height=height, grid=grid)


def _explosion_to_json(e: Explosion) -> Dict[str, Any]:
    return {
        "cell": [e.coord[0], e.coord[1]],
        "wave": e.wave,
        "owner": e.owner,
        "captured": [[r, c] for (r, c) in e.captured],
    }


def _decoration_to_json(coord, d: Decoration) -> Dict[str, Any]:
    return {
        "cell": [coord[0], coord[1]],
        "delay": d.delay,
        "source": [d.source[0], d.source[1]] if d.source is not None else None,
        "exploding": d.exploding,
    }


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "config": _config_to_json(s.config),
        "board": _board_to_json(s.board),
        "playerOrder": list(s.player_order),
        "turnNumber": s.turn_number,
        "currentPlayer": s.current_player,
        "firstMoves": list(s.first_moves),
        "alive": list(s.alive),
        "gameOver": s.game_over,
        "winner": s.winner,
        "draw": s.is_draw,
        "moveCount": s.move_count,
    }


def json_to_state(obj: Dict[str, Any]) -> GameState:
    """Rebuilds a GameState from `state_to_json` output. Derived fields are ignored."""
    if not isinstance(obj, dict):
        raise ValueError("state must be an object")
    cfg = _json_to_config(obj["config"], DEFAULT_CONFIG)
    board = _json_to_board(obj["board"], cfg)
    winner_in = obj.get("winner")
    return GameState(
        config=cfg,
        board=board,
        player_order=[int(p) for p in obj["playerOrder"]],
        turn_number=int(obj.get("turnNumber", 0)),
        first_moves=[bool(x) for x in obj["firstMoves"]],
        alive=[bool(x) for x in obj["alive"]],
        game_over=bool(obj.get("gameOver", False)),
        winner=None if winner_in is None else int(winner_in),
        move_count=int(obj.get("moveCount", 0)),
    )


def _status_message(s: GameState) -> str:
    if s.game_over:
        return winner_message(s.winner) if s.winner is not None else draw_message()
    return turn_message(s.current_player)


def _legal_json(s: GameState) -> List[List[int]]:
    return [[r, c] for (r, c) in s.legal_cells()]


def _bad_request(msg: str) -> Any:
    return jsonify({"ok": False, "error": msg}), 400


def _json_body() -> Optional[Dict[str, Any]]:
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


# ---------- Game API ----------

@app.get("/api/config")
def api_config() -> Any:
    names = [player_name(p) for p in range(DEFAULT_CONFIG.players)]
    return jsonify({"ok": True, "config": _config_to_json(DEFAULT_CONFIG), "playerNames": names})


@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("request body must be a JSON object")
    try:
        cfg = _json_to_config(body, DEFAULT_CONFIG)
        seed = body.get("seed", None)
        seed = None if seed is None else int(seed)
    except (ConfigError, ValueError, TypeError) as e:
        return _bad_request(f"bad config: {e}")
    state = new_game(cfg, seed=seed)
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "legalCells": _legal_json(state),
        "message": _status_message(state),
    })


@app.post("/api/legal")
def api_legal() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("request body must be a JSON object")
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return _bad_request("state required")
    try:
        state = json_to_state(s_in)
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad state: {e}")
    return jsonify({"ok": True, "legalCells": _legal_json(state), "message": _status_message(state)})


@app.post("/api/place")
def api_place() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("request body must be a JSON object")
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return _bad_request("state required")
    try:
        state = json_to_state(s_in)
        r_in, c_in = body["move"]
        row, col = int(r_in), int(c_in)
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad request: {e}")
    if not state.board.in_bounds(row, col):
        return _bad_request(f"cell ({row}, {col}) is off the board")

    before = state.move_count
    state.place_tile(row, col)
    accepted = state.move_count != before
    explosions = state.last_cascade if accepted else []
    decorations = decorate(explosions)
    winner: Optional[int] = state.winner
    return jsonify({
        "ok": True,
        "accepted": accepted,
        "state": state_to_json(state),
        "explosions": [_explosion_to_json(e) for e in explosions],
        "decorations": [_decoration_to_json(coord, d) for coord, d in decorations.items()],
        "legalCells": _legal_json(state),
        "gameOver": state.game_over,
        "winner": winner,
        "draw": state.is_draw,
        "message": _status_message(state),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    host = os.getenv("COLORWAR_HOST", "127.0.0.1")
    port = int(os.getenv("COLORWAR_PORT", "5000"))
    app.run(host=host, port=port, debug=debug)
