"""
HTTP API Routes for the Hold'em table.

The server hosts one table: the caller plays the human seat and AI turns
are resolved after every human action.
"""

from typing import Dict, Any, Union

from fastapi import APIRouter, Depends, HTTPException, Request

from holdem.core.game import HoldemGame
from holdem.server.schemas import (
    StartGameRequest, ActionRequest, ActionResultSchema, ErrorSchema,
    GameStateSchema, OutcomeSchema,
)

router = APIRouter()


def get_game(request: Request) -> HoldemGame:
    """The table hosted by this app."""
    return request.app.state.game


async def _play_ai_turns(game: HoldemGame) -> int:
    """Resolve AI turns, paced by the think delay when one is configured."""
    if game.config.think_delay > 0:
        return await game.scheduler.run_until_human()
    return game.play_ai_turns()


@router.post("/start_game")
async def start_game(req: StartGameRequest, game: HoldemGame = Depends(get_game)) -> Dict[str, Any]:
    """Seat a new table and deal the first round."""
    try:
        game.start_game(req.difficulty, req.player_count)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    ai_turns = await _play_ai_turns(game)
    return {
        "success": True,
        "message": f"Game started with {req.player_count} players",
        "hand_number": game.hand_number,
        "ai_turns": ai_turns,
    }


@router.post("/start_round")
async def start_round(game: HoldemGame = Depends(get_game)) -> Dict[str, Any]:
    """Deal the next round once the current one has ended."""
    if game.state is None:
        raise HTTPException(status_code=400, detail="Game not started")
    if not game.start_new_round():
        if game.game_over:
            return {"success": False, "message": game.message, "game_over": True}
        raise HTTPException(status_code=400, detail="Cannot start round")

    ai_turns = await _play_ai_turns(game)
    return {
        "success": True,
        "message": f"Hand #{game.hand_number} started",
        "hand_number": game.hand_number,
        "ai_turns": ai_turns,
    }


@router.get("/get_game_state", response_model=GameStateSchema)
async def get_game_state(game: HoldemGame = Depends(get_game)) -> Dict[str, Any]:
    """Snapshot of the table from the human seat's point of view."""
    return game.get_state()


@router.post(
    "/take_action",
    response_model=Union[ActionResultSchema, ErrorSchema],
)
async def take_action(req: ActionRequest, game: HoldemGame = Depends(get_game)) -> Dict[str, Any]:
    """
    Take an action for the human seat.

    Rejected actions change nothing and come back as an error message.
    """
    if game.state is None:
        raise HTTPException(status_code=400, detail="Game not started")

    result = game.act(0, req.action_type.upper(), req.amount or 0)
    if not result.success:
        return {"error": result.message}

    ai_turns = await _play_ai_turns(game)
    return {
        "success": True,
        "message": result.message,
        "action_type": result.action_type.value if result.action_type else None,
        "amount": result.amount,
        "ai_turns": ai_turns,
        "phase": game.phase.value,
        "outcome": game.outcome(),
    }


@router.get("/legal_actions")
async def get_legal_actions(game: HoldemGame = Depends(get_game)) -> Dict[str, Any]:
    """Legal actions for the human seat."""
    if not game.is_human_turn:
        return {"actions": [], "message": "Not your turn"}
    return {"actions": game.get_legal_actions(0)}


@router.get("/outcome", response_model=Union[OutcomeSchema, ErrorSchema])
async def get_outcome(game: HoldemGame = Depends(get_game)) -> Dict[str, Any]:
    """Winners and refunds of the finished round."""
    outcome = game.outcome()
    if outcome is None:
        return {"error": "Round in progress"}
    return outcome


@router.post("/reset_game")
async def reset_game(request: Request) -> Dict[str, Any]:
    """Replace the table with a fresh one (for development/testing)."""
    old = request.app.state.game
    old.scheduler.cancel()
    request.app.state.game = HoldemGame(config=old.config, policy=old.policy)
    return {"success": True, "message": "Game reset"}
