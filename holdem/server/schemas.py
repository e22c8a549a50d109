"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from holdem.core.rules import MIN_PLAYERS, MAX_PLAYERS


# ============= Request Schemas =============

class StartGameRequest(BaseModel):
    """Request to seat a new table."""
    difficulty: str = Field(default="medium", description="easy, medium, hard or master")
    player_count: int = Field(ge=MIN_PLAYERS, le=MAX_PLAYERS, default=4)


class ActionRequest(BaseModel):
    """Request to take a game action for the human seat."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, RAISE, ALL_IN")
    amount: Optional[int] = Field(default=0, ge=0, description="Raise increment for RAISE")


# ============= Response Schemas =============

class WinnerSchema(BaseModel):
    """One pot award."""
    player_id: int
    name: Optional[str] = None
    amount: int
    hand_name: str
    pot_index: int = 0


class RefundSchema(BaseModel):
    """Uncalled chips returned to a player."""
    player_id: int
    name: Optional[str] = None
    amount: int


class OutcomeSchema(BaseModel):
    """Outcome of a finished round."""
    winners: List[WinnerSchema]
    refunds: List[RefundSchema]
    showdown: bool = False
    by_fold: bool = False


class ActionResultSchema(BaseModel):
    """Result of an action."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    ai_turns: int = 0
    phase: Optional[str] = None
    outcome: Optional[OutcomeSchema] = None


class ErrorSchema(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None


class GameStateSchema(BaseModel):
    """Complete table snapshot."""
    public_info: Dict[str, Any]
    private_info: Dict[str, Any]
