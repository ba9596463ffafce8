"""
Pydantic schemas for game moves.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .game_state import Coordinate, GameState


class ValidityRequest(BaseModel):
    """Ask whether a placement would be legal."""
    player_id: int = Field(..., ge=0, le=3)
    x: int
    y: int
    card_value: int = Field(..., ge=1, le=9)


class ValidityResponse(BaseModel):
    """Legality verdict. ``reason`` is null for legal moves and no-neighbor rejections."""
    valid: bool
    reason: Optional[str] = None


class MoveRequest(BaseModel):
    """Request to play a card from the hand."""
    player_id: int = Field(..., ge=0, le=3)
    x: int
    y: int
    card_index: int = Field(..., ge=0, description="Hand slot of the card to play")

    model_config = {
        "json_schema_extra": {
            "example": {"player_id": 0, "x": 0, "y": 0, "card_index": 1}
        }
    }


class PassRequest(BaseModel):
    """Request to end the turn without placing a card."""
    player_id: int = Field(..., ge=0, le=3)


class MoveResponse(BaseModel):
    """Response after a move attempt."""
    success: bool
    message: str
    reason: Optional[str] = None
    round_won: bool = False
    match_over: bool = False
    draw: bool = False
    winner_id: Optional[int] = None
    winning_line: Optional[List[Coordinate]] = None
    trace: List[str] = Field(default_factory=list, description="Agent trace for CPU moves")
    game_state: Optional[GameState] = None


class AgentDecisionResponse(BaseModel):
    """Best move suggested by an agent (not applied)."""
    player_id: int
    found: bool
    x: Optional[int] = None
    y: Optional[int] = None
    card_index: Optional[int] = None
    move_type: Optional[str] = None
    score: Optional[int] = None
    nodes_evaluated: int
    trace: List[str]
