"""
Game state schemas
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class GameStatus(str, Enum):
    """Round status enumeration."""
    IN_PROGRESS = "in_progress"
    ROUND_OVER = "round_over"
    MATCH_OVER = "match_over"


class Coordinate(BaseModel):
    """A signed board coordinate."""
    x: int
    y: int


class CellState(BaseModel):
    """An occupied cell."""
    x: int
    y: int
    color: str
    value: int = Field(ge=1, le=9)
    owner_id: int


class BoundsState(BaseModel):
    """Occupied bounding box."""
    min_x: int
    max_x: int
    min_y: int
    max_y: int


class CardState(BaseModel):
    color: str
    value: int


class PlayerState(BaseModel):
    """State of a seat. The hand is only revealed to its owner."""
    id: int
    name: str
    colors: List[str]
    is_cpu: bool
    wins: int
    hand_count: int
    deck_count: int
    games: int = 0
    games_won: int = 0
    hand: Optional[List[CardState]] = None


class GameState(BaseModel):
    """Current state of the game."""
    game_id: str
    status: GameStatus
    round_number: int
    move_count: int
    current_player: int
    has_cards: bool
    bounds: Optional[BoundsState] = None
    cells: List[CellState]
    players: List[PlayerState]
    winning_line: Optional[List[Coordinate]] = None
    match_winner: Optional[int] = None
    hints: Optional[Dict[int, Dict[str, str]]] = Field(
        default=None,
        description="Hand slot -> {'x,y': 'valid' or 'invalid-bounds'}, sent only to the current player"
    )


class GameCreateResponse(BaseModel):
    """Response when creating a new game."""
    game_id: str
    game_state: GameState
    message: str


class AgentInfo(BaseModel):
    """Information about an available agent."""
    type: str
    name: str
    description: str
