"""
Pydantic schemas for game configuration.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PlayerType(str, Enum):
    """Types of players in a game."""
    HUMAN = "human"
    HEURISTIC = "heuristic"
    RANDOM = "random"


class AgentConfig(BaseModel):
    """Configuration for one seat."""
    type: PlayerType = PlayerType.HUMAN
    name: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict, description="Heuristic weight overrides")
    seed: Optional[int] = None


class GameConfig(BaseModel):
    """Configuration for a Punto match."""
    players: List[AgentConfig] = Field(..., min_length=2, max_length=4)
    game_id: Optional[str] = None
    seed: Optional[int] = Field(default=None, description="Seed for deck shuffles")
    rounds_to_win: Optional[int] = Field(default=None, ge=1, le=9, description="Unset keeps PUNTO_ROUNDS_TO_WIN or 2")
    share_all_colors: Optional[bool] = Field(default=None, description="Two players split all four colors")
    enforce_grid_edges: Optional[bool] = Field(default=None, description="Keep placements inside the display grid")

    model_config = {
        "json_schema_extra": {
            "example": {
                "players": [
                    {"type": "human", "name": "Player 1"},
                    {"type": "heuristic", "name": "CPU", "seed": 42},
                ],
                "rounds_to_win": 2,
                "share_all_colors": False,
            }
        }
    }
