"""
Pydantic schemas for the Punto web API.
"""

from .game_config import GameConfig, AgentConfig, PlayerType
from .game_state import (
    AgentInfo, BoundsState, CardState, CellState, Coordinate,
    GameCreateResponse, GameState, GameStatus, PlayerState
)
from .move import (
    AgentDecisionResponse, MoveRequest, MoveResponse, PassRequest,
    ValidityRequest, ValidityResponse
)

__all__ = [
    "GameConfig",
    "AgentConfig",
    "PlayerType",
    "AgentInfo",
    "BoundsState",
    "CardState",
    "CellState",
    "Coordinate",
    "GameCreateResponse",
    "GameState",
    "GameStatus",
    "PlayerState",
    "AgentDecisionResponse",
    "MoveRequest",
    "MoveResponse",
    "PassRequest",
    "ValidityRequest",
    "ValidityResponse",
]
