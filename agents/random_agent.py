"""
Random agent for Punto that picks uniformly from legal placements.
"""

from typing import Any, Dict, Optional

import numpy as np

from engine.game import PuntoGame

from .evaluator import MoveType
from .heuristic_agent import AgentDecision, AgentMove


class RandomAgent:
    """
    Random agent that selects placements uniformly from legal moves.

    This agent serves as a baseline for the heuristic agent in arena runs.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random agent.

        Args:
            seed: Random seed for reproducible behavior
        """
        self.rng = np.random.RandomState(seed)

    def find_best_move(self, game: PuntoGame, player_id: int) -> AgentDecision:
        """Select a random legal placement for ``player_id`` without applying it."""
        legal_moves = game.legal_moves(player_id)
        if not legal_moves:
            return AgentDecision(move=None, trace=["No valid moves found."], nodes_evaluated=0)

        choice = legal_moves[self.rng.randint(0, len(legal_moves))]
        card = game.get_player(player_id).hand[choice.card_index]
        move = AgentMove(choice.position, choice.card_index, card, MoveType.NORMAL, 0)
        trace = [
            f"Picked 1 of {len(legal_moves)} legal moves",
            f"Target: {move.position.x}, {move.position.y}",
            f"Card: {card.color.value} {card.value}",
        ]
        return AgentDecision(move=move, trace=trace, nodes_evaluated=len(legal_moves))

    def get_action_info(self) -> Dict[str, Any]:
        """Get information about the agent."""
        return {
            "name": "RandomAgent",
            "type": "random",
            "description": "Selects placements uniformly from legal moves",
        }

    def reset(self):
        """Reset agent state (no-op for random agent)."""
        pass

    def set_seed(self, seed: int):
        """Set random seed for reproducible behavior."""
        self.rng = np.random.RandomState(seed)
