"""
Agent registry and the shared move-selection protocol for Punto.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from engine.game import PuntoGame

from .heuristic_agent import AgentDecision, HeuristicAgent
from .random_agent import RandomAgent


class AgentProtocol(Protocol):
    """Unified interface: find_best_move(game, player_id) -> AgentDecision (read-only)."""

    def find_best_move(self, game: PuntoGame, player_id: int) -> AgentDecision:
        ...

    def get_action_info(self) -> Dict[str, Any]:
        ...


AGENT_TYPES = ("heuristic", "random")


def build_agent(agent_type: str, seed: Optional[int] = None,
                parameters: Optional[Dict[str, Any]] = None) -> AgentProtocol:
    """
    Create an agent by type name.

    Args:
        agent_type: One of AGENT_TYPES
        seed: Random seed for the agent
        parameters: Heuristic weight overrides (win, block, setup, base)
    """
    agent_type = agent_type.lower()
    if agent_type == "heuristic":
        agent = HeuristicAgent(seed=seed)
        if parameters:
            agent.set_weights(parameters)
        return agent
    if agent_type == "random":
        return RandomAgent(seed=seed)
    raise ValueError(f"Unknown agent type: {agent_type}")
