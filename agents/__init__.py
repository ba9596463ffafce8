"""
Move-selection agents for Punto.
"""

from .evaluator import Evaluation, HeuristicEvaluator, HeuristicWeights, MoveType
from .heuristic_agent import AgentDecision, AgentMove, HeuristicAgent
from .random_agent import RandomAgent
from .registry import AGENT_TYPES, AgentProtocol, build_agent

__all__ = [
    "Evaluation", "HeuristicEvaluator", "HeuristicWeights", "MoveType",
    "AgentDecision", "AgentMove", "HeuristicAgent",
    "RandomAgent",
    "AGENT_TYPES", "AgentProtocol", "build_agent",
]
