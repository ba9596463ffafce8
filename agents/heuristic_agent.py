"""
Heuristic agent for Punto: single-ply search over every legal placement.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from engine.board import Card, Position
from engine.game import PuntoGame

from .evaluator import HeuristicEvaluator, MoveType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentMove:
    """The placement an agent settled on."""
    position: Position
    card_index: int
    card: Card
    move_type: MoveType
    score: int


@dataclass
class AgentDecision:
    """Chosen move (None if nothing is playable) plus a readable trace."""
    move: Optional[AgentMove]
    trace: List[str] = field(default_factory=list)
    nodes_evaluated: int = 0


class HeuristicAgent:
    """
    Heuristic agent with a fixed weighted-feature evaluation:
    - Win immediately if possible
    - Block an opponent's win-in-one
    - Build runs of three
    - Prefer large overwrites

    No lookahead beyond the placement itself.
    """

    def __init__(self, seed: Optional[int] = None, evaluator: Optional[HeuristicEvaluator] = None,
                 max_logged_candidates: int = 4):
        """
        Initialize heuristic agent.

        Args:
            seed: Random seed for hand order and tie-breaking
            evaluator: Placement scorer (defaults to standard weights)
            max_logged_candidates: Number of notable candidates written to the trace
        """
        self.rng = np.random.RandomState(seed)
        self.evaluator = evaluator or HeuristicEvaluator()
        self.max_logged_candidates = max_logged_candidates

    def find_best_move(self, game: PuntoGame, player_id: int) -> AgentDecision:
        """
        Pick the best legal placement for ``player_id`` without applying it.

        Every (hand card, candidate coordinate) pair that passes validation is
        scored. Candidates are ranked by ``(score, tie_break)`` where the
        tie-break is drawn uniformly from [0, 1); a later candidate replaces
        the incumbent only if it ranks strictly higher.

        Args:
            game: Session to analyze (left unchanged)
            player_id: Player to move

        Returns:
            AgentDecision with the move, its trace and the number of legal
            placements evaluated
        """
        start = time.perf_counter()
        player = game.get_player(player_id)
        opponents = game.opponents_of(player_id)
        board = game.board

        trace = ["Analyzing board state..."]
        nodes_evaluated = 0
        logged = 0
        best: Optional[AgentMove] = None
        best_key: Optional[Tuple[int, float]] = None

        candidates = board.candidate_coordinates()
        hand_order = self.rng.permutation(len(player.hand))

        for card_index in hand_order:
            card_index = int(card_index)
            card = player.hand[card_index]
            for pos in candidates:
                if not game.check_move_validity(pos, card.value, player.id).valid:
                    continue

                evaluation = self.evaluator.evaluate(board, pos, card, player, opponents,
                                                     win_length=game.config.win_length)
                key = (evaluation.score, float(self.rng.rand()))
                nodes_evaluated += 1

                if evaluation.move_type != MoveType.NORMAL and logged < self.max_logged_candidates:
                    trace.append(f"> Candidate ({pos.x},{pos.y}): {evaluation.move_type.value}")
                    logged += 1

                if best_key is None or key > best_key:
                    best_key = key
                    best = AgentMove(pos, card_index, card, evaluation.move_type, evaluation.score)

        if best is not None:
            trace.append("----------------")
            trace.append(f"DECISION: {best.move_type.value.upper()}")
            trace.append(f"Target: {best.position.x}, {best.position.y}")
            trace.append(f"Card: {best.card.color.value} {best.card.value}")
        else:
            trace.append("No valid moves found.")

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{player.name}: {nodes_evaluated} nodes in {elapsed_ms:.1f}ms -> "
                     f"{best.move_type.value if best else 'no move'}")
        return AgentDecision(move=best, trace=trace, nodes_evaluated=nodes_evaluated)

    def get_action_info(self) -> Dict[str, Any]:
        """Get information about the agent."""
        weights = self.evaluator.weights
        return {
            "name": "HeuristicAgent",
            "type": "heuristic",
            "description": "Single-ply search scoring wins, blocks, line building and overwrites",
            "weights": {
                "win": weights.win,
                "block": weights.block,
                "setup": weights.setup,
                "base": weights.base,
            },
        }

    def reset(self):
        """Reset agent state (no-op for heuristic agent)."""
        pass

    def set_seed(self, seed: int):
        """Set random seed for reproducible behavior."""
        self.rng = np.random.RandomState(seed)

    def set_weights(self, weights: Dict[str, int]):
        """
        Set heuristic weights.

        Args:
            weights: Dictionary of weight names (win, block, setup, base) and values
        """
        known = {k: v for k, v in weights.items() if k in ("win", "block", "setup", "base")}
        self.evaluator.weights = replace(self.evaluator.weights, **known)
