"""
Tests for the heuristic and random agents.
"""

import unittest

from agents.evaluator import MoveType
from agents.heuristic_agent import HeuristicAgent
from agents.random_agent import RandomAgent
from agents.registry import build_agent
from engine.board import Card, Color, Position
from engine.game import PuntoGame
from tests.utils_game_states import setup_game, snapshot


def win_scenario(seed=0):
    """P1 (red) has three in a row; the left end is blocked by a blue 9."""
    return setup_game(
        [
            (-1, 0, Color.BLUE, 9, 1),
            (0, 0, Color.RED, 5, 0),
            (1, 0, Color.RED, 5, 0),
            (2, 0, Color.RED, 5, 0),
        ],
        hands=[[Card(Color.RED, 7), Card(Color.RED, 1)], [Card(Color.BLUE, 3), Card(Color.BLUE, 4)]],
        seed=seed,
    )


def block_scenario(seed=0):
    """P2 (blue) threatens four at (3, 1); the other end is P1's own card."""
    return setup_game(
        [
            (-1, 1, Color.RED, 5, 0),
            (0, 1, Color.BLUE, 2, 1),
            (1, 1, Color.BLUE, 2, 1),
            (2, 1, Color.BLUE, 2, 1),
        ],
        hands=[[Card(Color.RED, 5), Card(Color.RED, 6)], [Card(Color.BLUE, 3), Card(Color.BLUE, 4)]],
        seed=seed,
    )


class TestHeuristicAgent(unittest.TestCase):
    """Test the single-ply heuristic agent."""

    def test_takes_the_win(self):
        game = win_scenario()
        decision = HeuristicAgent(seed=42).find_best_move(game, 0)
        self.assertIsNotNone(decision.move)
        self.assertEqual(decision.move.position, Position(3, 0))
        self.assertEqual(decision.move.move_type, MoveType.VICTORY)
        self.assertGreaterEqual(decision.move.score, 10001)

    def test_blocks_the_threat(self):
        game = block_scenario()
        decision = HeuristicAgent(seed=42).find_best_move(game, 0)
        self.assertEqual(decision.move.position, Position(3, 1))
        self.assertIn("BLOCK", decision.move.move_type.value)

    def test_trace_contents(self):
        game = win_scenario()
        decision = HeuristicAgent(seed=1).find_best_move(game, 0)
        trace = decision.trace
        self.assertEqual(trace[0], "Analyzing board state...")
        self.assertIn("> Candidate (3,0): VICTORY", trace)
        self.assertIn("----------------", trace)
        self.assertIn("DECISION: VICTORY", trace)
        self.assertIn("Target: 3, 0", trace)
        self.assertTrue(trace[-1].startswith("Card: red "))
        candidate_lines = [line for line in trace if line.startswith("> Candidate")]
        self.assertLessEqual(len(candidate_lines), 4)

    def test_nodes_match_legal_moves(self):
        game = win_scenario()
        decision = HeuristicAgent(seed=3).find_best_move(game, 0)
        self.assertEqual(decision.nodes_evaluated, len(game.legal_moves(0)))

    def test_does_not_mutate_game(self):
        game = block_scenario()
        before = snapshot(game.board)
        hands = [list(p.hand) for p in game.players]
        HeuristicAgent(seed=5).find_best_move(game, 0)
        self.assertEqual(snapshot(game.board), before)
        self.assertEqual([list(p.hand) for p in game.players], hands)
        self.assertEqual(game.current_player.id, 0)

    def test_seeded_determinism(self):
        """Same seed and same position give the same move."""
        first = HeuristicAgent(seed=7).find_best_move(PuntoGame(seed=11), 0)
        second = HeuristicAgent(seed=7).find_best_move(PuntoGame(seed=11), 0)
        self.assertEqual(first.move, second.move)
        self.assertEqual(first.trace, second.trace)

    def test_opening_move(self):
        game = PuntoGame(seed=3)
        decision = HeuristicAgent(seed=0).find_best_move(game, 0)
        self.assertEqual(decision.move.position, Position(0, 0))
        self.assertEqual(decision.move.move_type, MoveType.NORMAL)
        self.assertEqual(decision.nodes_evaluated, 2)

    def test_no_move(self):
        game = PuntoGame(seed=0)
        game.players[0].hand = []
        decision = HeuristicAgent(seed=0).find_best_move(game, 0)
        self.assertIsNone(decision.move)
        self.assertEqual(decision.nodes_evaluated, 0)
        self.assertEqual(decision.trace[-1], "No valid moves found.")

    def test_chosen_move_is_playable(self):
        game = block_scenario()
        decision = HeuristicAgent(seed=9).find_best_move(game, 0)
        outcome = game.execute_move(decision.move.position, decision.move.card_index, 0)
        self.assertTrue(outcome.applied)

    def test_set_weights(self):
        agent = HeuristicAgent(seed=0)
        agent.set_weights({"block": 1, "unknown": 3})
        self.assertEqual(agent.evaluator.weights.block, 1)
        self.assertEqual(agent.evaluator.weights.win, 10000)
        self.assertEqual(agent.get_action_info()["weights"]["block"], 1)


class TestRandomAgent(unittest.TestCase):

    def test_picks_legal_move(self):
        game = block_scenario()
        decision = RandomAgent(seed=0).find_best_move(game, 0)
        legal = game.legal_moves(0)
        self.assertIn((decision.move.card_index, decision.move.position),
                      [(m.card_index, m.position) for m in legal])
        self.assertEqual(decision.nodes_evaluated, len(legal))

    def test_no_move(self):
        game = PuntoGame(seed=0)
        game.players[0].hand = []
        self.assertIsNone(RandomAgent(seed=0).find_best_move(game, 0).move)


class TestRegistry(unittest.TestCase):

    def test_build_agents(self):
        self.assertIsInstance(build_agent("heuristic", seed=1), HeuristicAgent)
        self.assertIsInstance(build_agent("Random", seed=1), RandomAgent)
        agent = build_agent("heuristic", parameters={"setup": 7})
        self.assertEqual(agent.evaluator.weights.setup, 7)

    def test_unknown_agent(self):
        with self.assertRaises(ValueError):
            build_agent("mcts")


if __name__ == "__main__":
    unittest.main()
