"""
Tests for the placement evaluator used by the heuristic agent.
"""

import unittest

from agents.evaluator import HeuristicEvaluator, HeuristicWeights, MoveType
from engine.board import Board, Card, Color, Position
from tests.utils_game_states import build_board, make_player, snapshot


class TestHeuristicEvaluator(unittest.TestCase):
    """Test scoring and classification of single placements."""

    def setUp(self):
        self.evaluator = HeuristicEvaluator()
        self.me = make_player(0, Color.RED)
        self.opponent = make_player(1, Color.BLUE)

    def evaluate(self, board, pos, card, opponents=None):
        return self.evaluator.evaluate(
            board, pos, card, self.me, [self.opponent] if opponents is None else opponents
        )

    def test_victory(self):
        """Completing four of our color scores above the win weight."""
        board = build_board([(x, 0, Color.RED, 5, 0) for x in range(3)])
        result = self.evaluate(board, Position(3, 0), Card(Color.RED, 7))
        self.assertEqual(result.move_type, MoveType.VICTORY)
        self.assertGreaterEqual(result.score, 10001)

    def test_victory_skips_block_check(self):
        board = build_board(
            [(x, 0, Color.RED, 5, 0) for x in range(3)]
            + [(3, y, Color.BLUE, 5, 1) for y in range(1, 4)]
        )
        result = self.evaluate(board, Position(3, 0), Card(Color.RED, 7))
        self.assertEqual(result.move_type, MoveType.VICTORY)
        self.assertEqual(result.score, 10001)

    def test_build_line(self):
        board = build_board([(0, 0, Color.RED, 5, 0), (1, 0, Color.RED, 5, 0)])
        result = self.evaluate(board, Position(2, 0), Card(Color.RED, 4))
        self.assertEqual(result.move_type, MoveType.BUILD_LINE)
        self.assertEqual(result.score, 101)

    def test_block_threat(self):
        """Occupying the cell that would complete an opponent's four."""
        board = build_board([(x, 1, Color.BLUE, 5, 1) for x in range(3)])
        result = self.evaluate(board, Position(3, 1), Card(Color.RED, 2))
        self.assertEqual(result.move_type, MoveType.BLOCK_THREAT)
        self.assertEqual(result.score, 5001)

    def test_build_line_and_block_accumulate(self):
        board = build_board(
            [(1, 0, Color.RED, 5, 0), (2, 0, Color.RED, 5, 0)]
            + [(3, y, Color.BLUE, 5, 1) for y in range(1, 4)]
        )
        result = self.evaluate(board, Position(3, 0), Card(Color.RED, 4))
        self.assertEqual(result.move_type, MoveType.BLOCK_THREAT)
        self.assertEqual(result.score, 1 + 100 + 5000)

    def test_block_counts_each_threatening_color(self):
        """An opponent with two colors can be blocked twice at one cell."""
        opponent = make_player(1, Color.GREEN, Color.YELLOW)
        board = build_board(
            [(x, 0, Color.GREEN, 5, 1) for x in range(1, 4)]
            + [(0, y, Color.YELLOW, 5, 1) for y in range(1, 4)]
        )
        result = self.evaluate(board, Position(0, 0), Card(Color.RED, 4), opponents=[opponent])
        self.assertEqual(result.move_type, MoveType.BLOCK_THREAT)
        self.assertEqual(result.score, 1 + 2 * 5000)

    def test_overwrite_bonus(self):
        board = build_board([(0, 0, Color.RED, 5, 0), (1, 0, Color.BLUE, 3, 1)])
        result = self.evaluate(board, Position(1, 0), Card(Color.RED, 8))
        self.assertEqual(result.move_type, MoveType.NORMAL)
        self.assertEqual(result.score, 1 + (8 - 3) * 2)

    def test_normal_move(self):
        board = build_board([(0, 0, Color.BLUE, 5, 1)])
        result = self.evaluate(board, Position(1, 1), Card(Color.RED, 5))
        self.assertEqual(result.move_type, MoveType.NORMAL)
        self.assertEqual(result.score, 1)

    def test_board_unchanged(self):
        """Evaluation leaves cells and bounds exactly as they were."""
        board = build_board(
            [(x, 0, Color.RED, 5, 0) for x in range(3)]
            + [(1, 1, Color.BLUE, 3, 1)]
        )
        before = snapshot(board)
        for pos in board.candidate_coordinates():
            self.evaluate(board, pos, Card(Color.RED, 9))
        self.assertEqual(snapshot(board), before)
        self.assertEqual(board.get(Position(1, 1)).color, Color.BLUE)

    def test_empty_board_keeps_no_bounds(self):
        board = Board()
        self.evaluate(board, Position(0, 0), Card(Color.RED, 5))
        self.assertFalse(board.has_cards)
        self.assertEqual(len(board), 0)

    def test_custom_weights_and_win_length(self):
        evaluator = HeuristicEvaluator(weights=HeuristicWeights(win=50, base=0))
        board = build_board([(0, 0, Color.RED, 5, 0), (1, 0, Color.RED, 5, 0)])
        result = evaluator.evaluate(board, Position(2, 0), Card(Color.RED, 5), self.me, [], win_length=3)
        self.assertEqual(result.move_type, MoveType.VICTORY)
        self.assertEqual(result.score, 50)


if __name__ == "__main__":
    unittest.main()
