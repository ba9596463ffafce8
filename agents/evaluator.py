"""
Single-placement scoring for the Punto heuristic agent.

Every feature is measured by temporarily putting a card on the board,
inspecting the result and restoring the cell (``Board.simulate``), so no
board copy is ever built.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from engine.board import Board, Card, Cell, Position
from engine.lines import DEFAULT_WIN_LENGTH, check_win, count_lines
from engine.players import PlayerState

# Value used for the hypothetical opponent card in the blocking check
BLOCK_PROBE_VALUE = 9


class MoveType(str, Enum):
    """Dominant classification of a candidate placement."""
    NORMAL = "Normal"
    VICTORY = "VICTORY"
    BLOCK_THREAT = "BLOCK THREAT"
    BUILD_LINE = "Build Line"


@dataclass(frozen=True)
class HeuristicWeights:
    """Fixed feature weights."""
    win: int = 10000
    block: int = 5000
    setup: int = 100
    base: int = 1


@dataclass(frozen=True)
class Evaluation:
    """Deterministic score and classification of one placement."""
    score: int
    move_type: MoveType


class HeuristicEvaluator:
    """
    Scores a hypothetical placement:
    - Win now (VICTORY)
    - Extend a run to setup_length or more (Build Line)
    - Occupy a cell where an opponent color would win (BLOCK THREAT)
    - Overwrite a low card with a much higher one
    """

    def __init__(self, weights: HeuristicWeights = HeuristicWeights(),
                 win_length: int = DEFAULT_WIN_LENGTH, setup_length: int = 3):
        self.weights = weights
        self.win_length = win_length
        self.setup_length = setup_length

    def evaluate(self, board: Board, pos: Position, card: Card, player: PlayerState,
                 opponents: Iterable[PlayerState], win_length: Optional[int] = None) -> Evaluation:
        """
        Score ``player`` playing ``card`` at ``pos``.

        The board is left exactly as it was found.

        Args:
            board: Current board (temporarily mutated)
            pos: Target coordinate
            card: Card to play
            player: Player making the move
            opponents: Every other player in the match
            win_length: Run length that wins (defaults to the evaluator setting)

        Returns:
            Evaluation with the aggregate score and the dominant move type
        """
        win_length = win_length or self.win_length
        score = self.weights.base
        move_type = MoveType.NORMAL

        with board.simulate(pos, Cell.from_card(card, player.id)) as original:
            if check_win(board, pos, card.color, win_length):
                score += self.weights.win
                move_type = MoveType.VICTORY
            elif count_lines(board, pos, card.color).max_length >= self.setup_length:
                score += self.weights.setup
                move_type = MoveType.BUILD_LINE

        if move_type in (MoveType.NORMAL, MoveType.BUILD_LINE):
            for opponent in opponents:
                for color in opponent.colors:
                    with board.simulate(pos, Cell(color, BLOCK_PROBE_VALUE, opponent.id)):
                        if check_win(board, pos, color, win_length):
                            score += self.weights.block
                            move_type = MoveType.BLOCK_THREAT

        if original is not None:
            score += (card.value - original.value) * 2

        return Evaluation(score, move_type)
