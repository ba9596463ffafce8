"""
Move legality for Punto.

Illegal moves are reported as values, not exceptions, so callers can decide
whether to ignore them or show feedback.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import ORIGIN, Board, Bounds, Position
from .config import RulesConfig


class ValidityReason(str, Enum):
    """Why a placement was rejected."""
    EDGE_OF_BOARD = "edge-of-board"
    MUST_START_CENTER = "must-start-center"
    SELF_OVERWRITE = "self-overwrite"
    VALUE_TOO_LOW = "value-too-low"
    BOUNDS = "bounds"


@dataclass(frozen=True)
class ValidityResult:
    """
    Outcome of a legality check.

    ``reason`` is None both for legal moves and for placements with no
    neighboring card, which are rejected without a reason.
    """
    valid: bool
    reason: Optional[ValidityReason] = None

    def __bool__(self):
        return self.valid


VALID = ValidityResult(True)


def _reject(reason: Optional[ValidityReason] = None) -> ValidityResult:
    return ValidityResult(False, reason)


def is_on_grid(pos: Position, config: RulesConfig) -> bool:
    """Check if a coordinate maps onto the physical display grid."""
    col = pos.x + config.center
    row = pos.y + config.center
    return 0 <= col < config.grid_size and 0 <= row < config.grid_size


def check_move_validity(board: Board, pos: Position, card_value: int, player_id: int,
                        config: Optional[RulesConfig] = None) -> ValidityResult:
    """
    Decide whether ``player_id`` may play a card of ``card_value`` at ``pos``.

    Rules, first failure wins:
    0. Optional display-grid edge
    1. First card must go on the origin
    2. An empty target needs an occupied neighbor (rejected without reason)
    3. Never overwrite your own card; overwrite others only with a higher value
    4. The resulting bounding box must fit in max_span x max_span
    """
    config = config or RulesConfig()

    if config.enforce_grid_edges and not is_on_grid(pos, config):
        return _reject(ValidityReason.EDGE_OF_BOARD)

    if not board.has_cards and pos != ORIGIN:
        return _reject(ValidityReason.MUST_START_CENTER)

    existing = board.get(pos)

    if board.has_cards and existing is None and not board.has_neighbor(pos):
        return _reject()

    if existing is not None:
        if existing.owner_id == player_id:
            return _reject(ValidityReason.SELF_OVERWRITE)
        if card_value <= existing.value:
            return _reject(ValidityReason.VALUE_TOO_LOW)

    merged = board.bounds.expanded_to(pos) if board.bounds is not None else Bounds.of(pos)
    if merged.width > config.max_span or merged.height > config.max_span:
        return _reject(ValidityReason.BOUNDS)

    return VALID
