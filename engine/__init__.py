"""
Punto game engine package.

This package contains the core game logic for Punto, including:
- Sparse board model and bounding-box tracking
- Move legality checks
- Line and win detection
- Players, decks and the match session
"""

from .board import Board, Bounds, Card, Cell, Color, Position, ORIGIN
from .config import RulesConfig
from .game import LegalMove, MoveOutcome, PuntoGame, RoundStatus
from .lines import DIRECTIONS, LineScan, check_win, count_lines, winning_line
from .players import PlayerState, PlayerStats
from .rules import ValidityReason, ValidityResult, check_move_validity

__all__ = [
    'Board', 'Bounds', 'Card', 'Cell', 'Color', 'Position', 'ORIGIN',
    'RulesConfig',
    'PuntoGame', 'LegalMove', 'MoveOutcome', 'RoundStatus',
    'DIRECTIONS', 'LineScan', 'check_win', 'count_lines', 'winning_line',
    'PlayerState', 'PlayerStats',
    'ValidityReason', 'ValidityResult', 'check_move_validity',
]
