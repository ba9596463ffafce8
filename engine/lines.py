"""
Line detection: same-color runs through a coordinate in four directions.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board, Color, Position

# Horizontal, vertical, and the two diagonals (0, 90, 45, 135 degrees)
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (1, 1), (1, -1))

DEFAULT_WIN_LENGTH = 4


@dataclass(frozen=True)
class LineScan:
    """Result of a non-terminal run scan."""
    max_length: int


def _walk(board: Board, pos: Position, color: Color, dx: int, dy: int) -> List[Position]:
    positions = []
    current = pos.offset(dx, dy)
    while True:
        cell = board.get(current)
        if cell is None or cell.color != color:
            return positions
        positions.append(current)
        current = current.offset(dx, dy)


def run_through(board: Board, pos: Position, color: Color, direction: Tuple[int, int]) -> List[Position]:
    """
    Positions of the ``color`` run through ``pos`` along ``direction``.

    ``pos`` itself always counts, as the cell being played. The walk is not
    clamped to any grid, so negative coordinates work the same as positive.
    """
    dx, dy = direction
    forward = _walk(board, pos, color, dx, dy)
    backward = _walk(board, pos, color, -dx, -dy)
    return list(reversed(backward)) + [pos] + forward


def winning_line(board: Board, pos: Position, color: Color,
                 win_length: int = DEFAULT_WIN_LENGTH) -> Optional[List[Position]]:
    """Return the first run through ``pos`` at least ``win_length`` long, if any."""
    for direction in DIRECTIONS:
        line = run_through(board, pos, color, direction)
        if len(line) >= win_length:
            return line
    return None


def check_win(board: Board, pos: Position, color: Color, win_length: int = DEFAULT_WIN_LENGTH) -> bool:
    return winning_line(board, pos, color, win_length) is not None


def count_lines(board: Board, pos: Position, color: Color) -> LineScan:
    """Longest ``color`` run through ``pos`` over all four directions."""
    return LineScan(max_length=max(len(run_through(board, pos, color, d)) for d in DIRECTIONS))
