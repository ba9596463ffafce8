"""
Punto board implementation: sparse signed grid with bounding-box tracking.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional

from .config import MAX_CARD_VALUE, MIN_CARD_VALUE


class Color(Enum):
    """Card colors, in palette order."""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


@dataclass(frozen=True)
class Position:
    """A signed board coordinate relative to the starting cell."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def neighbors(self) -> List["Position"]:
        """Get all 8 surrounding positions (including diagonals)."""
        positions = []
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                positions.append(Position(self.x + dx, self.y + dy))
        return positions

    def __str__(self):
        return f"({self.x},{self.y})"


ORIGIN = Position(0, 0)


@dataclass(frozen=True)
class Card:
    """An immutable numbered card."""
    color: Color
    value: int

    def __post_init__(self):
        if not MIN_CARD_VALUE <= self.value <= MAX_CARD_VALUE:
            raise ValueError(f"Card value must be in {MIN_CARD_VALUE}..{MAX_CARD_VALUE}, got {self.value}")

    def __str__(self):
        return f"{self.color.value} {self.value}"


@dataclass(frozen=True)
class Cell:
    """A card on the board together with the player who placed it."""
    color: Color
    value: int
    owner_id: int

    @classmethod
    def from_card(cls, card: Card, owner_id: int) -> "Cell":
        return cls(card.color, card.value, owner_id)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle enclosing the occupied cells."""
    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @classmethod
    def of(cls, pos: Position) -> "Bounds":
        return cls(pos.x, pos.x, pos.y, pos.y)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def expanded_to(self, pos: Position) -> "Bounds":
        """Return the bounds that would also cover ``pos``."""
        return Bounds(
            min(self.min_x, pos.x),
            max(self.max_x, pos.x),
            min(self.min_y, pos.y),
            max(self.max_y, pos.y),
        )


class Board:
    """
    Punto game board.

    Only occupied coordinates are stored; a missing key is an empty cell.
    Bounds always enclose every card placed through ``set`` during the round
    and never shrink.
    """

    def __init__(self):
        self.cells: Dict[Position, Cell] = {}
        self.bounds: Optional[Bounds] = None

    @property
    def has_cards(self) -> bool:
        return self.bounds is not None

    def get(self, pos: Position) -> Optional[Cell]:
        """Get the cell at a position, or None if empty."""
        return self.cells.get(pos)

    def set(self, pos: Position, cell: Optional[Cell]) -> None:
        """
        Set or clear the cell at a position.

        Placing a card grows the bounds to cover ``pos`` (the first placement
        initializes them). Clearing a cell leaves the bounds untouched.
        """
        if cell is None:
            self.cells.pop(pos, None)
            return
        self.cells[pos] = cell
        if self.bounds is None:
            self.bounds = Bounds.of(pos)
        else:
            self.bounds = self.bounds.expanded_to(pos)

    def is_empty(self, pos: Position) -> bool:
        return pos not in self.cells

    def has_neighbor(self, pos: Position) -> bool:
        """Check if any of the 8 surrounding cells is occupied."""
        return any(n in self.cells for n in pos.neighbors())

    def candidate_coordinates(self) -> List[Position]:
        """
        Positions that could possibly receive a card.

        The origin on an empty board, otherwise the one-cell halo around the
        current bounds (empty cells and occupied ones eligible for overwrite).
        """
        if self.bounds is None:
            return [ORIGIN]
        b = self.bounds
        return [
            Position(x, y)
            for y in range(b.min_y - 1, b.max_y + 2)
            for x in range(b.min_x - 1, b.max_x + 2)
        ]

    @contextmanager
    def simulate(self, pos: Position, cell: Optional[Cell]) -> Iterator[Optional[Cell]]:
        """
        Temporarily put ``cell`` at ``pos`` (or clear it when None).

        Yields the cell that was there before. The previous entry is restored
        on exit, whatever happens inside the block. Bounds are not touched.
        """
        previous = self.cells.get(pos)
        if cell is None:
            self.cells.pop(pos, None)
        else:
            self.cells[pos] = cell
        try:
            yield previous
        finally:
            if previous is None:
                self.cells.pop(pos, None)
            else:
                self.cells[pos] = previous

    def __len__(self):
        return len(self.cells)

    def __contains__(self, pos):
        return pos in self.cells

    def render(self, padding: int = 1) -> str:
        """Text diagram of the bounds plus ``padding`` cells on every side."""
        if self.bounds is None:
            return "."
        b = self.bounds
        rows = []
        for y in range(b.min_y - padding, b.max_y + padding + 1):
            row = []
            for x in range(b.min_x - padding, b.max_x + padding + 1):
                cell = self.cells.get(Position(x, y))
                if cell is None:
                    row.append(" .")
                else:
                    row.append(f"{cell.color.value[0].upper()}{cell.value}")
            rows.append(" ".join(row))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.render()
