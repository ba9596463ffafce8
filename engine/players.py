"""
Player state, color assignment and deck construction.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .board import Card, Color
from .config import MAX_CARD_VALUE, MIN_CARD_VALUE

PALETTE: Tuple[Color, ...] = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)


@dataclass
class PlayerStats:
    """Cross-round record kept for the scoreboard."""
    games: int = 0
    wins: int = 0

    @property
    def win_rate(self) -> float:
        if self.games == 0:
            return 0.0
        return self.wins / self.games


@dataclass
class PlayerState:
    """A seat in the match."""
    id: int
    name: str
    colors: Tuple[Color, ...]
    is_cpu: bool = False
    deck: List[Card] = field(default_factory=list)
    hand: List[Card] = field(default_factory=list)
    wins: int = 0
    stats: PlayerStats = field(default_factory=PlayerStats)

    @property
    def primary_color(self) -> Color:
        return self.colors[0]

    def is_exhausted(self) -> bool:
        """True when the player has nothing left to play this round."""
        return not self.deck and not self.hand


def assign_colors(num_players: int, share_all_colors: bool = False) -> List[Tuple[Color, ...]]:
    """
    Colors owned by each seat.

    One palette color per player, except that two players may split all
    four colors between them.
    """
    if not 2 <= num_players <= len(PALETTE):
        raise ValueError(f"Punto needs 2-{len(PALETTE)} players, got {num_players}")
    if num_players == 2 and share_all_colors:
        return [(Color.RED, Color.BLUE), (Color.GREEN, Color.YELLOW)]
    return [(PALETTE[i],) for i in range(num_players)]


def generate_deck(colors: Sequence[Color], rng: np.random.RandomState, copies_per_value: int = 2) -> List[Card]:
    """Build and shuffle a deck with ``copies_per_value`` of each value per color."""
    deck = [
        Card(color, value)
        for color in colors
        for value in range(MIN_CARD_VALUE, MAX_CARD_VALUE + 1)
        for _ in range(copies_per_value)
    ]
    order = rng.permutation(len(deck))
    return [deck[i] for i in order]


def create_players(num_players: int, cpu_players: Sequence[int] = (),
                   share_all_colors: bool = False) -> List[PlayerState]:
    """Create player seats with their default names ("P1" or "CPU 2")."""
    players = []
    for i, colors in enumerate(assign_colors(num_players, share_all_colors)):
        is_cpu = i in cpu_players
        name = f"CPU {i + 1}" if is_cpu else f"P{i + 1}"
        players.append(PlayerState(id=i, name=name, colors=colors, is_cpu=is_cpu))
    return players
