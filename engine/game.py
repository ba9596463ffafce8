"""
Punto match session: rounds, turns, card flow and win/draw handling.

A ``PuntoGame`` owns all mutable state for one match. Several sessions can
coexist in one process; nothing is shared between them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .board import Board, Bounds, Card, Cell, Color, Position
from .config import RulesConfig
from .lines import winning_line
from .players import PlayerState, create_players, generate_deck
from .rules import ValidityReason, ValidityResult, check_move_validity

logger = logging.getLogger(__name__)


class RoundStatus(str, Enum):
    """Lifecycle of the current round."""
    IN_PROGRESS = "in_progress"
    ROUND_OVER = "round_over"
    MATCH_OVER = "match_over"


@dataclass(frozen=True)
class LegalMove:
    """A playable (hand slot, coordinate) pair."""
    card_index: int
    position: Position


@dataclass
class MoveOutcome:
    """
    Result of ``PuntoGame.execute_move``.

    When ``applied`` is False nothing changed and ``validity`` says why.
    """
    applied: bool
    validity: ValidityResult
    player_id: int
    position: Position
    card: Optional[Card] = None
    round_won: bool = False
    match_won: bool = False
    draw: bool = False
    winner_id: Optional[int] = None
    winning_line: Optional[List[Position]] = None
    next_player_id: Optional[int] = None


class PuntoGame:
    """
    Main Punto game engine.

    Turn order follows player ids. Round wins are final until
    ``next_round`` is called; a drawn round restarts immediately.
    """

    def __init__(self, num_players: int = 2, config: Optional[RulesConfig] = None,
                 seed: Optional[int] = None, cpu_players: Sequence[int] = ()):
        """
        Initialize a match and deal the first round.

        Args:
            num_players: Number of seats (2-4)
            config: Rules configuration (defaults to the standard rules)
            seed: Random seed for deck shuffles
            cpu_players: Ids of seats driven by an agent
        """
        self.config = config or RulesConfig()
        self.rng = np.random.RandomState(seed)
        self.players: List[PlayerState] = create_players(
            num_players, cpu_players, self.config.share_all_colors
        )
        self.board = Board()
        self.current_player_index = 0
        self.status = RoundStatus.IN_PROGRESS
        self.round_number = 0
        self.move_count = 0
        self.winning_line: Optional[List[Position]] = None
        self.last_round_winner: Optional[int] = None
        self.start_round()

    # --- Round lifecycle ---

    def start_round(self) -> None:
        """Clear the board, rebuild every deck and deal fresh hands."""
        self.board = Board()
        self.current_player_index = 0
        self.status = RoundStatus.IN_PROGRESS
        self.winning_line = None
        self.round_number += 1
        for player in self.players:
            player.deck = generate_deck(player.colors, self.rng, self.config.copies_per_value)
            player.hand = []
            self.draw_cards(player, self.config.hand_size)
        logger.info(f"Round {self.round_number} started with {len(self.players)} players")

    def next_round(self) -> None:
        """Continue the match after a round win."""
        if self.status == RoundStatus.MATCH_OVER:
            raise ValueError("Match is over; call reset_match() to play again")
        if self.status != RoundStatus.ROUND_OVER:
            raise ValueError("Current round is still in progress")
        self.start_round()

    def reset_match(self) -> None:
        """Clear round wins and start again from round 1 (stats are kept)."""
        for player in self.players:
            player.wins = 0
        self.round_number = 0
        self.move_count = 0
        self.last_round_winner = None
        self.start_round()

    def draw_cards(self, player: PlayerState, count: int) -> None:
        """Draw up to ``count`` cards without exceeding the hand size."""
        for _ in range(count):
            if not player.deck or len(player.hand) >= self.config.hand_size:
                return
            player.hand.append(player.deck.pop())

    # --- Queries ---

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    @property
    def bounds(self) -> Optional[Bounds]:
        return self.board.bounds

    @property
    def has_cards(self) -> bool:
        return self.board.has_cards

    @property
    def match_winner(self) -> Optional[PlayerState]:
        if self.status != RoundStatus.MATCH_OVER:
            return None
        return self.get_player(self.last_round_winner)

    def get_player(self, player_id: int) -> PlayerState:
        for player in self.players:
            if player.id == player_id:
                return player
        raise ValueError(f"Unknown player id: {player_id}")

    def opponents_of(self, player_id: int) -> List[PlayerState]:
        return [p for p in self.players if p.id != player_id]

    def hand_count(self, player_id: int) -> int:
        return len(self.get_player(player_id).hand)

    def deck_count(self, player_id: int) -> int:
        return len(self.get_player(player_id).deck)

    def is_round_over(self) -> bool:
        return self.status != RoundStatus.IN_PROGRESS

    def is_match_over(self) -> bool:
        return self.status == RoundStatus.MATCH_OVER

    # --- Rules ---

    def check_move_validity(self, pos: Position, card_value: int, player_id: int) -> ValidityResult:
        return check_move_validity(self.board, pos, card_value, player_id, self.config)

    def check_win(self, pos: Position, color: Color, simulation: bool = False) -> bool:
        """
        Check for a winning run through ``pos``.

        Outside simulation the winning line is recorded for highlighting.
        """
        line = winning_line(self.board, pos, color, self.config.win_length)
        if line is None:
            return False
        if not simulation:
            self.winning_line = line
        return True

    def legal_moves(self, player_id: Optional[int] = None) -> List[LegalMove]:
        """All legal (card_index, position) pairs for a player's current hand."""
        player = self.current_player if player_id is None else self.get_player(player_id)
        candidates = self.board.candidate_coordinates()
        moves = []
        for card_index, card in enumerate(player.hand):
            for pos in candidates:
                if self.check_move_validity(pos, card.value, player.id).valid:
                    moves.append(LegalMove(card_index, pos))
        return moves

    def placement_hints(self, card_index: int, player_id: Optional[int] = None) -> Dict[Position, str]:
        """
        Highlight map for one card of a player's hand.

        Maps legal coordinates to ``"valid"`` and empty coordinates next to a
        card that only fail the bounding-box rule to ``"invalid-bounds"``.
        """
        player = self.current_player if player_id is None else self.get_player(player_id)
        card = self._card_at(player, card_index)
        hints: Dict[Position, str] = {}
        for pos in self.board.candidate_coordinates():
            result = self.check_move_validity(pos, card.value, player.id)
            if result.valid:
                hints[pos] = "valid"
            elif (result.reason == ValidityReason.BOUNDS
                  and self.board.is_empty(pos) and self.board.has_neighbor(pos)):
                hints[pos] = "invalid-bounds"
        return hints

    # --- Mutation ---

    def execute_move(self, pos: Position, card_index: int, player_id: Optional[int] = None) -> MoveOutcome:
        """
        Play a card from the current player's hand.

        An illegal placement is a no-op reported through the outcome.

        Raises:
            ValueError: If the round is over, ``player_id`` is not the
                current player, or ``card_index`` is not a hand slot
        """
        if self.status != RoundStatus.IN_PROGRESS:
            raise ValueError("Round is over; call next_round() before moving")
        player = self.current_player
        if player_id is not None and player_id != player.id:
            raise ValueError(f"It is not your turn (current player is {player.name})")
        card = self._card_at(player, card_index)

        validity = self.check_move_validity(pos, card.value, player.id)
        if not validity.valid:
            logger.debug(f"Rejected {card} at {pos} for {player.name}: {validity.reason}")
            return MoveOutcome(
                applied=False,
                validity=validity,
                player_id=player.id,
                position=pos,
                card=card,
                next_player_id=player.id,
            )

        player.hand.pop(card_index)
        self.draw_cards(player, 1)
        self.board.set(pos, Cell.from_card(card, player.id))
        self.move_count += 1
        logger.info(f"{player.name} placed {card} at {pos}")

        outcome = MoveOutcome(applied=True, validity=validity, player_id=player.id, position=pos, card=card)

        if self.check_win(pos, card.color):
            self._handle_round_win(player)
            outcome.round_won = True
            outcome.match_won = self.status == RoundStatus.MATCH_OVER
            outcome.winner_id = player.id
            outcome.winning_line = list(self.winning_line)
            return outcome

        if all(p.is_exhausted() for p in self.players):
            logger.info(f"Round {self.round_number} is a draw; restarting")
            outcome.draw = True
            self.start_round()
            outcome.next_player_id = self.current_player.id
            return outcome

        self._advance_turn()
        outcome.next_player_id = self.current_player.id
        return outcome

    def pass_turn(self) -> int:
        """Skip the current player (no legal placement). Returns the next player id."""
        if self.status != RoundStatus.IN_PROGRESS:
            raise ValueError("Round is over; call next_round() before passing")
        logger.info(f"{self.current_player.name} passes")
        self._advance_turn()
        return self.current_player.id

    def _advance_turn(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.players)

    def _card_at(self, player: PlayerState, card_index: int) -> Card:
        if not 0 <= card_index < len(player.hand):
            raise ValueError(f"{player.name} has no card in hand slot {card_index}")
        return player.hand[card_index]

    def _handle_round_win(self, winner: PlayerState) -> None:
        for player in self.players:
            player.stats.games += 1
        winner.stats.wins += 1
        winner.wins += 1
        self.last_round_winner = winner.id
        if winner.wins >= self.config.rounds_to_win:
            self.status = RoundStatus.MATCH_OVER
            logger.info(f"{winner.name} wins the match ({winner.wins}/{self.config.rounds_to_win})")
        else:
            self.status = RoundStatus.ROUND_OVER
            logger.info(f"{winner.name} takes round {self.round_number} ({winner.wins}/{self.config.rounds_to_win})")

    def get_game_state(self) -> Dict[str, Any]:
        """Get a JSON-friendly snapshot of the session."""
        bounds = self.board.bounds
        return {
            "status": self.status.value,
            "round_number": self.round_number,
            "move_count": self.move_count,
            "current_player": self.current_player.id,
            "has_cards": self.board.has_cards,
            "bounds": None if bounds is None else {
                "min_x": bounds.min_x, "max_x": bounds.max_x,
                "min_y": bounds.min_y, "max_y": bounds.max_y,
            },
            "cells": [
                {"x": pos.x, "y": pos.y, "color": cell.color.value, "value": cell.value, "owner_id": cell.owner_id}
                for pos, cell in self.board.cells.items()
            ],
            "players": [
                {
                    "id": p.id,
                    "name": p.name,
                    "colors": [c.value for c in p.colors],
                    "is_cpu": p.is_cpu,
                    "wins": p.wins,
                    "hand_count": len(p.hand),
                    "deck_count": len(p.deck),
                    "games": p.stats.games,
                    "games_won": p.stats.wins,
                }
                for p in self.players
            ],
            "winning_line": None if self.winning_line is None else [
                {"x": pos.x, "y": pos.y} for pos in self.winning_line
            ],
        }
