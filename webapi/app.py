"""
FastAPI application for the Punto Tactics web API

The browser front end renders the board and forwards player intents here;
every rule decision is made by the engine.
"""

import logging
import time
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from agents.registry import AGENT_TYPES, AgentProtocol, build_agent
from engine.board import Position
from engine.config import RulesConfig
from engine.game import MoveOutcome, PuntoGame
from schemas.game_config import GameConfig, PlayerType
from schemas.game_state import (
    AgentInfo, BoundsState, CardState, CellState, Coordinate,
    GameCreateResponse, GameState, GameStatus, PlayerState
)
from schemas.move import (
    AgentDecisionResponse, MoveRequest, MoveResponse, PassRequest,
    ValidityRequest, ValidityResponse
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)


class GameManager:
    """Manages active games and their agents."""

    def __init__(self):
        self.games: Dict[str, Dict[str, Any]] = {}
        self.agent_instances: Dict[str, Dict[int, AgentProtocol]] = {}

    def create_game(self, config: GameConfig) -> str:
        """Create a new game."""
        game_id = config.game_id or str(uuid.uuid4())

        if game_id in self.games:
            raise HTTPException(status_code=400, detail="Game ID already exists")

        # Explicit request values win over PUNTO_* environment overrides
        overrides = config.model_dump(
            include={"rounds_to_win", "share_all_colors", "enforce_grid_edges"},
            exclude_none=True,
        )

        cpu_players = [i for i, p in enumerate(config.players) if p.type != PlayerType.HUMAN]
        try:
            rules = RulesConfig.from_dict({**RulesConfig.from_env().to_dict(), **overrides})
            game = PuntoGame(
                num_players=len(config.players),
                config=rules,
                seed=config.seed,
                cpu_players=cpu_players,
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        for player, player_config in zip(game.players, config.players):
            if player_config.name:
                player.name = player_config.name

        self.games[game_id] = {
            'game': game,
            'config': config,
            'consecutive_passes': 0,
            'created_at': datetime.now(),
            'updated_at': datetime.now(),
        }
        self._initialize_agents(game_id, config)

        logger.info(f"Game created: {game_id}")
        return game_id

    def _initialize_agents(self, game_id: str, config: GameConfig):
        """Initialize agent instances for the CPU seats."""
        agents = {}
        for player_id, player_config in enumerate(config.players):
            if player_config.type == PlayerType.HUMAN:
                continue
            try:
                agents[player_id] = build_agent(
                    player_config.type.value,
                    seed=player_config.seed,
                    parameters=player_config.parameters,
                )
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
        self.agent_instances[game_id] = agents

    def get_game(self, game_id: str) -> PuntoGame:
        if game_id not in self.games:
            raise HTTPException(status_code=404, detail="Game not found")
        return self.games[game_id]['game']

    def _touch(self, game_id: str):
        self.games[game_id]['updated_at'] = datetime.now()

    def get_game_state(self, game_id: str, viewer_id: Optional[int] = None) -> GameState:
        """
        Build the public game state.

        Only ``viewer_id``'s hand is revealed. Placement hints, keyed by hand
        slot, are included only when the viewer is the current human player.
        """
        game = self.get_game(game_id)
        bounds = game.bounds

        players = []
        for p in game.players:
            hand = None
            if viewer_id == p.id:
                hand = [CardState(color=c.color.value, value=c.value) for c in p.hand]
            players.append(PlayerState(
                id=p.id,
                name=p.name,
                colors=[c.value for c in p.colors],
                is_cpu=p.is_cpu,
                wins=p.wins,
                hand_count=len(p.hand),
                deck_count=len(p.deck),
                games=p.stats.games,
                games_won=p.stats.wins,
                hand=hand,
            ))

        hints = None
        current = game.current_player
        if viewer_id == current.id and not game.is_round_over() and not current.is_cpu:
            hints = {
                card_index: {f"{pos.x},{pos.y}": kind for pos, kind in game.placement_hints(card_index).items()}
                for card_index in range(len(current.hand))
            }

        winner = game.match_winner
        return GameState(
            game_id=game_id,
            status=GameStatus(game.status.value),
            round_number=game.round_number,
            move_count=game.move_count,
            current_player=current.id,
            has_cards=game.has_cards,
            bounds=None if bounds is None else BoundsState(
                min_x=bounds.min_x, max_x=bounds.max_x, min_y=bounds.min_y, max_y=bounds.max_y
            ),
            cells=[
                CellState(x=pos.x, y=pos.y, color=cell.color.value, value=cell.value, owner_id=cell.owner_id)
                for pos, cell in game.board.cells.items()
            ],
            players=players,
            winning_line=None if game.winning_line is None else [
                Coordinate(x=pos.x, y=pos.y) for pos in game.winning_line
            ],
            match_winner=None if winner is None else winner.id,
            hints=hints,
        )

    def check_validity(self, game_id: str, request: ValidityRequest) -> ValidityResponse:
        game = self.get_game(game_id)
        result = game.check_move_validity(Position(request.x, request.y), request.card_value, request.player_id)
        return ValidityResponse(valid=result.valid, reason=None if result.reason is None else result.reason.value)

    def make_move(self, game_id: str, move_request: MoveRequest) -> MoveResponse:
        """Apply a human player's move."""
        game = self.get_game(game_id)

        if move_request.player_id in self.agent_instances.get(game_id, {}):
            return MoveResponse(
                success=False,
                message=f"Player {move_request.player_id} is controlled by an agent",
                game_state=self.get_game_state(game_id),
            )

        try:
            outcome = game.execute_move(
                Position(move_request.x, move_request.y),
                move_request.card_index,
                player_id=move_request.player_id,
            )
        except ValueError as e:
            return MoveResponse(
                success=False,
                message=str(e),
                game_state=self.get_game_state(game_id, move_request.player_id),
            )

        self._touch(game_id)
        return self._move_response(game_id, outcome, viewer_id=move_request.player_id)

    def best_move(self, game_id: str, player_id: Optional[int] = None) -> AgentDecisionResponse:
        """Ask an agent for its choice without applying it."""
        game = self.get_game(game_id)
        if player_id is None:
            player_id = game.current_player.id
        try:
            game.get_player(player_id)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        agent = self.agent_instances.get(game_id, {}).get(player_id) or build_agent("heuristic")
        decision = agent.find_best_move(game, player_id)
        move = decision.move
        return AgentDecisionResponse(
            player_id=player_id,
            found=move is not None,
            x=None if move is None else move.position.x,
            y=None if move is None else move.position.y,
            card_index=None if move is None else move.card_index,
            move_type=None if move is None else move.move_type.value,
            score=None if move is None else move.score,
            nodes_evaluated=decision.nodes_evaluated,
            trace=decision.trace,
        )

    def agent_move(self, game_id: str) -> MoveResponse:
        """
        Play the current CPU seat's turn immediately.

        If the agent finds no legal placement the turn is passed.
        """
        game = self.get_game(game_id)
        if game.is_round_over():
            return MoveResponse(success=False, message="Round is over", game_state=self.get_game_state(game_id))

        player = game.current_player
        agent = self.agent_instances.get(game_id, {}).get(player.id)
        if agent is None:
            return MoveResponse(
                success=False,
                message=f"Player {player.id} is not controlled by an agent",
                game_state=self.get_game_state(game_id),
            )

        start = time.perf_counter()
        decision = agent.find_best_move(game, player.id)
        latency_ms = (time.perf_counter() - start) * 1000
        logger.info(f"AGENT MOVE: game_id={game_id}, player={player.name}, "
                    f"nodes={decision.nodes_evaluated}, time={latency_ms:.1f}ms")

        if decision.move is None:
            return MoveResponse(
                success=True,
                message=self._record_pass(game_id, player.name),
                trace=decision.trace,
                game_state=self.get_game_state(game_id),
            )

        outcome = game.execute_move(decision.move.position, decision.move.card_index, player_id=player.id)
        self._touch(game_id)
        response = self._move_response(game_id, outcome)
        response.trace = decision.trace
        return response

    def next_round(self, game_id: str) -> GameState:
        game = self.get_game(game_id)
        try:
            game.next_round()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        self.games[game_id]['consecutive_passes'] = 0
        self._touch(game_id)
        return self.get_game_state(game_id)

    def pass_turn(self, game_id: str, pass_request: PassRequest) -> MoveResponse:
        """
        End a human player's turn. Only allowed when no legal placement exists.
        """
        game = self.get_game(game_id)
        player_id = pass_request.player_id

        if player_id in self.agent_instances.get(game_id, {}):
            message = f"Player {player_id} is controlled by an agent"
        elif game.is_round_over():
            message = "Round is over"
        elif player_id != game.current_player.id:
            message = f"It is not your turn (current player is {game.current_player.name})"
        elif game.legal_moves(player_id):
            message = "Cannot pass while a legal placement exists"
        else:
            message = None

        if message is not None:
            return MoveResponse(success=False, message=message,
                                game_state=self.get_game_state(game_id, player_id))

        return MoveResponse(
            success=True,
            message=self._record_pass(game_id, game.current_player.name),
            game_state=self.get_game_state(game_id, player_id),
        )

    def _record_pass(self, game_id: str, player_name: str) -> str:
        """Pass the current seat. A full cycle of passes restarts the round as a draw."""
        game = self.get_game(game_id)
        game_data = self.games[game_id]
        game.pass_turn()
        game_data['consecutive_passes'] += 1
        self._touch(game_id)

        if game_data['consecutive_passes'] >= len(game.players):
            logger.info(f"No player can move in game {game_id}; restarting round {game.round_number}")
            game_data['consecutive_passes'] = 0
            game.start_round()
            return "No player can move. Round restarted"
        return f"{player_name} has no legal move and passes"

    def _move_response(self, game_id: str, outcome: MoveOutcome, viewer_id: Optional[int] = None) -> MoveResponse:
        if outcome.applied:
            self.games[game_id]['consecutive_passes'] = 0
        else:
            reason = outcome.validity.reason
            return MoveResponse(
                success=False,
                message="Invalid move" if reason is None else f"Invalid move: {reason.value}",
                reason=None if reason is None else reason.value,
                game_state=self.get_game_state(game_id, viewer_id),
            )

        if outcome.match_won:
            message = "Match won"
        elif outcome.round_won:
            message = "Round won"
        elif outcome.draw:
            message = "Draw! Round restarted"
        else:
            message = "Move made successfully"

        return MoveResponse(
            success=True,
            message=message,
            round_won=outcome.round_won,
            match_over=outcome.match_won,
            draw=outcome.draw,
            winner_id=outcome.winner_id,
            winning_line=None if outcome.winning_line is None else [
                Coordinate(x=pos.x, y=pos.y) for pos in outcome.winning_line
            ],
            game_state=self.get_game_state(game_id, viewer_id),
        )


def create_app(game_manager: Optional[GameManager] = None) -> FastAPI:
    """Build the FastAPI application."""
    manager = game_manager or GameManager()
    app = FastAPI(title="Punto Tactics API", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.game_manager = manager

    @app.get("/health")
    def health():
        return {"ok": True, "games": len(manager.games)}

    @app.post("/api/games", response_model=GameCreateResponse)
    async def create_game(config: GameConfig):
        game_id = manager.create_game(config)
        return GameCreateResponse(
            game_id=game_id,
            game_state=manager.get_game_state(game_id),
            message="Game created successfully",
        )

    @app.get("/api/games/{game_id}", response_model=GameState)
    async def get_game(game_id: str, player_id: Optional[int] = None):
        return manager.get_game_state(game_id, player_id)

    @app.post("/api/games/{game_id}/validate", response_model=ValidityResponse)
    async def validate_move(game_id: str, request: ValidityRequest):
        return manager.check_validity(game_id, request)

    @app.post("/api/games/{game_id}/move", response_model=MoveResponse)
    async def make_move(game_id: str, move_request: MoveRequest):
        return manager.make_move(game_id, move_request)

    @app.get("/api/games/{game_id}/best-move", response_model=AgentDecisionResponse)
    async def best_move(game_id: str, player_id: Optional[int] = None):
        return manager.best_move(game_id, player_id)

    @app.post("/api/games/{game_id}/agent-move", response_model=MoveResponse)
    async def agent_move(game_id: str):
        return manager.agent_move(game_id)

    @app.post("/api/games/{game_id}/pass", response_model=MoveResponse)
    async def pass_turn(game_id: str, pass_request: PassRequest):
        return manager.pass_turn(game_id, pass_request)

    @app.post("/api/games/{game_id}/next-round", response_model=GameState)
    async def next_round(game_id: str):
        return manager.next_round(game_id)

    @app.get("/api/agents", response_model=List[AgentInfo])
    async def get_agents():
        return [
            AgentInfo(type=info["type"], name=info["name"], description=info["description"])
            for info in (build_agent(t).get_action_info() for t in AGENT_TYPES)
        ]

    return app


app = create_app()
