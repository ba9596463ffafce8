"""
Arena script for running round-robin CPU-vs-CPU matches between Punto agents.
"""

import os
import sys
import time
import json
import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from agents.registry import build_agent
from engine.config import RulesConfig
from engine.game import PuntoGame
from utils.logging_setup import configure_logging, setup_arena_logging

logger = logging.getLogger(__name__)


class ArenaMatch:
    """
    Represents a single first-to-N match between two agents.
    """

    def __init__(self, agent1_name: str, agent2_name: str, agent1, agent2,
                 config: Optional[RulesConfig] = None, seed: Optional[int] = None):
        """
        Initialize match.

        Args:
            agent1_name: Name of first agent (plays first)
            agent2_name: Name of second agent
            agent1: First agent instance
            agent2: Second agent instance
            config: Rules configuration
            seed: Seed for deck shuffles
        """
        self.agent1_name = agent1_name
        self.agent2_name = agent2_name
        self.agents = {0: agent1, 1: agent2}
        self.names = {0: agent1_name, 1: agent2_name}
        self.config = config or RulesConfig()
        self.seed = seed

        # Match results
        self.winner = None
        self.round_wins = {agent1_name: 0, agent2_name: 0}
        self.rounds_played = 0
        self.draws = 0
        self.moves_made = 0
        self.nodes_evaluated = {agent1_name: 0, agent2_name: 0}
        self.game_duration = 0.0
        self.error = None

    def play_match(self, max_moves: int = 2000, verbose: bool = False) -> Dict[str, Any]:
        """
        Play a complete match.

        Moves are applied as soon as the agent returns them. A round where
        every player passes in a row is scored as a draw and restarted.

        Args:
            max_moves: Maximum placements per match
            verbose: Whether to print game progress

        Returns:
            Match results dictionary
        """
        try:
            start_time = time.time()
            game = PuntoGame(num_players=2, config=self.config, seed=self.seed, cpu_players=(0, 1))
            consecutive_passes = 0

            if verbose:
                print(f"Starting match: {self.agent1_name} vs {self.agent2_name}")

            while not game.is_match_over() and self.moves_made < max_moves:
                if game.is_round_over():
                    game.next_round()
                    consecutive_passes = 0

                player = game.current_player
                name = self.names[player.id]
                decision = self.agents[player.id].find_best_move(game, player.id)
                self.nodes_evaluated[name] += decision.nodes_evaluated

                if decision.move is None:
                    game.pass_turn()
                    consecutive_passes += 1
                    if consecutive_passes >= len(game.players):
                        logger.info("No player can move; scoring the round as a draw")
                        self.draws += 1
                        self.rounds_played += 1
                        game.start_round()
                        consecutive_passes = 0
                    continue

                consecutive_passes = 0
                outcome = game.execute_move(decision.move.position, decision.move.card_index, player.id)
                if not outcome.applied:
                    raise RuntimeError(f"{name} chose an illegal move: {outcome.validity.reason}")
                self.moves_made += 1

                if outcome.draw:
                    self.draws += 1
                    self.rounds_played += 1
                elif outcome.round_won:
                    self.round_wins[name] += 1
                    self.rounds_played += 1
                    if verbose:
                        print(f"Round {game.round_number}: {name} wins with {decision.move.move_type.value}")
                        print(game.board)

            self.game_duration = time.time() - start_time
            winner = game.match_winner
            self.winner = self.names[winner.id] if winner is not None else "tie"

            if verbose:
                print(f"Match finished: {self.winner}")
                print(f"Round wins: {self.round_wins}, draws: {self.draws}")
                print(f"Moves: {self.moves_made}, Duration: {self.game_duration:.2f}s")

        except Exception as e:
            logger.exception(f"Error in match {self.agent1_name} vs {self.agent2_name}")
            self.error = str(e)

        return self.get_results()

    def get_results(self) -> Dict[str, Any]:
        """Get match results."""
        return {
            "agent1": self.agent1_name,
            "agent2": self.agent2_name,
            "winner": self.winner,
            "round_wins": self.round_wins,
            "rounds_played": self.rounds_played,
            "draws": self.draws,
            "moves_made": self.moves_made,
            "nodes_evaluated": self.nodes_evaluated,
            "game_duration": self.game_duration,
            "error": self.error
        }


class Arena:
    """
    Arena for running round-robin tournaments between agents.
    """

    def __init__(self, agents: Dict[str, Any], output_dir: Optional[str] = "arena_results",
                 config: Optional[RulesConfig] = None, seed: Optional[int] = None):
        """
        Initialize arena.

        Args:
            agents: Dictionary of agent names to agent instances
            output_dir: Directory to save results (None = don't save)
            config: Rules configuration shared by all matches
            seed: Base seed; match i uses seed + i
        """
        self.agents = agents
        self.output_dir = output_dir
        self.config = config or RulesConfig()
        self.seed = seed
        self.results = []

        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

    def run_round_robin(self, rounds: int = 1, max_moves: int = 2000, verbose: bool = False) -> Dict[str, Any]:
        """
        Run round-robin tournament; every ordered pair meets ``rounds`` times.

        Returns:
            Tournament results
        """
        agent_names = list(self.agents.keys())
        total_matches = len(agent_names) * (len(agent_names) - 1) * rounds
        logger.info(f"Starting round-robin with {len(agent_names)} agents, {total_matches} matches")

        match_count = 0
        start_time = time.time()

        for round_num in range(rounds):
            if verbose:
                print(f"\n--- Round {round_num + 1} ---")

            for i, agent1_name in enumerate(agent_names):
                for j, agent2_name in enumerate(agent_names):
                    if i == j:
                        continue
                    seed = None if self.seed is None else self.seed + match_count
                    match_count += 1

                    if verbose:
                        print(f"\nMatch {match_count}/{total_matches}: {agent1_name} vs {agent2_name}")

                    match = ArenaMatch(
                        agent1_name, agent2_name,
                        self.agents[agent1_name], self.agents[agent2_name],
                        config=self.config, seed=seed,
                    )
                    result = match.play_match(max_moves=max_moves, verbose=verbose)
                    self.results.append(result)
                    logger.info(f"Match {match_count}/{total_matches}: {agent1_name} vs {agent2_name} -> {result['winner']}")

        total_time = time.time() - start_time
        stats = self._calculate_statistics()

        if self.output_dir:
            self._save_results(stats, total_time)
        if verbose:
            self._print_summary(stats, total_time)

        return stats

    def _calculate_statistics(self) -> Dict[str, Any]:
        """Calculate tournament statistics."""
        agent_names = list(self.agents.keys())
        stats = {
            "agents": agent_names,
            "total_matches": len(self.results),
            "agent_stats": {},
            "match_results": self.results
        }

        for agent_name in agent_names:
            stats["agent_stats"][agent_name] = {
                "wins": 0,
                "losses": 0,
                "ties": 0,
                "rounds_won": 0,
                "win_rate": 0
            }

        for result in self.results:
            if result["error"]:
                continue

            agent1 = result["agent1"]
            agent2 = result["agent2"]
            winner = result["winner"]

            stats["agent_stats"][agent1]["rounds_won"] += result["round_wins"][agent1]
            stats["agent_stats"][agent2]["rounds_won"] += result["round_wins"][agent2]

            if winner == agent1:
                stats["agent_stats"][agent1]["wins"] += 1
                stats["agent_stats"][agent2]["losses"] += 1
            elif winner == agent2:
                stats["agent_stats"][agent2]["wins"] += 1
                stats["agent_stats"][agent1]["losses"] += 1
            else:
                stats["agent_stats"][agent1]["ties"] += 1
                stats["agent_stats"][agent2]["ties"] += 1

        for agent_name in agent_names:
            agent_stat = stats["agent_stats"][agent_name]
            total_games = agent_stat["wins"] + agent_stat["losses"] + agent_stat["ties"]
            if total_games > 0:
                agent_stat["win_rate"] = agent_stat["wins"] / total_games

        return stats

    def _save_results(self, stats: Dict[str, Any], total_time: float):
        """Save results to a JSON file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        results_file = os.path.join(self.output_dir, f"arena_results_{timestamp}.json")
        with open(results_file, 'w') as f:
            json.dump({
                "timestamp": timestamp,
                "total_time": total_time,
                "rules": self.config.to_dict(),
                "stats": stats
            }, f, indent=2)
        logger.info(f"Results saved to {results_file}")

    def _print_summary(self, stats: Dict[str, Any], total_time: float):
        """Print a standings table, best match win rate first."""
        standings = sorted(
            stats["agent_stats"].items(),
            key=lambda item: (item[1]["win_rate"], item[1]["rounds_won"]),
            reverse=True
        )
        width = max(len(name) for name, _ in standings)

        print(f"\nStandings after {stats['total_matches']} matches ({total_time:.2f}s)")
        print(f"{'#':>2}  {'agent':<{width}}  {'W':>3} {'L':>3} {'T':>3}  {'rounds':>6}  {'rate':>5}")
        for rank, (agent_name, s) in enumerate(standings, 1):
            print(f"{rank:>2}  {agent_name:<{width}}  {s['wins']:>3} {s['losses']:>3} {s['ties']:>3}"
                  f"  {s['rounds_won']:>6}  {s['win_rate']:>5.3f}")


def create_agents(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create agents based on configuration.

    Args:
        config: Mapping of agent name to {"type": ..., "seed": ..., "weights": {...}}

    Returns:
        Dictionary of agent names to agent instances
    """
    return {
        name: build_agent(agent_config["type"], seed=agent_config.get("seed"),
                          parameters=agent_config.get("weights"))
        for name, agent_config in config.items()
    }


DEFAULT_AGENTS = {
    "heuristic": {"type": "heuristic", "seed": 1},
    "random": {"type": "random", "seed": 2},
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run a Punto agent round-robin")
    parser.add_argument("--agents-config", type=str, default=None,
                        help="JSON file mapping agent names to {type, seed, weights}")
    parser.add_argument("--rounds", type=int, default=1, help="Times each ordered pair meets")
    parser.add_argument("--max-moves", type=int, default=2000, help="Placement cap per match")
    parser.add_argument("--rounds-to-win", type=int, default=2, help="Round wins needed for a match")
    parser.add_argument("--seed", type=int, default=None, help="Base seed for deck shuffles")
    parser.add_argument("--output-dir", type=str, default="arena_results")
    parser.add_argument("--log-dir", type=str, default=None, help="Also write a log file here")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.agents_config:
        with open(args.agents_config) as f:
            agent_config = json.load(f)
    else:
        agent_config = DEFAULT_AGENTS

    level = logging.DEBUG if args.verbose else logging.INFO
    if args.log_dir:
        _, log_file = setup_arena_logging(Path(args.log_dir), agent_config.keys(), level)
        logger.info(f"Logging to {log_file}")
    else:
        configure_logging(level, quiet_engine=not args.verbose)

    arena = Arena(
        create_agents(agent_config),
        output_dir=args.output_dir,
        config=RulesConfig(rounds_to_win=args.rounds_to_win),
        seed=args.seed,
    )
    return arena.run_round_robin(rounds=args.rounds, max_moves=args.max_moves, verbose=args.verbose)


if __name__ == "__main__":
    main()
