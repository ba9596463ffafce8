"""
Tests for the CPU-vs-CPU arena script.
"""

import json

from agents.heuristic_agent import HeuristicAgent
from agents.random_agent import RandomAgent
from engine.config import RulesConfig
from scripts.arena import Arena, ArenaMatch, create_agents, main


class TestArenaMatch:

    def test_single_round_match(self):
        match = ArenaMatch(
            "heuristic", "random", HeuristicAgent(seed=1), RandomAgent(seed=2),
            config=RulesConfig(rounds_to_win=1), seed=3,
        )
        result = match.play_match(max_moves=500)

        assert result["error"] is None
        assert result["moves_made"] > 0
        assert result["winner"] in ("heuristic", "random", "tie")
        if result["winner"] != "tie":
            assert result["round_wins"][result["winner"]] == 1
        assert result["rounds_played"] == sum(result["round_wins"].values()) + result["draws"]

    def test_move_cap(self):
        match = ArenaMatch("a", "b", RandomAgent(seed=1), RandomAgent(seed=2), seed=0)
        result = match.play_match(max_moves=3)
        assert result["error"] is None
        assert result["moves_made"] == 3
        assert result["winner"] == "tie"


class TestArena:

    def test_round_robin_saves_results(self, tmp_path):
        agents = create_agents({
            "heuristic": {"type": "heuristic", "seed": 1},
            "random": {"type": "random", "seed": 2},
        })
        arena = Arena(agents, output_dir=str(tmp_path), config=RulesConfig(rounds_to_win=1), seed=10)
        stats = arena.run_round_robin(rounds=1, max_moves=500)

        assert stats["total_matches"] == 2
        for agent_stat in stats["agent_stats"].values():
            assert agent_stat["wins"] + agent_stat["losses"] + agent_stat["ties"] == 2

        saved = list(tmp_path.glob("arena_results_*.json"))
        assert len(saved) == 1
        data = json.loads(saved[0].read_text())
        assert data["rules"]["rounds_to_win"] == 1
        assert data["stats"]["total_matches"] == 2

    def test_main(self, tmp_path):
        stats = main(["--rounds-to-win", "1", "--seed", "5", "--max-moves", "300",
                      "--output-dir", str(tmp_path)])
        assert stats["agents"] == ["heuristic", "random"]
        assert stats["total_matches"] == 2
