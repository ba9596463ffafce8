"""
Rules configuration for Punto Tactics.

Defaults reproduce the standard game. Values can be overridden per session
or through ``PUNTO_*`` environment variables (see ``RulesConfig.from_env``).
"""

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

MIN_CARD_VALUE = 1
MAX_CARD_VALUE = 9


@dataclass
class RulesConfig:
    """
    Recognized rule options.

    Attributes:
        grid_size: Side of the physical display grid (cosmetic unless
            enforce_grid_edges is set)
        center: Display offset of the origin coordinate (cosmetic)
        enforce_grid_edges: Reject placements that fall outside the display grid
        win_length: Same-color run length that wins a round
        rounds_to_win: Round wins needed to take the match
        hand_size: Maximum number of cards held at once
        max_span: Maximum width/height of the occupied bounding box
        copies_per_value: Copies of each value per owned color in a deck
        share_all_colors: With exactly two players, give each player two colors
    """

    grid_size: int = 9
    center: int = 4
    enforce_grid_edges: bool = False
    win_length: int = 4
    rounds_to_win: int = 2
    hand_size: int = 2
    max_span: int = 6
    copies_per_value: int = 2
    share_all_colors: bool = False

    def __post_init__(self):
        if self.win_length < 2:
            raise ValueError("win_length must be at least 2")
        if self.rounds_to_win < 1:
            raise ValueError("rounds_to_win must be at least 1")
        if self.hand_size < 1:
            raise ValueError("hand_size must be at least 1")
        if self.max_span < 1:
            raise ValueError("max_span must be at least 1")
        if self.copies_per_value < 1:
            raise ValueError("copies_per_value must be at least 1")
        if self.grid_size < 1 or not 0 <= self.center < self.grid_size:
            raise ValueError("center must lie inside the display grid")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RulesConfig":
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "RulesConfig":
        """
        Build a config from ``PUNTO_<FIELD>`` environment variables.

        Example: ``PUNTO_ROUNDS_TO_WIN=3`` or ``PUNTO_SHARE_ALL_COLORS=true``.
        Unset variables keep their defaults.
        """
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for f in fields(cls):
            raw = environ.get(f"PUNTO_{f.name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            raw = raw.strip()
            if f.type in (bool, "bool"):
                overrides[f.name] = raw.lower() in ("1", "true", "yes", "on")
            else:
                try:
                    overrides[f.name] = int(raw)
                except ValueError:
                    raise ValueError(f"PUNTO_{f.name.upper()} must be an integer, got {raw!r}")
        return cls(**overrides)
