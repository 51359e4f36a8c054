"""Per-stat summaries of pitching outcomes missing from a projection source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal

PitchingOutcomeStat = Literal["QS", "CG", "ShO"]

PITCHING_OUTCOME_STATS: tuple[PitchingOutcomeStat, ...] = ("QS", "CG", "ShO")


@dataclass(frozen=True)
class MissingOutcome:
    total_players: int
    missing_player_ids: List[str]
