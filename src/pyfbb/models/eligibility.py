"""Positional and pitching-role eligibility payload."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

Position = Literal["C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "DH"]

POSITION_ORDER: tuple[Position, ...] = ("C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "DH")


class Eligibility(BaseModel):
    """Eligibility derived from one season of games-played data.

    Instances are replaced wholesale when new season data arrives.
    """

    position_games: Dict[Position, float]
    eligible_positions: List[Position] = Field(default_factory=list)
    is_sp: bool = False
    is_rp: bool = False
    source_season: int
    updated_at: datetime
    warnings: Optional[List[str]] = None

    model_config = ConfigDict(frozen=True)


def empty_position_games() -> Dict[Position, float]:
    return {position: 0.0 for position in POSITION_ORDER}


def normalize_position_games(raw: Mapping[str, object]) -> Dict[Position, float]:
    """Fill every position, treating missing or non-finite games as zero."""

    games = empty_position_games()
    for position in POSITION_ORDER:
        value = raw.get(position)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
            games[position] = float(value)
    return games
