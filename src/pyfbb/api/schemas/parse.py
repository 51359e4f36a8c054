from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from pyfbb.models import PitchingOutcomeStat, PlayerRecord, PlayerType


class MissingOutcomeResponse(BaseModel):
    total_players: int
    missing_player_ids: List[str] = Field(default_factory=list)


class ParseResponse(BaseModel):
    player_type: PlayerType
    row_count: int
    id_source: str
    needs_id_selection: bool = False
    available_columns: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    players: List[PlayerRecord] = Field(default_factory=list)
    missing_pitching_outcomes: Dict[PitchingOutcomeStat, MissingOutcomeResponse] | None = None
