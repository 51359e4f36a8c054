from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from pyfbb.config import ScoringWeights
from pyfbb.models import PlayerRecord


class PresetResponse(BaseModel):
    key: str
    weights: ScoringWeights


class ScoreRequest(BaseModel):
    players: List[PlayerRecord]
    weights: ScoringWeights | None = None
    preset: str | None = None
    view: Literal["batters", "pitchers", "all"] = "all"
    # None picks the mode from the pool's IP values
    use_baseball_ip: bool | None = None
    merge_two_way: bool = True
    top: int | None = Field(default=None, ge=1)


class RankedPlayerResponse(BaseModel):
    rank: int
    projected_points: float
    player: PlayerRecord


class ScoreResponse(BaseModel):
    weights_name: str
    view: str
    use_baseball_ip: bool
    players: List[RankedPlayerResponse]
