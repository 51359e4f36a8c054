from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from pyfbb.models import PitcherRecord, PitchingOutcomeStat

from .parse import MissingOutcomeResponse


class EstimateRequest(BaseModel):
    pitchers: List[PitcherRecord]
    missing: Dict[PitchingOutcomeStat, MissingOutcomeResponse] = Field(default_factory=dict)
    selection: List[PitchingOutcomeStat] = Field(default_factory=list)
    use_baseball_ip: bool | None = None


class EstimateResponse(BaseModel):
    changed: bool
    use_baseball_ip: bool
    pitchers: List[PitcherRecord]
