from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from pyfbb.models import PlayerRecord


class EligibilityRequest(BaseModel):
    players: List[PlayerRecord]
    season: int = Field(..., ge=1876)


class EligibilityResponse(BaseModel):
    season: int
    players: List[PlayerRecord]
