"""Pydantic models for API I/O."""

from .parse import MissingOutcomeResponse, ParseResponse
from .scoring import PresetResponse, RankedPlayerResponse, ScoreRequest, ScoreResponse
from .estimate import EstimateRequest, EstimateResponse
from .eligibility import EligibilityRequest, EligibilityResponse

__all__ = [
    "EligibilityRequest",
    "EligibilityResponse",
    "EstimateRequest",
    "EstimateResponse",
    "MissingOutcomeResponse",
    "ParseResponse",
    "PresetResponse",
    "RankedPlayerResponse",
    "ScoreRequest",
    "ScoreResponse",
]
