"""Configuration helpers for scoring weights and presets."""

from .scoring import (
    DEFAULT_PRESET,
    BattingWeights,
    PitchingWeights,
    ScoringWeights,
    default_weights,
    get_preset,
    iter_presets,
    preset_names,
)

__all__ = [
    "DEFAULT_PRESET",
    "BattingWeights",
    "PitchingWeights",
    "ScoringWeights",
    "default_weights",
    "get_preset",
    "iter_presets",
    "preset_names",
]
