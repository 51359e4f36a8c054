"""Statistical estimators for pitching outcome counts."""

from .outcomes import (
    EstimateSelection,
    apply_pitching_outcome_estimates,
    estimate_complete_games,
    estimate_quality_starts,
    estimate_shutouts,
    poisson_cdf,
    resolve_complete_games,
    resolve_quality_starts,
    resolve_shutouts,
)

__all__ = [
    "EstimateSelection",
    "apply_pitching_outcome_estimates",
    "estimate_complete_games",
    "estimate_quality_starts",
    "estimate_shutouts",
    "poisson_cdf",
    "resolve_complete_games",
    "resolve_quality_starts",
    "resolve_shutouts",
]
