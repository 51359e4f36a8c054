"""Positional and pitching-role eligibility."""

from .rules import (
    compute_hitter_eligibility,
    compute_pitcher_eligibility,
    eligibility_from_profile_position,
    empty_position_games,
    merge_two_way_eligibility,
    merge_warnings,
    normalize_position_games,
)
from .importer import apply_eligibility, build_eligibility_map, import_season_eligibility

__all__ = [
    "apply_eligibility",
    "build_eligibility_map",
    "compute_hitter_eligibility",
    "compute_pitcher_eligibility",
    "eligibility_from_profile_position",
    "empty_position_games",
    "import_season_eligibility",
    "merge_two_way_eligibility",
    "merge_warnings",
    "normalize_position_games",
]
