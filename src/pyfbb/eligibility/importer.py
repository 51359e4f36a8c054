"""Build season eligibility for a player pool from fetched stats."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from pyfbb.models import Eligibility, PlayerRecord
from pyfbb.stats_api.client import PitchingGames, SeasonStats, StatsApiClient

from .rules import (
    compute_hitter_eligibility,
    compute_pitcher_eligibility,
    eligibility_from_profile_position,
    empty_position_games,
    merge_two_way_eligibility,
)


logger = logging.getLogger(__name__)


def _hitter_side(
    fielding: Optional[Mapping[str, float]],
    profile_position: Optional[str],
    season: int,
    warnings: List[str],
) -> Eligibility:
    has_fielding = bool(fielding) and any(value > 0 for value in fielding.values())
    if not has_fielding and profile_position:
        warnings.append(f"Profile fallback: {profile_position}")
        return eligibility_from_profile_position(profile_position, season, warnings)
    if not has_fielding:
        warnings.append("No fielding stats found")
    return compute_hitter_eligibility(fielding or empty_position_games(), season, warnings)


def _pitcher_side(
    pitching: Optional[PitchingGames],
    profile_position: Optional[str],
    season: int,
    warnings: List[str],
) -> Eligibility:
    if pitching is None and profile_position:
        warnings.append(f"Profile fallback: {profile_position}")
        return eligibility_from_profile_position(profile_position, season, warnings)
    if pitching is None:
        warnings.append("No pitching stats found")
        pitching = PitchingGames(games=0, games_started=0)
    return compute_pitcher_eligibility(pitching.games, pitching.games_started, season, warnings)


def build_eligibility_map(
    players: Sequence[PlayerRecord],
    stats: SeasonStats,
    season: int,
) -> Dict[str, Eligibility]:
    """Compute eligibility for every player, keyed by ``player_id``.

    Stats are looked up by MLBAM id; players without one still receive an
    eligibility record carrying a ``Missing MLBAMID`` warning.
    """

    eligibility_by_id: Dict[str, Eligibility] = {}
    for player in players:
        mlbam_id = player.mlbam_id
        base_warnings = [] if mlbam_id else ["Missing MLBAMID"]
        fielding = stats.fielding_by_id.get(mlbam_id) if mlbam_id else None
        pitching = stats.pitching_by_id.get(mlbam_id) if mlbam_id else None
        profile = stats.primary_position_by_id.get(mlbam_id) if mlbam_id else None

        if player.kind == "batter":
            eligibility = _hitter_side(fielding, profile, season, list(base_warnings))
        elif player.kind == "pitcher":
            eligibility = _pitcher_side(pitching, profile, season, list(base_warnings))
        else:
            batting = _hitter_side(fielding, profile, season, list(base_warnings))
            pitching_side = _pitcher_side(pitching, profile, season, list(base_warnings))
            eligibility = merge_two_way_eligibility(batting, pitching_side)
        eligibility_by_id[player.player_id] = eligibility

    logger.info("Computed %s eligibility for %d players", season, len(eligibility_by_id))
    return eligibility_by_id


def apply_eligibility(
    players: Sequence[PlayerRecord], eligibility_by_id: Mapping[str, Eligibility]
) -> List[PlayerRecord]:
    """Return copies of ``players`` with their eligibility replaced wholesale."""

    updated: List[PlayerRecord] = []
    for player in players:
        eligibility = eligibility_by_id.get(player.player_id)
        if eligibility is None:
            updated.append(player)
        else:
            updated.append(player.model_copy(update={"eligibility": eligibility}))
    return updated


async def import_season_eligibility(
    players: Sequence[PlayerRecord],
    season: int,
    *,
    client: StatsApiClient | None = None,
) -> Dict[str, Eligibility]:
    """Fetch season stats for the pool's MLBAM ids and build eligibility."""

    if not players:
        return {}
    mlbam_ids = [player.mlbam_id for player in players if player.mlbam_id.strip()]
    if client is None:
        async with StatsApiClient() as owned:
            stats = await owned.fetch_season_stats_for_players(mlbam_ids, season)
    else:
        stats = await client.fetch_season_stats_for_players(mlbam_ids, season)
    return build_eligibility_map(players, stats, season)
