"""Fantasy points for batter, pitcher and two-way records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Literal, Sequence, Tuple

from pyfbb.config import BattingWeights, PitchingWeights, ScoringWeights
from pyfbb.innings import innings_value, is_valid_baseball_ip
from pyfbb.models import (
    BatterRecord,
    BattingStats,
    PitcherRecord,
    PitchingStats,
    PlayerRecord,
    TwoWayRecord,
)
from pyfbb.utils import round_tenth


logger = logging.getLogger(__name__)

View = Literal["batters", "pitchers", "all"]
VIEWS: tuple[View, ...] = ("batters", "pitchers", "all")

# Per-type hit categories; the generic H weight is applied separately.
BATTING_CATEGORIES: tuple[str, ...] = (
    "R", "singles", "doubles", "triples", "HR", "RBI", "SB", "CS", "BB", "SO", "HBP", "SF", "GDP",
)
# CG and ShO carry weights but are not part of the points sum.
PITCHING_CATEGORIES: tuple[str, ...] = (
    "W", "L", "QS", "SV", "BS", "HLD", "SO", "H", "ER", "HR", "BB", "HBP",
)


def _batting_sum(stats: BattingStats, weights: BattingWeights) -> float:
    points = sum(getattr(stats, name) * getattr(weights, name) for name in BATTING_CATEGORIES)
    if weights.H != 0:
        points += stats.H * weights.H
    return points


def _pitching_sum(stats: PitchingStats, weights: PitchingWeights, use_baseball_ip: bool) -> float:
    points = innings_value(stats.IP, use_baseball_ip=use_baseball_ip) * weights.IP
    points += sum(getattr(stats, name) * getattr(weights, name) for name in PITCHING_CATEGORIES)
    return points


def calculate_batter_points(stats: BattingStats, weights: BattingWeights) -> float:
    return round_tenth(_batting_sum(stats, weights))


def calculate_pitcher_points(
    stats: PitchingStats, weights: PitchingWeights, use_baseball_ip: bool = False
) -> float:
    """Score a pitching line.

    With ``use_baseball_ip`` the IP column is read as outs notation (10.1 is
    ten and a third innings); otherwise the raw decimal is used. An invalid
    outs-notation value contributes nothing.
    """

    return round_tenth(_pitching_sum(stats, weights, use_baseball_ip))


def _check_view(view: str) -> None:
    if view not in VIEWS:
        raise ValueError(f"Unknown view {view!r}; expected one of {', '.join(VIEWS)}")


def calculate_player_points(
    player: PlayerRecord,
    weights: ScoringWeights,
    view: View = "all",
    use_baseball_ip: bool = False,
) -> float:
    """Points for any record; ``view`` selects which side of a two-way player counts."""

    _check_view(view)
    if isinstance(player, BatterRecord):
        return calculate_batter_points(player, weights.batting)
    if isinstance(player, PitcherRecord):
        return calculate_pitcher_points(player, weights.pitching, use_baseball_ip)
    if isinstance(player, TwoWayRecord):
        batting = _batting_sum(player.batting_stats, weights.batting)
        pitching = _pitching_sum(player.pitching_stats, weights.pitching, use_baseball_ip)
        if view == "batters":
            return round_tenth(batting)
        if view == "pitchers":
            return round_tenth(pitching)
        return round_tenth(batting + pitching)
    raise TypeError(f"Unsupported player record {type(player).__name__}")


def detect_baseball_ip(players: Iterable[PlayerRecord]) -> bool:
    """True when every pitching IP value in the pool is valid outs notation."""

    innings: List[float] = []
    for player in players:
        if isinstance(player, PitcherRecord):
            innings.append(player.IP)
        elif isinstance(player, TwoWayRecord):
            innings.append(player.pitching_stats.IP)
    return bool(innings) and all(is_valid_baseball_ip(ip) for ip in innings)


def split_two_way(player: TwoWayRecord) -> Tuple[BatterRecord, PitcherRecord]:
    """Rebuild separate batter and pitcher records from a two-way record."""

    identity = {
        "player_id": player.player_id,
        "name": player.name,
        "team": player.team,
        "fangraphs_id": player.fangraphs_id,
        "mlbam_id": player.mlbam_id,
        "adp": player.adp,
        "eligibility": player.eligibility,
    }
    batter = BatterRecord(**identity, **player.batting_stats.model_dump())
    pitcher = PitcherRecord(**identity, **player.pitching_stats.model_dump())
    return batter, pitcher


@dataclass(frozen=True)
class RankedPlayer:
    player: PlayerRecord
    projected_points: float
    rank: int


def _in_view(player: PlayerRecord, view: View) -> bool:
    if view == "batters":
        return player.kind != "pitcher"
    if view == "pitchers":
        return player.kind != "batter"
    return True


def rank_players(
    players: Sequence[PlayerRecord],
    weights: ScoringWeights,
    view: View = "all",
    *,
    use_baseball_ip: bool = False,
    merge_two_way: bool = True,
) -> List[RankedPlayer]:
    """Score and rank players for a leaderboard view, best first.

    With ``merge_two_way`` disabled, two-way players are ranked as separate
    batter and pitcher entries.
    """

    _check_view(view)
    pool: List[PlayerRecord] = []
    for player in players:
        if isinstance(player, TwoWayRecord) and not merge_two_way:
            pool.extend(split_two_way(player))
        else:
            pool.append(player)

    scored = [
        (player, calculate_player_points(player, weights, view, use_baseball_ip))
        for player in pool
        if _in_view(player, view)
    ]
    scored.sort(key=lambda item: -item[1])
    logger.debug("Ranked %d players for view %s", len(scored), view)
    return [
        RankedPlayer(player=player, projected_points=points, rank=idx)
        for idx, (player, points) in enumerate(scored, start=1)
    ]
