"""Points scoring and ranking."""

from .service import (
    BATTING_CATEGORIES,
    PITCHING_CATEGORIES,
    VIEWS,
    RankedPlayer,
    View,
    calculate_batter_points,
    calculate_pitcher_points,
    calculate_player_points,
    detect_baseball_ip,
    rank_players,
    split_two_way,
)

__all__ = [
    "BATTING_CATEGORIES",
    "PITCHING_CATEGORIES",
    "VIEWS",
    "RankedPlayer",
    "View",
    "calculate_batter_points",
    "calculate_pitcher_points",
    "calculate_player_points",
    "detect_baseball_ip",
    "rank_players",
    "split_two_way",
]
