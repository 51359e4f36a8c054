"""Player, stat and eligibility models."""

from .eligibility import (
    POSITION_ORDER,
    Eligibility,
    Position,
    empty_position_games,
    normalize_position_games,
)
from .outcomes import PITCHING_OUTCOME_STATS, MissingOutcome, PitchingOutcomeStat
from .player import (
    PLAYER_LIST_ADAPTER,
    BatterRecord,
    BattingStats,
    PitcherRecord,
    PitchingStats,
    PlayerKind,
    PlayerRecord,
    PlayerType,
    TwoWayRecord,
    batting_stats_of,
    pitching_stats_of,
)

__all__ = [
    "PITCHING_OUTCOME_STATS",
    "POSITION_ORDER",
    "PLAYER_LIST_ADAPTER",
    "BatterRecord",
    "BattingStats",
    "Eligibility",
    "MissingOutcome",
    "PitcherRecord",
    "PitchingOutcomeStat",
    "PitchingStats",
    "PlayerKind",
    "PlayerRecord",
    "PlayerType",
    "Position",
    "TwoWayRecord",
    "batting_stats_of",
    "empty_position_games",
    "normalize_position_games",
    "pitching_stats_of",
]
