"""Remote season stats used to derive eligibility."""

from .client import (
    BATCH_SIZE,
    PitchingGames,
    RetryEvent,
    RetryPolicy,
    SeasonStats,
    StatsApiClient,
    StatsApiError,
    parse_fielding_stats,
    parse_people_stats,
    parse_pitching_stats,
    request_with_retry,
    should_retry_status,
)

__all__ = [
    "BATCH_SIZE",
    "PitchingGames",
    "RetryEvent",
    "RetryPolicy",
    "SeasonStats",
    "StatsApiClient",
    "StatsApiError",
    "parse_fielding_stats",
    "parse_people_stats",
    "parse_pitching_stats",
    "request_with_retry",
    "should_retry_status",
]
