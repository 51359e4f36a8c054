"""Input adapters that normalize raw projection data."""

from .projections import (
    ID_SOURCES,
    IdConfig,
    MissingOutcome,
    ParseResult,
    detect_delimiter,
    detect_id_source,
    detect_player_type,
    load_projection_file,
    parse_batter_row,
    parse_pitcher_row,
    parse_projection_text,
)
from .merge import MergeResult, ProjectionGroup, build_projection_group, merge_players

__all__ = [
    "ID_SOURCES",
    "IdConfig",
    "MergeResult",
    "MissingOutcome",
    "ParseResult",
    "ProjectionGroup",
    "build_projection_group",
    "detect_delimiter",
    "detect_id_source",
    "detect_player_type",
    "load_projection_file",
    "merge_players",
    "parse_batter_row",
    "parse_pitcher_row",
    "parse_projection_text",
]
