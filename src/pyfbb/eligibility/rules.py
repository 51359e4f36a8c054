"""Fielding-position and pitching-role eligibility rules."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from pyfbb.models import (
    POSITION_ORDER,
    Eligibility,
    Position,
    empty_position_games,
    normalize_position_games,
)

MIN_POSITION_GAMES = 20
POSITION_SHARE = 0.25
MIN_STARTS = 5
MIN_RELIEF_APPEARANCES = 8
ROLE_SHARE = 0.25

_PROFILE_GROUPS: Mapping[str, tuple[Position, ...]] = {
    "OF": ("LF", "CF", "RF"),
    "IF": ("1B", "2B", "3B", "SS"),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def merge_warnings(*groups: Optional[Iterable[str]]) -> Optional[List[str]]:
    if all(group is None for group in groups):
        return None
    merged: Dict[str, None] = {}
    for group in groups:
        for warning in group or ():
            merged.setdefault(warning, None)
    return list(merged)


def compute_hitter_eligibility(
    position_games: Mapping[str, object],
    season: int,
    warnings: Optional[Iterable[str]] = None,
) -> Eligibility:
    """A position qualifies at 20 games or at 25% of all games played.

    With no games recorded anywhere the share threshold is 0, so every
    position qualifies.
    """

    games = normalize_position_games(position_games)
    total_games = sum(games.values())
    threshold = max(0.0, POSITION_SHARE * total_games)
    eligible = [
        position
        for position in POSITION_ORDER
        if games[position] >= MIN_POSITION_GAMES or games[position] >= threshold
    ]
    return Eligibility(
        position_games=games,
        eligible_positions=eligible,
        source_season=season,
        updated_at=_now(),
        warnings=list(warnings) if warnings is not None else None,
    )


def compute_pitcher_eligibility(
    games: float,
    games_started: float,
    season: int,
    warnings: Optional[Iterable[str]] = None,
) -> Eligibility:
    relief_games = max(0.0, games - games_started)
    start_ratio = games_started / games if games > 0 else 0.0
    relief_ratio = (games - games_started) / games if games > 0 else 0.0
    return Eligibility(
        position_games=empty_position_games(),
        is_sp=games_started >= MIN_STARTS or start_ratio >= ROLE_SHARE,
        is_rp=relief_games >= MIN_RELIEF_APPEARANCES or relief_ratio >= ROLE_SHARE,
        source_season=season,
        updated_at=_now(),
        warnings=list(warnings) if warnings is not None else None,
    )


def merge_two_way_eligibility(batting: Eligibility, pitching: Eligibility) -> Eligibility:
    """Positions from the hitting side, roles from the pitching side."""

    return Eligibility(
        position_games=dict(batting.position_games),
        eligible_positions=list(batting.eligible_positions),
        is_sp=pitching.is_sp,
        is_rp=pitching.is_rp,
        source_season=batting.source_season,
        updated_at=_now(),
        warnings=merge_warnings(batting.warnings, pitching.warnings),
    )


def eligibility_from_profile_position(
    position: str,
    season: int,
    warnings: Optional[Iterable[str]] = None,
) -> Eligibility:
    """Derive eligibility from a single reported primary position."""

    token = position.strip().upper()
    eligible: List[Position] = []
    is_sp = is_rp = False
    notes = list(warnings) if warnings is not None else None

    if token == "P":
        is_sp = is_rp = True
    elif token == "SP":
        is_sp = True
    elif token == "RP":
        is_rp = True
    elif token in _PROFILE_GROUPS:
        eligible.extend(_PROFILE_GROUPS[token])
    elif token in POSITION_ORDER:
        eligible.append(token)  # type: ignore[arg-type]
    else:
        notes = merge_warnings(notes, [f"Unknown profile position: {position}"])

    return Eligibility(
        position_games=empty_position_games(),
        eligible_positions=eligible,
        is_sp=is_sp,
        is_rp=is_rp,
        source_season=season,
        updated_at=_now(),
        warnings=notes,
    )
