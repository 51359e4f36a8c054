"""Combine batter and pitcher projections into two-way records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple
from uuid import uuid4

from pyfbb.models import (
    BatterRecord,
    PitcherRecord,
    PlayerRecord,
    PlayerType,
    TwoWayRecord,
    batting_stats_of,
    pitching_stats_of,
)

from pyfbb.estimate.outcomes import EstimateSelection, apply_pitching_outcome_estimates

from .projections import IdSource, ParseResult


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeResult:
    merged: List[TwoWayRecord]
    remaining: List[PlayerRecord]

    @property
    def merged_ids(self) -> set[str]:
        return {record.player_id for record in self.merged}


def _combine(batter: BatterRecord, pitcher: PitcherRecord) -> TwoWayRecord:
    return TwoWayRecord(
        player_id=batter.player_id,
        name=batter.name or pitcher.name,
        team=batter.team or pitcher.team,
        fangraphs_id=batter.fangraphs_id or pitcher.fangraphs_id,
        mlbam_id=batter.mlbam_id or pitcher.mlbam_id,
        adp=batter.adp if batter.adp is not None else pitcher.adp,
        batting_stats=batting_stats_of(batter),
        pitching_stats=pitching_stats_of(pitcher),
    )


def merge_players(
    new_players: Sequence[PlayerRecord],
    existing_players: Sequence[PlayerRecord],
    new_type: PlayerType,
) -> MergeResult:
    """Pair newly parsed players with opposite-type players sharing an id.

    Each existing record is consumed at most once. Callers remove the ids in
    ``merged`` from their own pool before adding ``merged`` and ``remaining``.
    """

    existing_by_id = {player.player_id: player for player in existing_players}
    merged: List[TwoWayRecord] = []
    remaining: List[PlayerRecord] = []

    for player in new_players:
        existing = existing_by_id.get(player.player_id)
        if existing is None or existing.kind == player.kind or existing.kind == "two-way":
            remaining.append(player)
            continue
        if new_type == "batter":
            batter, pitcher = player, existing
        else:
            batter, pitcher = existing, player
        if not isinstance(batter, BatterRecord) or not isinstance(pitcher, PitcherRecord):
            remaining.append(player)
            continue
        merged.append(_combine(batter, pitcher))
        del existing_by_id[player.player_id]
        logger.debug("Merged two-way player %s (%s)", player.player_id, batter.name or pitcher.name)

    logger.info("Merged %d two-way players; %d new players unmatched", len(merged), len(remaining))
    return MergeResult(merged=merged, remaining=remaining)


@dataclass(frozen=True)
class ProjectionGroup:
    group_id: str
    name: str
    created_at: datetime
    batters: List[PlayerRecord]
    pitchers: List[PlayerRecord]
    two_way_players: List[TwoWayRecord] = field(default_factory=list)
    batter_id_source: Optional[IdSource] = None
    pitcher_id_source: Optional[IdSource] = None

    @property
    def can_merge_two_way(self) -> bool:
        return (
            self.batter_id_source not in (None, "generated")
            and self.pitcher_id_source not in (None, "generated")
        )

    def all_players(self) -> List[PlayerRecord]:
        return [*self.batters, *self.pitchers, *self.two_way_players]


def _split_pools(
    batters: List[PlayerRecord], pitchers: List[PlayerRecord]
) -> Tuple[List[PlayerRecord], List[PlayerRecord], List[TwoWayRecord]]:
    result = merge_players(pitchers, batters, "pitcher")
    consumed = result.merged_ids
    kept_batters = [player for player in batters if player.player_id not in consumed]
    return kept_batters, result.remaining, result.merged


def build_projection_group(
    name: str,
    batter_result: Optional[ParseResult] = None,
    pitcher_result: Optional[ParseResult] = None,
    *,
    estimate_selection: Optional[EstimateSelection] = None,
    use_baseball_ip: bool = False,
) -> ProjectionGroup:
    """Assemble parsed batter and pitcher files into one projection group.

    Selected pitching outcomes are estimated before the two-way merge so the
    merged pitching blocks carry the filled-in counts.
    """

    for result in (batter_result, pitcher_result):
        if result is not None and result.needs_id_selection:
            raise ValueError(f"{result.player_type} file needs an id source before grouping")

    batters: List[PlayerRecord] = list(batter_result.players) if batter_result else []
    pitchers: List[PlayerRecord] = []
    if pitcher_result is not None:
        pitcher_records = [p for p in pitcher_result.players if isinstance(p, PitcherRecord)]
        if estimate_selection is not None:
            pitcher_records = list(
                apply_pitching_outcome_estimates(
                    pitcher_records,
                    pitcher_result.missing_pitching_outcomes,
                    estimate_selection,
                    use_baseball_ip=use_baseball_ip,
                )
            )
        pitchers = list(pitcher_records)
    batter_source = batter_result.id_source if batter_result else None
    pitcher_source = pitcher_result.id_source if pitcher_result else None
    two_way: List[TwoWayRecord] = []

    if batters and pitchers:
        if "generated" in (batter_source, pitcher_source):
            logger.warning(
                "Skipping two-way merge for %s: generated ids cannot be matched across files",
                name,
            )
        else:
            batters, pitchers, two_way = _split_pools(batters, pitchers)

    group = ProjectionGroup(
        group_id=uuid4().hex,
        name=name,
        created_at=datetime.now(timezone.utc),
        batters=batters,
        pitchers=pitchers,
        two_way_players=two_way,
        batter_id_source=batter_source,
        pitcher_id_source=pitcher_source,
    )
    logger.info(
        "Built projection group %s: %d batters, %d pitchers, %d two-way",
        name,
        len(group.batters),
        len(group.pitchers),
        len(group.two_way_players),
    )
    return group
