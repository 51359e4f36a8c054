"""Estimate quality starts, complete games and shutouts for pitchers.

Projection sources often omit these counts. The estimates here are smooth
heuristics built from starts, innings, ERA and (for complete games) strikeout
and walk rates, with an earned-run model that treats runs allowed as Poisson.
They never replace a positive value supplied by the source.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from pyfbb.innings import innings_value
from pyfbb.models import MissingOutcome, PitcherRecord, PitchingOutcomeStat, PitchingStats
from pyfbb.utils import clamp, round_tenth


logger = logging.getLogger(__name__)

QS_MIN_IP_PER_START = 5.0
QS_FULL_IP_PER_START = 6.5
QS_INNINGS = 6
QS_MAX_ER = 3
MIN_ERA_FOR_ESTIMATE = 0.5
WIN_FACTOR_BASE = 0.85
WIN_FACTOR_SCALE = 0.5
WIN_FACTOR_MIN = 0.75
WIN_FACTOR_MAX = 1.1

CG_MIN_IP_PER_START = 5.0
CG_FULL_IP_PER_START = 7.5
CG_MAX_ER = 2
CG_RATE_SCALE = 0.08
CG_K9_CENTER = 8.0
CG_BB9_CENTER = 3.0
CG_K9_EFFECT = 0.03
CG_BB9_EFFECT = 0.05
CG_COMMAND_MIN = 0.8
CG_COMMAND_MAX = 1.2

SHO_ERA_SCALE = 1.05


def poisson_cdf(lam: float, max_k: int) -> float:
    """P(X <= max_k) for X ~ Poisson(lam)."""

    total = 0.0
    term = 1.0
    for k in range(max_k + 1):
        if k > 0:
            term *= lam / k
        total += term
    return math.exp(-lam) * total


def _ip_ramp(avg_ip_per_start: float, min_ip: float, full_ip: float) -> float:
    return clamp((avg_ip_per_start - min_ip) / (full_ip - min_ip), 0.0, 1.0)


def _usable_inputs(gs: float, ip: float, era: float, use_baseball_ip: bool) -> Optional[float]:
    innings = innings_value(ip, use_baseball_ip=use_baseball_ip)
    if gs <= 0 or innings <= 0 or era <= 0:
        return None
    return innings


def estimate_quality_starts(
    gs: float,
    ip: float,
    era: float,
    wins: float = 0.0,
    *,
    use_baseball_ip: bool = False,
) -> float:
    innings = _usable_inputs(gs, ip, era, use_baseball_ip)
    if innings is None:
        return 0.0

    ip_factor = _ip_ramp(innings / gs, QS_MIN_IP_PER_START, QS_FULL_IP_PER_START)
    if ip_factor == 0:
        return 0.0

    lam = (max(era, MIN_ERA_FOR_ESTIMATE) * QS_INNINGS) / 9
    er_factor = poisson_cdf(lam, QS_MAX_ER)
    win_factor = clamp(
        WIN_FACTOR_BASE + (wins / gs) * WIN_FACTOR_SCALE, WIN_FACTOR_MIN, WIN_FACTOR_MAX
    )
    estimate = gs * ip_factor * er_factor * win_factor
    return clamp(round_tenth(estimate), 0.0, gs)


def _command_factor(k_per_9: float, bb_per_9: float) -> float:
    if k_per_9 <= 0 or bb_per_9 <= 0:
        return 1.0
    factor = (
        1
        + CG_K9_EFFECT * (k_per_9 - CG_K9_CENTER)
        - CG_BB9_EFFECT * (bb_per_9 - CG_BB9_CENTER)
    )
    return clamp(factor, CG_COMMAND_MIN, CG_COMMAND_MAX)


def estimate_complete_games(
    gs: float,
    ip: float,
    era: float,
    k_per_9: float = 0.0,
    bb_per_9: float = 0.0,
    *,
    use_baseball_ip: bool = False,
) -> float:
    innings = _usable_inputs(gs, ip, era, use_baseball_ip)
    if innings is None:
        return 0.0

    ip_factor = _ip_ramp(innings / gs, CG_MIN_IP_PER_START, CG_FULL_IP_PER_START)
    if ip_factor == 0:
        return 0.0

    lam = max(era, MIN_ERA_FOR_ESTIMATE)
    er_factor = poisson_cdf(lam, CG_MAX_ER)
    estimate = gs * CG_RATE_SCALE * ip_factor * er_factor * _command_factor(k_per_9, bb_per_9)
    return clamp(round_tenth(estimate), 0.0, gs)


def estimate_shutouts(
    gs: float,
    ip: float,
    era: float,
    complete_games: Optional[float] = None,
    k_per_9: float = 0.0,
    bb_per_9: float = 0.0,
    *,
    use_baseball_ip: bool = False,
) -> float:
    """Estimate shutouts as the scoreless share of (estimated) complete games."""

    innings = _usable_inputs(gs, ip, era, use_baseball_ip)
    if innings is None:
        return 0.0
    if complete_games is None:
        complete_games = estimate_complete_games(
            gs, ip, era, k_per_9, bb_per_9, use_baseball_ip=use_baseball_ip
        )
    ceiling = min(complete_games, gs)
    if ceiling <= 0:
        return 0.0

    scoreless_share = math.exp(-max(era, MIN_ERA_FOR_ESTIMATE) * SHO_ERA_SCALE / 3)
    return clamp(round_tenth(complete_games * scoreless_share), 0.0, ceiling)


def resolve_quality_starts(stats: PitchingStats, *, use_baseball_ip: bool = False) -> float:
    if stats.QS > 0:
        return stats.QS
    return estimate_quality_starts(
        stats.GS, stats.IP, stats.ERA, stats.W, use_baseball_ip=use_baseball_ip
    )


def resolve_complete_games(stats: PitchingStats, *, use_baseball_ip: bool = False) -> float:
    if stats.CG > 0:
        return stats.CG
    return estimate_complete_games(
        stats.GS, stats.IP, stats.ERA, stats.k_per_9, stats.bb_per_9,
        use_baseball_ip=use_baseball_ip,
    )


def resolve_shutouts(stats: PitchingStats, *, use_baseball_ip: bool = False) -> float:
    if stats.ShO > 0:
        return stats.ShO
    return estimate_shutouts(
        stats.GS, stats.IP, stats.ERA,
        resolve_complete_games(stats, use_baseball_ip=use_baseball_ip),
        stats.k_per_9, stats.bb_per_9,
        use_baseball_ip=use_baseball_ip,
    )


@dataclass(frozen=True)
class EstimateSelection:
    QS: bool = False
    CG: bool = False
    ShO: bool = False

    def any(self) -> bool:
        return self.QS or self.CG or self.ShO

    @classmethod
    def from_stats(cls, stats: Iterable[str]) -> "EstimateSelection":
        chosen = set(stats)
        unknown = chosen - {"QS", "CG", "ShO"}
        if unknown:
            raise ValueError(f"Unknown pitching outcome stats: {sorted(unknown)}")
        return cls(QS="QS" in chosen, CG="CG" in chosen, ShO="ShO" in chosen)


MissingIds = Mapping[PitchingOutcomeStat, Union[MissingOutcome, Iterable[str]]]


def _missing_sets(missing: MissingIds) -> dict[str, set[str]]:
    sets: dict[str, set[str]] = {}
    for stat in ("QS", "CG", "ShO"):
        entry = missing.get(stat)
        if entry is None:
            sets[stat] = set()
        elif isinstance(entry, MissingOutcome):
            sets[stat] = set(entry.missing_player_ids)
        else:
            sets[stat] = set(entry)
    return sets


def apply_pitching_outcome_estimates(
    pitchers: Sequence[PitcherRecord],
    missing: Optional[MissingIds],
    selection: EstimateSelection,
    *,
    use_baseball_ip: bool = False,
) -> Sequence[PitcherRecord]:
    """Fill selected outcome counts for pitchers whose source lacked them.

    Returns ``pitchers`` itself when nothing is selected or nothing changes,
    so callers can detect a no-op with an identity check.
    """

    if missing is None or not selection.any() or not pitchers:
        return pitchers

    missing_ids = _missing_sets(missing)
    updated: List[PitcherRecord] = []
    changed = 0

    for pitcher in pitchers:
        update: dict[str, float] = {}
        if selection.QS and pitcher.player_id in missing_ids["QS"] and pitcher.QS <= 0:
            update["QS"] = estimate_quality_starts(
                pitcher.GS, pitcher.IP, pitcher.ERA, pitcher.W,
                use_baseball_ip=use_baseball_ip,
            )
        complete_games = pitcher.CG
        if selection.CG and pitcher.player_id in missing_ids["CG"] and pitcher.CG <= 0:
            complete_games = estimate_complete_games(
                pitcher.GS, pitcher.IP, pitcher.ERA, pitcher.k_per_9, pitcher.bb_per_9,
                use_baseball_ip=use_baseball_ip,
            )
            update["CG"] = complete_games
        if selection.ShO and pitcher.player_id in missing_ids["ShO"] and pitcher.ShO <= 0:
            if complete_games <= 0:
                complete_games = estimate_complete_games(
                    pitcher.GS, pitcher.IP, pitcher.ERA, pitcher.k_per_9, pitcher.bb_per_9,
                    use_baseball_ip=use_baseball_ip,
                )
            update["ShO"] = estimate_shutouts(
                pitcher.GS, pitcher.IP, pitcher.ERA, complete_games,
                pitcher.k_per_9, pitcher.bb_per_9,
                use_baseball_ip=use_baseball_ip,
            )
        if update:
            changed += 1
            updated.append(pitcher.model_copy(update=update))
        else:
            updated.append(pitcher)

    if not changed:
        return pitchers
    logger.info("Estimated pitching outcomes for %d of %d pitchers", changed, len(pitchers))
    return updated
