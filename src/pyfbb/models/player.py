"""Canonical player models shared across ingestion, estimation and scoring."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic.config import ConfigDict

from .eligibility import Eligibility

PlayerType = Literal["batter", "pitcher"]
PlayerKind = Literal["batter", "pitcher", "two-way"]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class BattingStats(_FrozenModel):
    """Batting counting and rate stats, keyed by projection-file column aliases."""

    G: float = Field(default=0.0, ge=0.0)
    PA: float = Field(default=0.0, ge=0.0)
    AB: float = Field(default=0.0, ge=0.0)
    H: float = Field(default=0.0, ge=0.0)
    singles: float = Field(default=0.0, ge=0.0, alias="1B")
    doubles: float = Field(default=0.0, ge=0.0, alias="2B")
    triples: float = Field(default=0.0, ge=0.0, alias="3B")
    HR: float = Field(default=0.0, ge=0.0)
    R: float = Field(default=0.0, ge=0.0)
    RBI: float = Field(default=0.0, ge=0.0)
    BB: float = Field(default=0.0, ge=0.0)
    IBB: float = Field(default=0.0, ge=0.0)
    SO: float = Field(default=0.0, ge=0.0)
    HBP: float = Field(default=0.0, ge=0.0)
    SF: float = Field(default=0.0, ge=0.0)
    SH: float = Field(default=0.0, ge=0.0)
    GDP: float = Field(default=0.0, ge=0.0)
    SB: float = Field(default=0.0, ge=0.0)
    CS: float = Field(default=0.0, ge=0.0)
    AVG: float = Field(default=0.0, ge=0.0)
    OBP: float = Field(default=0.0, ge=0.0)
    SLG: float = Field(default=0.0, ge=0.0)
    OPS: float = Field(default=0.0, ge=0.0)
    ISO: float = Field(default=0.0, ge=0.0)
    BABIP: float = Field(default=0.0, ge=0.0)
    wrc_plus: float = Field(default=0.0, alias="wRC+")
    WAR: float = 0.0


class PitchingStats(_FrozenModel):
    """Pitching counting and rate stats; ``IP`` is kept in source notation."""

    W: float = Field(default=0.0, ge=0.0)
    L: float = Field(default=0.0, ge=0.0)
    QS: float = Field(default=0.0, ge=0.0)
    CG: float = Field(default=0.0, ge=0.0)
    ShO: float = Field(default=0.0, ge=0.0)
    G: float = Field(default=0.0, ge=0.0)
    GS: float = Field(default=0.0, ge=0.0)
    SV: float = Field(default=0.0, ge=0.0)
    HLD: float = Field(default=0.0, ge=0.0)
    BS: float = Field(default=0.0, ge=0.0)
    IP: float = Field(default=0.0, ge=0.0)
    H: float = Field(default=0.0, ge=0.0)
    R: float = Field(default=0.0, ge=0.0)
    ER: float = Field(default=0.0, ge=0.0)
    HR: float = Field(default=0.0, ge=0.0)
    BB: float = Field(default=0.0, ge=0.0)
    IBB: float = Field(default=0.0, ge=0.0)
    HBP: float = Field(default=0.0, ge=0.0)
    SO: float = Field(default=0.0, ge=0.0)
    ERA: float = Field(default=0.0, ge=0.0)
    WHIP: float = Field(default=0.0, ge=0.0)
    k_per_9: float = Field(default=0.0, ge=0.0, alias="K/9")
    bb_per_9: float = Field(default=0.0, ge=0.0, alias="BB/9")
    FIP: float = Field(default=0.0, ge=0.0)
    WAR: float = 0.0


class _PlayerIdentity(_FrozenModel):
    # player_id is the synthetic cross-reference key; the two external id
    # namespaces are carried separately and may be empty.
    player_id: str = Field(..., min_length=1)
    name: str = Field(default="", alias="Name")
    team: str = Field(default="", alias="Team")
    fangraphs_id: str = Field(default="", alias="PlayerId")
    mlbam_id: str = Field(default="", alias="MLBAMID")
    adp: Optional[float] = Field(default=None, alias="ADP")
    eligibility: Optional[Eligibility] = None


class BatterRecord(_PlayerIdentity, BattingStats):
    kind: Literal["batter"] = "batter"


class PitcherRecord(_PlayerIdentity, PitchingStats):
    kind: Literal["pitcher"] = "pitcher"


class TwoWayRecord(_PlayerIdentity):
    """A player projected both as a hitter and as a pitcher."""

    kind: Literal["two-way"] = "two-way"
    batting_stats: BattingStats
    pitching_stats: PitchingStats


PlayerRecord = Annotated[
    Union[BatterRecord, PitcherRecord, TwoWayRecord],
    Field(discriminator="kind"),
]

PLAYER_LIST_ADAPTER: TypeAdapter[List[PlayerRecord]] = TypeAdapter(List[PlayerRecord])


def batting_stats_of(batter: BatterRecord) -> BattingStats:
    """Copy the stat block of a batter without its identity fields."""

    return BattingStats(**{name: getattr(batter, name) for name in BattingStats.model_fields})


def pitching_stats_of(pitcher: PitcherRecord) -> PitchingStats:
    return PitchingStats(**{name: getattr(pitcher, name) for name in PitchingStats.model_fields})
