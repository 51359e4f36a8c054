"""Scoring weight configuration and named presets."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _Weights(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def get(self, category: str) -> float:
        """Look up a weight by category label (``"1B"``) or field name."""

        for name, info in type(self).model_fields.items():
            if category in (name, info.alias):
                return getattr(self, name)
        raise KeyError(f"Unknown scoring category {category!r}")


class BattingWeights(_Weights):
    R: float = 0.0
    H: float = 0.0  # generic hits, additive to per-type hit scoring
    singles: float = Field(default=0.0, alias="1B")
    doubles: float = Field(default=0.0, alias="2B")
    triples: float = Field(default=0.0, alias="3B")
    HR: float = 0.0
    RBI: float = 0.0
    SB: float = 0.0
    CS: float = 0.0
    BB: float = 0.0
    SO: float = 0.0
    HBP: float = 0.0
    SF: float = 0.0
    GDP: float = 0.0


class PitchingWeights(_Weights):
    IP: float = 0.0
    W: float = 0.0
    L: float = 0.0
    QS: float = 0.0
    CG: float = 0.0
    ShO: float = 0.0
    SV: float = 0.0
    BS: float = 0.0
    HLD: float = 0.0
    SO: float = 0.0
    H: float = 0.0
    ER: float = 0.0
    HR: float = 0.0
    BB: float = 0.0
    HBP: float = 0.0


class ScoringWeights(BaseModel):
    """A named points configuration; replaced wholesale rather than edited."""

    name: str = "Custom"
    batting: BattingWeights = Field(default_factory=BattingWeights)
    pitching: PitchingWeights = Field(default_factory=PitchingWeights)

    model_config = ConfigDict(frozen=True)

    def with_batting(self, **updates: float) -> "ScoringWeights":
        values = self.batting.model_dump()
        values.update(_field_updates(BattingWeights, updates))
        return self.model_copy(update={"batting": BattingWeights(**values)})

    def with_pitching(self, **updates: float) -> "ScoringWeights":
        values = self.pitching.model_dump()
        values.update(_field_updates(PitchingWeights, updates))
        return self.model_copy(update={"pitching": PitchingWeights(**values)})


def _field_updates(model: type[_Weights], updates: Mapping[str, float]) -> Dict[str, float]:
    aliases = {info.alias or name: name for name, info in model.model_fields.items()}
    resolved: Dict[str, float] = {}
    for key, value in updates.items():
        name = key if key in model.model_fields else aliases.get(key)
        if name is None:
            raise KeyError(f"Unknown scoring category {key!r}")
        resolved[name] = float(value)
    return resolved


_PRESETS: Dict[str, ScoringWeights] = {
    "DEFAULT": ScoringWeights(
        name="Default",
        batting=BattingWeights(
            R=1, H=0, singles=1, doubles=2, triples=3, HR=4, RBI=1,
            SB=1, CS=-1, BB=1, SO=-1, HBP=1, SF=0, GDP=0,
        ),
        pitching=PitchingWeights(
            IP=3, W=5, L=-5, QS=3, CG=0, ShO=0, SV=5, BS=-3, HLD=2,
            SO=1, H=-1, ER=-2, HR=-1, BB=-1, HBP=-1,
        ),
    ),
    "GENERIC_HITS": ScoringWeights(
        name="Generic Hits",
        batting=BattingWeights(
            R=1, H=1, singles=0, doubles=1, triples=2, HR=3, RBI=1,
            SB=1, CS=-1, BB=1, SO=-1, HBP=1, SF=0, GDP=0,
        ),
        pitching=PitchingWeights(
            IP=3, W=5, L=-5, QS=3, CG=0, ShO=0, SV=5, BS=-3, HLD=2,
            SO=1, H=-1, ER=-2, HR=-1, BB=-1, HBP=-1,
        ),
    ),
    "RELIEF_HEAVY": ScoringWeights(
        name="Relief Heavy",
        batting=BattingWeights(
            R=1, H=0, singles=1, doubles=2, triples=3, HR=4, RBI=1,
            SB=2, CS=-1, BB=1, SO=-0.5, HBP=1, SF=0, GDP=-0.5,
        ),
        pitching=PitchingWeights(
            IP=3, W=4, L=-3, QS=2, CG=0, ShO=0, SV=7, BS=-4, HLD=4,
            SO=1, H=-1, ER=-2, HR=-1, BB=-1, HBP=-1,
        ),
    ),
}

DEFAULT_PRESET = "DEFAULT"


def iter_presets() -> Iterable[Tuple[str, ScoringWeights]]:
    """Return (key, weights) pairs for every configured preset."""

    return _PRESETS.items()


def preset_names() -> list[str]:
    return list(_PRESETS)


def get_preset(name: str) -> ScoringWeights:
    """Fetch a preset by key or display name, raising KeyError if missing."""

    key = name.strip().upper().replace(" ", "_")
    if key not in _PRESETS:
        raise KeyError(f"No scoring preset named {name!r}")
    return _PRESETS[key]


def default_weights() -> ScoringWeights:
    return _PRESETS[DEFAULT_PRESET]
