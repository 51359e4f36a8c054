"""Helpers to load projection CSV/TSV exports and emit canonical records."""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Dict, List, Literal, Mapping, Optional, Sequence

from pydantic import ValidationError

from pyfbb.models import (
    PITCHING_OUTCOME_STATS,
    BatterRecord,
    BattingStats,
    MissingOutcome,
    PitcherRecord,
    PitchingOutcomeStat,
    PitchingStats,
    PlayerType,
)


logger = logging.getLogger(__name__)

IdSource = Literal["MLBAMID", "PlayerId", "custom", "generated"]

ID_SOURCES: tuple[str, ...] = ("MLBAMID", "PlayerId", "custom", "generated")

BATTER_HEADER_HINTS = ("PA", "AB", "1B", "2B", "3B", "SB", "CS", "AVG", "OBP", "SLG")
PITCHER_HEADER_HINTS = ("ERA", "WHIP", "IP", "GS", "SV", "QS", "K/9", "BB/9")


@dataclass(frozen=True)
class IdConfig:
    source: IdSource
    custom_column: Optional[str] = None

    def __post_init__(self) -> None:
        if self.source not in ID_SOURCES:
            raise ValueError(f"Unknown id source {self.source!r}")


@dataclass(frozen=True)
class ParseResult:
    players: List[BatterRecord | PitcherRecord]
    player_type: PlayerType
    row_count: int
    errors: List[str]
    id_source: IdSource
    available_columns: List[str]
    needs_id_selection: bool = False
    missing_pitching_outcomes: Optional[Dict[PitchingOutcomeStat, MissingOutcome]] = None


@dataclass
class _RawTable:
    headers: List[str]
    rows: List[Dict[str, str]] = field(default_factory=list)


def detect_delimiter(content: str) -> str:
    """Tab-delimited when the first line has more tabs than commas."""

    first_line = content.split("\n", 1)[0]
    return "\t" if first_line.count("\t") > first_line.count(",") else ","


def detect_player_type(headers: Sequence[str]) -> PlayerType:
    present = set(headers)
    batter_matches = sum(1 for col in BATTER_HEADER_HINTS if col in present)
    pitcher_matches = sum(1 for col in PITCHER_HEADER_HINTS if col in present)
    return "batter" if batter_matches > pitcher_matches else "pitcher"


def detect_id_source(headers: Sequence[str]) -> tuple[IdSource, bool]:
    """Return the detected id column and whether the caller must choose one."""

    lowered = {header.lower() for header in headers}
    if "mlbamid" in lowered:
        return "MLBAMID", False
    if "playerid" in lowered:
        return "PlayerId", False
    return "generated", True


def _read_table(content: str, delimiter: str) -> _RawTable:
    reader = csv.reader(StringIO(content), delimiter=delimiter)
    table: _RawTable | None = None
    for values in reader:
        # delimiter-only rows still occupy a row index
        if not values or (len(values) == 1 and not values[0].strip()):
            continue
        if table is None:
            table = _RawTable(headers=[value.strip() for value in values])
            continue
        row = {
            header: values[idx]
            for idx, header in enumerate(table.headers)
            if idx < len(values)
        }
        table.rows.append(row)
    return table or _RawTable(headers=[])


def _parse_number(raw: Optional[str]) -> float:
    value = _parse_nullable_number(raw)
    return 0.0 if value is None else value


def _parse_nullable_number(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    text = raw.replace(",", "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _is_missing_number(raw: Optional[str]) -> bool:
    return _parse_nullable_number(raw) is None


def _lookup(row: Mapping[str, str], column: str) -> str:
    value = row.get(column)
    if value is None:
        lowered = column.lower()
        for key, candidate in row.items():
            if key.lower() == lowered:
                value = candidate
                break
    return (value or "").strip()


def _resolve_player_id(
    row: Mapping[str, str], index: int, player_type: PlayerType, id_config: IdConfig
) -> str:
    fallback = f"{player_type}-{index}"
    if id_config.source == "MLBAMID":
        return _lookup(row, "MLBAMID") or fallback
    if id_config.source == "PlayerId":
        return _lookup(row, "PlayerId") or fallback
    if id_config.source == "custom" and id_config.custom_column:
        return _lookup(row, id_config.custom_column) or fallback
    return fallback


def _identity(row: Mapping[str, str], player_id: str) -> dict[str, object]:
    return {
        "player_id": player_id,
        "name": _lookup(row, "Name"),
        "team": _lookup(row, "Team"),
        "fangraphs_id": _lookup(row, "PlayerId"),
        "mlbam_id": _lookup(row, "MLBAMID"),
        "adp": _parse_nullable_number(row.get("ADP")),
    }


def _stat_values(row: Mapping[str, str], model: type[BattingStats] | type[PitchingStats]) -> dict[str, float]:
    return {
        name: _parse_number(row.get(info.alias or name))
        for name, info in model.model_fields.items()
    }


def parse_batter_row(row: Mapping[str, str], index: int, id_config: IdConfig) -> BatterRecord:
    player_id = _resolve_player_id(row, index, "batter", id_config)
    return BatterRecord(**_identity(row, player_id), **_stat_values(row, BattingStats))


def parse_pitcher_row(row: Mapping[str, str], index: int, id_config: IdConfig) -> PitcherRecord:
    player_id = _resolve_player_id(row, index, "pitcher", id_config)
    return PitcherRecord(**_identity(row, player_id), **_stat_values(row, PitchingStats))


def parse_projection_text(
    content: str,
    *,
    force_type: Optional[PlayerType] = None,
    id_config: Optional[IdConfig] = None,
) -> ParseResult:
    """Parse a projection export into typed records.

    When no id configuration is supplied and the headers carry neither an
    ``MLBAMID`` nor a ``PlayerId`` column, no players are parsed; the result
    has ``needs_id_selection`` set so the caller can pick a column and retry.
    """

    delimiter = detect_delimiter(content)
    table = _read_table(content, delimiter)
    player_type = force_type or detect_player_type(table.headers)
    detected_source, needs_selection = detect_id_source(table.headers)

    if id_config is None and needs_selection:
        logger.info(
            "No id column detected in %s file (%d rows); id source selection required",
            player_type,
            len(table.rows),
        )
        return ParseResult(
            players=[],
            player_type=player_type,
            row_count=len(table.rows),
            errors=[],
            id_source="generated",
            available_columns=list(table.headers),
            needs_id_selection=True,
        )

    final_config = id_config or IdConfig(source=detected_source)
    parse_row = parse_batter_row if player_type == "batter" else parse_pitcher_row
    errors: List[str] = []
    players: List[BatterRecord | PitcherRecord] = []
    missing: Dict[PitchingOutcomeStat, List[str]] = {stat: [] for stat in PITCHING_OUTCOME_STATS}

    for index, row in enumerate(table.rows):
        if not _lookup(row, "Name"):
            continue
        try:
            player = parse_row(row, index, final_config)
        except (ValidationError, ValueError, TypeError) as exc:
            errors.append(f"Row {index}: Failed to parse - {exc}")
            logger.warning("Skipping %s row %d: %s", player_type, index, exc)
            continue
        if player_type == "pitcher":
            for stat in PITCHING_OUTCOME_STATS:
                if _is_missing_number(row.get(stat)):
                    missing[stat].append(player.player_id)
        players.append(player)

    missing_summary: Optional[Dict[PitchingOutcomeStat, MissingOutcome]] = None
    if player_type == "pitcher":
        missing_summary = {
            stat: MissingOutcome(
                total_players=len(players),
                missing_player_ids=list(dict.fromkeys(ids)),
            )
            for stat, ids in missing.items()
        }

    logger.info(
        "Parsed %d %s rows (%d errors, id source %s)",
        len(players),
        player_type,
        len(errors),
        final_config.source,
    )
    return ParseResult(
        players=players,
        player_type=player_type,
        row_count=len(players),
        errors=errors,
        id_source=final_config.source,
        available_columns=list(table.headers),
        needs_id_selection=False,
        missing_pitching_outcomes=missing_summary,
    )


def load_projection_file(
    path: Path,
    *,
    force_type: Optional[PlayerType] = None,
    id_config: Optional[IdConfig] = None,
) -> ParseResult:
    content = path.read_text(encoding="utf-8-sig")
    return parse_projection_text(content, force_type=force_type, id_config=id_config)
