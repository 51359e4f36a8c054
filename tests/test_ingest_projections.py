from pathlib import Path

import pytest

from pyfbb.ingest import (
    IdConfig,
    detect_delimiter,
    detect_id_source,
    detect_player_type,
    load_projection_file,
    parse_projection_text,
)
from pyfbb.models import BatterRecord, PitcherRecord


BATTERS_CSV = """Name,Team,G,PA,AB,H,1B,2B,3B,HR,R,RBI,BB,SO,SB,CS,AVG,wRC+,WAR,ADP,PlayerId,MLBAMID
Aaron Judge,NYY,152,"1,234",540,160,85,28,1,46,115,120,110,170,8,2,.296,180,9.1,3.5,15640,592450
,,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,,,

Replacement Guy,FA,10,30,28,5,4,1,0,0,2,2,1,9,0,0,.178,40,-0.4,,99999,
"""

PITCHERS_TSV = "\n".join(
    [
        "Name\tTeam\tW\tL\tQS\tG\tGS\tIP\tERA\tWHIP\tK/9\tBB/9\tSO\tPlayerId\tMLBAMID",
        "Gerrit Cole\tNYY\t14\t7\t19\t30\t30\t190.1\t3.20\t1.08\t10.5\t2.3\t222\t13125\t543037",
        "Mystery Arm\tFA\t2\t3\t\t40\t0\t50.2\t4.10\t1.30\t9.0\t3.5\t50\t20001\t700001",
    ]
)


def test_detect_delimiter():
    assert detect_delimiter(PITCHERS_TSV) == "\t"
    assert detect_delimiter(BATTERS_CSV) == ","


def test_detect_player_type_from_headers():
    assert detect_player_type(["Name", "PA", "AB", "AVG", "HR"]) == "batter"
    assert detect_player_type(["Name", "ERA", "WHIP", "IP", "HR"]) == "pitcher"
    # ties go to pitcher
    assert detect_player_type(["Name", "Team"]) == "pitcher"
    assert detect_player_type(["Name", "CG", "ShO"]) == "pitcher"


def test_detect_id_source_is_case_insensitive():
    assert detect_id_source(["Name", "mlbamid", "PlayerId"]) == ("MLBAMID", False)
    assert detect_id_source(["Name", "playerid"]) == ("PlayerId", False)
    assert detect_id_source(["Name", "Team"]) == ("generated", True)


def test_parse_batter_csv():
    result = parse_projection_text(BATTERS_CSV)

    assert result.player_type == "batter"
    assert result.id_source == "MLBAMID"
    assert result.errors == []
    assert result.missing_pitching_outcomes is None
    # the row with an empty name and the blank line are dropped
    assert result.row_count == 2
    judge, replacement = result.players
    assert isinstance(judge, BatterRecord)
    assert judge.player_id == "592450"
    assert judge.fangraphs_id == "15640"
    assert judge.PA == pytest.approx(1234)
    assert judge.singles == 85
    assert judge.wrc_plus == 180
    assert judge.adp == pytest.approx(3.5)
    # no MLBAMID value falls back to a positional id
    assert replacement.player_id == "batter-2"
    assert replacement.WAR == pytest.approx(-0.4)
    assert replacement.adp is None


def test_parse_pitcher_tsv_tracks_missing_outcomes():
    result = parse_projection_text(PITCHERS_TSV)

    assert result.player_type == "pitcher"
    cole, mystery = result.players
    assert isinstance(cole, PitcherRecord)
    assert cole.IP == pytest.approx(190.1)
    assert cole.k_per_9 == pytest.approx(10.5)

    missing = result.missing_pitching_outcomes
    assert missing is not None
    assert missing["QS"].total_players == 2
    assert missing["QS"].missing_player_ids == ["700001"]
    # columns absent from the file are missing for every pitcher
    assert missing["CG"].missing_player_ids == ["543037", "700001"]
    assert missing["ShO"].missing_player_ids == ["543037", "700001"]
    assert mystery.QS == 0


def test_missing_id_column_requires_selection():
    content = "Name,Team,PA,AB,HR\nSomeone,NYM,600,550,30\nOther,NYM,500,450,10\n"
    result = parse_projection_text(content)

    assert result.needs_id_selection
    assert result.players == []
    assert result.row_count == 2
    assert result.available_columns == ["Name", "Team", "PA", "AB", "HR"]

    generated = parse_projection_text(content, id_config=IdConfig(source="generated"))
    assert not generated.needs_id_selection
    assert [p.player_id for p in generated.players] == ["batter-0", "batter-1"]


def test_custom_id_column():
    content = "Name,PA,AB,xId\nSomeone,600,550,abc\nOther,500,450,\n"
    result = parse_projection_text(content, id_config=IdConfig(source="custom", custom_column="xid"))

    assert [p.player_id for p in result.players] == ["abc", "batter-1"]
    assert result.id_source == "custom"


def test_force_type_overrides_detection():
    content = "Name,PA,AB,MLBAMID\nSomeone,600,550,1\n"
    result = parse_projection_text(content, force_type="pitcher")
    assert result.player_type == "pitcher"
    assert isinstance(result.players[0], PitcherRecord)


def test_invalid_rows_are_reported_and_skipped():
    content = "Name,PA,AB,HR,MLBAMID\nGood,600,550,30,1\nBad,600,550,-3,2\n"
    result = parse_projection_text(content)

    assert [p.player_id for p in result.players] == ["1"]
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Row 1: Failed to parse - ")


def test_negative_wrc_plus_is_kept():
    result = parse_projection_text("Name,PA,AB,wRC+,MLBAMID\nBad Bat,100,90,-12,1\n")

    assert result.errors == []
    assert result.players[0].wrc_plus == -12


def test_delimiter_only_rows_keep_their_row_index():
    content = "Name,Team,PA\n,,\nSomebody,FA,300\n"
    result = parse_projection_text(content, id_config=IdConfig(source="generated"))

    assert [p.player_id for p in result.players] == ["batter-1"]


def test_non_numeric_cells_parse_as_zero():
    content = "Name,PA,AB,HR,MLBAMID\nSomeone,600,n/a,,1\n"
    player = parse_projection_text(content).players[0]
    assert player.AB == 0
    assert player.HR == 0


def test_load_projection_file_strips_bom(tmp_path: Path):
    path = tmp_path / "batters.csv"
    path.write_text("\ufeff" + BATTERS_CSV, encoding="utf-8")

    result = load_projection_file(path)
    assert result.available_columns[0] == "Name"
    assert result.players[0].name == "Aaron Judge"


def test_empty_content():
    result = parse_projection_text("")
    assert result.players == []
    assert result.needs_id_selection
