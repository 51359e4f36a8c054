import csv
import json
from pathlib import Path

import pytest

from pyfbb.cli import main


BATTERS = """Name,Team,PA,AB,H,1B,2B,3B,HR,R,RBI,SB,CS,BB,SO,MLBAMID
Aaron Judge,NYY,680,560,160,85,28,1,46,115,120,8,2,110,170,592450
Shohei Ohtani,LAD,650,580,170,90,30,5,45,120,110,20,4,80,150,660271
"""

PITCHERS = """Name,Team,W,L,GS,G,IP,ERA,WHIP,SO,MLBAMID
Gerrit Cole,NYY,14,7,30,30,190.1,3.20,1.08,222,543037
Shohei Ohtani,LAD,10,5,25,25,150.0,3.10,1.05,180,660271
"""


def _write(tmp_path: Path) -> tuple[Path, Path]:
    batters = tmp_path / "batters.csv"
    pitchers = tmp_path / "pitchers.csv"
    batters.write_text(BATTERS, encoding="utf-8")
    pitchers.write_text(PITCHERS, encoding="utf-8")
    return batters, pitchers


def _read(path: Path) -> list[dict[str, str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def test_cli_writes_leaderboard(tmp_path: Path, capsys):
    batters, pitchers = _write(tmp_path)
    output = tmp_path / "board.csv"

    main([str(batters), str(pitchers), "--estimate", "QS", "--output", str(output)])

    rows = _read(output)
    assert len(rows) == 3
    kinds = {row["player_id"]: row["kind"] for row in rows}
    assert kinds["660271"] == "two-way"
    assert [int(row["rank"]) for row in rows] == [1, 2, 3]
    out = capsys.readouterr().out
    assert "Merged 1 two-way players" in out
    assert "baseball IP" in out


def test_cli_view_and_split(tmp_path: Path):
    batters, pitchers = _write(tmp_path)
    output = tmp_path / "board.csv"

    main([
        str(batters), str(pitchers),
        "--view", "pitchers", "--no-merge-two-way", "--ip-mode", "decimal",
        "--output", str(output),
    ])

    rows = _read(output)
    assert {row["kind"] for row in rows} == {"pitcher"}
    assert sorted(row["player_id"] for row in rows) == ["543037", "660271"]


def test_cli_profile_round_trip(tmp_path: Path):
    batters, _ = _write(tmp_path)
    profile = tmp_path / "profile.json"
    output = tmp_path / "board.csv"

    main([str(batters), "--preset", "generic hits", "--save-profile", str(profile), "--output", str(output)])
    saved = json.loads(profile.read_text(encoding="utf-8"))
    assert saved["weights"]["name"] == "Generic Hits"
    assert saved["id_config"]["source"] == "MLBAMID"

    main([str(batters), "--load-profile", str(profile), "--top", "1", "--output", str(output)])
    assert len(_read(output)) == 1


def test_cli_requires_id_column(tmp_path: Path):
    path = tmp_path / "noid.csv"
    path.write_text("Name,PA,AB\nSomeone,600,550\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        main([str(path), "--output", str(tmp_path / "out.csv")])

    main([str(path), "--id-source", "generated", "--output", str(tmp_path / "out.csv")])
    assert _read(tmp_path / "out.csv")[0]["player_id"] == "batter-0"
