import pytest
from pydantic import ValidationError

from pyfbb.models import PLAYER_LIST_ADAPTER, BatterRecord, PitcherRecord, TwoWayRecord


def test_player_record_is_frozen():
    record = BatterRecord(player_id="p1", name="Test Player", team="NYM", HR=30)

    assert record.player_id == "p1"
    assert record.kind == "batter"

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "p2"  # type: ignore[misc]


def test_records_accept_column_labels():
    record = BatterRecord.model_validate(
        {"player_id": "1", "Name": "Label Player", "1B": 80, "wRC+": 120, "MLBAMID": "1"}
    )
    assert record.name == "Label Player"
    assert record.singles == 80
    assert record.wrc_plus == 120
    assert record.model_dump(by_alias=True)["1B"] == 80


def test_counting_stats_must_be_non_negative():
    with pytest.raises(ValidationError):
        PitcherRecord(player_id="1", ER=-1)
    with pytest.raises(ValidationError):
        BatterRecord(player_id="")
    assert BatterRecord(player_id="1", WAR=-1.5).WAR == -1.5


def test_player_list_is_discriminated_by_kind():
    players = PLAYER_LIST_ADAPTER.validate_python(
        [
            {"player_id": "1", "kind": "batter", "HR": 10},
            {"player_id": "2", "kind": "pitcher", "IP": 100.1},
            {
                "player_id": "3",
                "kind": "two-way",
                "batting_stats": {"HR": 5},
                "pitching_stats": {"K/9": 11.0},
            },
        ]
    )

    assert [type(player) for player in players] == [BatterRecord, PitcherRecord, TwoWayRecord]
    assert players[2].pitching_stats.k_per_9 == 11.0
