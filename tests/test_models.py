import json

import pytest
from pydantic import ValidationError

from ffmgmt.config import Position
from ffmgmt.ingest import LeagueLoadError, load_league, parse_league
from ffmgmt.models import PlayerRecord, SeasonInput, TeamSeasonInput, WeekSnapshot


def test_player_record_is_frozen_and_normalizes_positions():
    record = PlayerRecord(player_id=123, position="de", fantasy_positions=["DL", "OLB"])

    assert record.player_id == "123"
    assert record.base_position is Position.DL
    assert record.candidate_positions == (Position.DL, Position.LB)
    with pytest.raises(ValidationError):
        record.name = "changed"


def test_player_record_requires_id():
    with pytest.raises(ValidationError):
        PlayerRecord(player_id="")


def test_week_snapshot_accepts_sleeper_shapes():
    snapshot = WeekSnapshot.model_validate(
        {
            "week": 4,
            "starters": [11, None, "0"],
            "players": [11, 12],
            "players_points": {"11": 12.5, "12": None},
            "matchup_id": 2,
        }
    )

    assert snapshot.starters == ["11", "0", "0"]
    assert snapshot.players == ["11", "12"]
    assert snapshot.players_points == {"11": 12.5, "12": 0.0}
    assert snapshot.slot_tokens is None


def test_week_snapshot_rejects_blank_slot_tokens():
    with pytest.raises(ValidationError):
        WeekSnapshot(week=1, slot_tokens={"11": "  "})


def test_season_sanitizes_and_expands_slots():
    season = SeasonInput(season_id=2023, roster_positions=["QB", "BN", "IR", "FLEX"])
    assert season.season_id == "2023"
    assert season.starting_slots == ["QB", "FLEX"]

    expanded = SeasonInput(season_id="2024", lineup_config={"QB": 1, "WR": 2, "TAXI": 3})
    assert expanded.starting_slots == ["QB", "WR", "WR"]


def test_season_week_windows():
    season = SeasonInput(season_id="2024", playoff_start_week=15, current_week=10)
    assert season.is_regular_season(14)
    assert not season.is_regular_season(15)
    assert season.is_completed(9)
    assert not season.is_completed(10)
    assert SeasonInput(season_id="2024", current_week=1).is_completed(17)


def test_team_input_aliases_and_blank_owner():
    team = TeamSeasonInput.model_validate({"roster_id": 3, "owner_id": " ", "name": ""})
    assert team.team_id == "3"
    assert team.owner_id is None
    assert team.display_name == "Team 3"


def test_parse_league_applies_defaults():
    league = parse_league(
        {"league_id": 77, "seasons": [{"season_id": "2023"}, {"season_id": "2024", "starting_slots": ["K"]}]},
        default_slots=["QB", "RB"],
        playoff_start_week=16,
    )

    assert league.league_id == "77"
    assert league.seasons[0].starting_slots == ["QB", "RB"]
    assert league.seasons[0].playoff_start_week == 16
    assert league.seasons[1].starting_slots == ["K"]


def test_parse_league_wraps_validation_errors():
    with pytest.raises(LeagueLoadError, match="invalid league payload"):
        parse_league({"seasons": [{"season_id": "2024", "playoff_start_week": 0}]})


def test_load_league_from_file(tmp_path):
    path = tmp_path / "league.json"
    path.write_text(json.dumps({"league_id": "L1", "name": "Dynasty", "seasons": []}), encoding="utf-8")

    league = load_league(path)

    assert league.name == "Dynasty"


def test_load_league_reports_bad_files(tmp_path):
    with pytest.raises(LeagueLoadError, match="not found"):
        load_league(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{nope", encoding="utf-8")
    with pytest.raises(LeagueLoadError, match="not valid JSON"):
        load_league(broken)
