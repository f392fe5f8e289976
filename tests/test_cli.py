import json

import pytest

from ffmgmt import cli
from ffmgmt.config_loader import AnalysisProfile

from tests.sample_league import league_payload


@pytest.fixture
def league_file(tmp_path):
    path = tmp_path / "league.json"
    path.write_text(json.dumps(league_payload()), encoding="utf-8")
    return path


def test_cli_prints_standings_and_writes_report(league_file, tmp_path, capsys):
    output = tmp_path / "report.json"

    cli.main([str(league_file), "--solver", "greedy", "--output", str(output)])

    printed = capsys.readouterr().out
    assert "Season 2023 (champion: 1)" in printed
    assert "All-time" in printed
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["strategy"] == "greedy"
    assert len(report["careers"]) == 2


def test_cli_profile_round_trip(league_file, tmp_path, capsys):
    profile_path = tmp_path / "profile.json"

    cli.main([str(league_file), "--season", "2024", "--save-profile", str(profile_path)])
    saved = AnalysisProfile.load(profile_path)
    assert saved.seasons == ["2024"]

    cli.main([str(league_file), "--load-profile", str(profile_path)])
    printed = capsys.readouterr().out
    assert "Season 2024" in printed
    assert "Season 2023" not in printed


def test_cli_exits_on_bad_league(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("[]", encoding="utf-8")

    with pytest.raises(SystemExit, match="must hold a JSON object"):
        cli.main([str(broken)])


def test_analysis_profile_save_and_load(tmp_path):
    path = tmp_path / "profile.json"
    AnalysisProfile(solver="exact", default_slots=["QB", "FLEX"], playoff_start_week=15).save(path)

    profile = AnalysisProfile.load(path)

    assert profile.solver == "exact"
    assert profile.default_slots == ["QB", "FLEX"]
    assert profile.playoff_start_week == 15
    assert profile.seasons == []
