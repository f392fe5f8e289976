import pytest

from ffmgmt.analysis import analyze_league
from ffmgmt.ingest import parse_league

from tests.sample_league import league_payload


def _league():
    return parse_league(league_payload())


def test_seasons_are_reported_in_order_with_standings():
    report = analyze_league(_league(), strategy="greedy")

    assert [season.season_id for season in report.seasons] == ["2023", "2024"]
    season_2023 = report.season("2023")
    assert season_2023.champion_team_id == "1"
    assert [entry.name for entry in season_2023.standings] == ["Alpha", "Bravo"]
    assert season_2023.standings[0].record.championships == 1

    season_2024 = report.season("2024")
    assert season_2024.champion_team_id is None
    assert [entry.name for entry in season_2024.standings] == ["Alpha II", "Orphan", "Bravo"]


def test_careers_are_ranked_and_carry_head_to_head():
    report = analyze_league(_league(), strategy="greedy")

    alpha, bravo = report.careers
    assert alpha.owner_id == "o1"
    assert alpha.record.championships == 1
    assert (alpha.record.wins, alpha.record.losses) == (2, 1)
    assert (bravo.record.wins, bravo.record.losses) == (1, 2)
    assert alpha.head_to_head["o2"].record == "3-1"
    assert bravo.head_to_head["o1"].games == 4


def test_pipeline_is_idempotent():
    league = _league()
    assert analyze_league(league) == analyze_league(league)
    assert analyze_league(league).to_dict() == analyze_league(_league()).to_dict()


def test_exact_strategy_never_scores_below_actual():
    report = analyze_league(_league(), strategy="exact")

    for season in report.seasons:
        for entry in season.standings:
            for week in entry.weeks:
                assert week.optimal.total >= week.actual.total - 1e-9


def test_season_filter():
    report = analyze_league(_league(), seasons=["2024"])

    assert [season.season_id for season in report.seasons] == ["2024"]
    (alpha, bravo) = report.careers
    assert alpha.seasons == ("2024",)
    assert alpha.record.championships == 0


def test_unknown_season_filter_raises():
    with pytest.raises(ValueError, match="No seasons matching"):
        analyze_league(_league(), seasons=["1999"])


def test_report_serializes():
    payload = analyze_league(_league()).to_dict(include_weeks=True)

    first = payload["seasons"][0]["standings"][0]
    assert first["record"]["record"] == "1-1"
    assert first["regular"]["positions"]["RB"]["starts"] == 4
    assert first["weeks"][0]["optimal"]["total"] == pytest.approx(38)
    assert payload["careers"][0]["head_to_head"]["o2"]["record"] == "3-1"
