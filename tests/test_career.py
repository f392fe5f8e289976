import logging
from dataclasses import replace

import pytest

from ffmgmt.aggregate import (
    EfficiencyStats,
    SeasonAggregate,
    TeamRecord,
    aggregate_season,
    merge_careers,
    rank_standings,
)
from ffmgmt.models import SeasonInput

from tests.sample_league import season_2023, season_2024


def _all_aggregates() -> list[SeasonAggregate]:
    aggregates = []
    for payload in (season_2023(), season_2024()):
        season = SeasonInput.model_validate(payload)
        aggregates.extend(aggregate_season(team, season) for team in season.teams)
    return aggregates


def _entry(name: str, **record) -> SeasonAggregate:
    return SeasonAggregate(
        season_id="2024",
        team_id=name,
        owner_id=name,
        name=name,
        regular=EfficiencyStats(weeks=1, actual_total=record.pop("actual", 90.0), optimal_total=100.0),
        playoffs=EfficiencyStats(),
        record=TeamRecord(**record),
    )


def test_merge_groups_by_owner_and_sums():
    careers = {career.owner_id: career for career in merge_careers(_all_aggregates())}

    alpha = careers["o1"]
    assert alpha.seasons == ("2023", "2024")
    assert alpha.name == "Alpha II"
    assert alpha.regular.weeks == 3
    assert alpha.regular.actual_total == pytest.approx(100)
    assert alpha.regular.optimal_total == pytest.approx(106)
    assert alpha.management_percent == pytest.approx(100 / 106 * 100)
    assert alpha.regular.ppw == pytest.approx(100 / 3)
    assert alpha.playoffs.weeks == 1


def test_merge_excludes_missing_owner(caplog):
    with caplog.at_level(logging.INFO):
        careers = merge_careers(_all_aggregates())

    assert sorted(career.owner_id for career in careers) == ["o1", "o2"]
    assert "has no owner id" in caplog.text


def test_merge_counts_duplicate_team_seasons_once():
    aggregates = _all_aggregates()

    assert merge_careers(aggregates + aggregates) == merge_careers(aggregates)


def test_merge_is_order_independent():
    aggregates = _all_aggregates()
    assert merge_careers(list(reversed(aggregates))) == merge_careers(aggregates)


def test_career_ppw_recomputed_from_sums():
    first = _entry("o", wins=1)
    second = replace(
        first,
        season_id="2025",
        regular=EfficiencyStats(weeks=3, actual_total=30.0, optimal_total=60.0),
    )

    (career,) = merge_careers([first, second])

    assert career.regular.ppw == pytest.approx(120 / 4)
    assert career.management_percent == pytest.approx(120 / 160 * 100)


def test_rank_standings_tiebreakers():
    entries = [
        _entry("zeta", wins=8, losses=5),
        _entry("champ", wins=6, losses=7, championships=1),
        _entry("eta", wins=8, losses=4),
        _entry("pf_low", wins=8, losses=4, points_for=100.0),
        _entry("mgmt_high", wins=9, losses=4, points_for=100.0, actual=99.0),
        _entry("mgmt_low", wins=9, losses=4, points_for=100.0, actual=80.0),
        _entry("alpha", wins=8, losses=5),
    ]

    ranked = [entry.name for entry in rank_standings(entries)]

    assert ranked == ["champ", "mgmt_high", "mgmt_low", "pf_low", "eta", "alpha", "zeta"]
