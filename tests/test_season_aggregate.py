import pytest

from ffmgmt.aggregate import EfficiencyStats, aggregate_season, evaluate_week
from ffmgmt.config import Position
from ffmgmt.models import PlayerRecord, SeasonInput, WeekSnapshot

from tests.sample_league import season_2023


STANDARD_SLOTS = ["QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "K", "DL", "LB", "DB"]
STANDARD_SCORES = {
    "QB1": 20, "RB1": 15, "RB2": 10, "RB3": 8, "WR1": 12, "WR2": 9,
    "TE1": 7, "K1": 5, "DL1": 6, "LB1": 4, "DB1": 3,
}


def _standard_roster() -> dict[str, PlayerRecord]:
    return {
        player_id: PlayerRecord(player_id=player_id, position=player_id[:-1])
        for player_id in STANDARD_SCORES
    }


def _standard_week(starters: list[str]) -> WeekSnapshot:
    return WeekSnapshot(
        week=1,
        starters=starters,
        players=list(STANDARD_SCORES),
        players_points=STANDARD_SCORES,
    )


def test_perfect_week_is_full_management():
    starters = ["QB1", "RB1", "RB2", "WR1", "WR2", "TE1", "RB3", "K1", "DL1", "LB1", "DB1"]

    week = evaluate_week(STANDARD_SLOTS, _standard_week(starters), roster=_standard_roster())

    assert week.actual.total == pytest.approx(99)
    assert week.optimal.total == pytest.approx(99)
    assert week.management_percent == pytest.approx(100.0)


@pytest.mark.parametrize("slot", ["WRRB_FLEX", "REC_FLEX"])
def test_sleeper_flex_slot_optimal_covers_actual(slot):
    snapshot = WeekSnapshot(week=1, starters=["W1"], players=["W1"], players_points={"W1": 10})
    roster = {"W1": PlayerRecord(player_id="W1", position="WR")}

    week = evaluate_week([slot], snapshot, roster=roster)

    assert week.actual.total == pytest.approx(10)
    assert week.optimal.total >= week.actual.total
    assert week.optimal_slots[0].position is Position.WR
    assert week.management_percent == pytest.approx(100.0)


def test_empty_pool_builds_optimal_from_starters_without_placeholders():
    snapshot = WeekSnapshot(week=2, starters=["W1", "0"], players=[], players_points={"W1": 7, "0": 50})
    roster = {pid: PlayerRecord(player_id=pid, position="WR") for pid in ("W1", "0")}

    week = evaluate_week(["WR", "FLEX"], snapshot, roster=roster)

    assert [a.player_id for a in week.optimal_slots] == ["W1", None]
    assert week.optimal.total == pytest.approx(7)


def test_negative_only_starter_counts_in_optimal():
    snapshot = WeekSnapshot(week=1, starters=["K1"], players=["K1"], players_points={"K1": -3})
    roster = {"K1": PlayerRecord(player_id="K1", position="K")}

    week = evaluate_week(["K"], snapshot, roster=roster)

    assert week.optimal_slots[0].player_id == "K1"
    assert week.optimal.total == pytest.approx(-3)
    assert week.actual.total == week.optimal.total
    assert week.counted


def test_empty_flex_costs_management():
    starters = ["QB1", "RB1", "RB2", "WR1", "WR2", "TE1", "0", "K1", "DL1", "LB1", "DB1"]

    week = evaluate_week(STANDARD_SLOTS, _standard_week(starters), roster=_standard_roster())

    assert week.actual.total == pytest.approx(91)
    assert week.optimal.total == pytest.approx(99)
    assert week.management_percent == pytest.approx(91 / 99 * 100)
    assert week.actual_slots[6].is_empty


def test_aggregate_season_splits_regular_and_playoffs():
    season = SeasonInput.model_validate(season_2023())
    alpha = season.teams[0]

    aggregate = aggregate_season(alpha, season)

    regular = aggregate.regular
    assert regular.weeks == 2
    assert regular.actual_total == pytest.approx(65)
    assert regular.optimal_total == pytest.approx(68)
    assert regular.management_percent == pytest.approx(65 / 68 * 100)
    assert regular.ppw == pytest.approx(32.5)
    assert regular.position_ppw(Position.RB) == pytest.approx(17.5)
    assert regular.individual_ppw(Position.RB) == pytest.approx(8.75)
    assert regular.position_management_percent(Position.WR) == 0.0
    assert regular.actual_starts[Position.RB] == 4
    assert aggregate.playoffs.weeks == 1
    assert aggregate.playoffs.actual_total == pytest.approx(40)
    assert aggregate.record.points_for == pytest.approx(65)
    assert [week.week for week in aggregate.weeks] == [1, 2, 3]


def test_zero_score_weeks_are_not_counted():
    season = SeasonInput.model_validate(season_2023())
    alpha = season.teams[0].model_copy(
        update={
            "weeks": season.teams[0].weeks
            + [WeekSnapshot(week=4, starters=["qa"], players=["qa"], players_points={"qa": 0})]
        }
    )
    season = season.model_copy(update={"playoff_start_week": 10})

    aggregate = aggregate_season(alpha, season)

    assert aggregate.regular.weeks == 3
    assert not aggregate.weeks[-1].counted


def test_in_progress_weeks_are_skipped():
    season = SeasonInput.model_validate({**season_2023(), "current_week": 2})

    aggregate = aggregate_season(season.teams[1], season)

    assert [week.week for week in aggregate.weeks] == [1]


def test_ratios_guard_zero_denominators():
    empty = EfficiencyStats()

    assert empty.management_percent == 0.0
    assert empty.offensive_management_percent == 0.0
    assert empty.defensive_management_percent == 0.0
    assert empty.ppw == 0.0
    assert empty.position_ppw(Position.DL) == 0.0
    assert empty.individual_ppw(Position.DL) == 0.0
    assert empty.position_management_percent(Position.DL) == 0.0


def test_stats_addition_sums_everything():
    season = SeasonInput.model_validate(season_2023())
    aggregate = aggregate_season(season.teams[0], season)

    combined = aggregate.regular + aggregate.playoffs

    assert combined.weeks == 3
    assert combined.actual_total == pytest.approx(105)
    assert combined.actual_points[Position.QB] == pytest.approx(50)
