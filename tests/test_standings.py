import pytest

from betsmoke.standings import goal_difference, stat_value, standings_view, table_rows, zone_for_position


def _row(pid, name, position, points, home=(0, 0, 0), away=(0, 0, 0)):
    # (points, goals_for, goals_against)
    details = [
        {"type_id": 129, "value": 10},
        {"type_id": 179, "value": home[1] + away[1] - home[2] - away[2]},
        {"type_id": 185, "value": home[0]},
        {"type_id": 139, "value": home[1]},
        {"type_id": 140, "value": home[2]},
        {"type_id": 186, "value": away[0]},
        {"type_id": 145, "value": away[1]},
        {"type_id": 146, "value": away[2]},
    ]
    return {
        "participant_id": pid,
        "name": name,
        "position": position,
        "points": points,
        "form": ["W"],
        "details": details,
    }


ROWS = [
    _row(1, "Arsenal", 1, 30, home=(12, 10, 4), away=(18, 14, 5)),
    _row(2, "Chelsea", 2, 28, home=(18, 15, 3), away=(10, 8, 8)),
    _row(3, "Fulham", 3, 25, home=(18, 12, 6), away=(7, 5, 9)),
]


def test_stat_value_missing():
    assert stat_value(None, 129) == "-"
    assert stat_value([{"type_id": 129, "value": None}], 129) == "-"
    assert stat_value([{"type_id": 129, "value": 3}], 129) == 3


def test_overall_keeps_upstream_order():
    assert [r["participant_id"] for r in standings_view(ROWS, "overall")] == [1, 2, 3]


def test_home_table_sorted_by_points_then_goal_difference():
    # Chelsea and Fulham both 18 home points; Chelsea +12 vs Fulham +6
    assert [r["participant_id"] for r in standings_view(ROWS, "home")] == [2, 3, 1]


def test_missing_points_sort_last():
    rows = ROWS + [{"participant_id": 4, "name": "Bury", "position": 4, "points": None, "form": [], "details": []}]
    assert [r["participant_id"] for r in standings_view(rows, "away")][-1] == 4


def test_goal_difference_computed_for_home_away():
    assert goal_difference(ROWS[0]["details"], "home") == 6
    assert goal_difference(ROWS[0]["details"], "overall") == 15
    assert goal_difference([], "away") == "-"


def test_table_rows_positions_and_zones():
    table = table_rows(ROWS, "away")
    assert [r["position"] for r in table] == [1, 2, 3]
    assert table[0]["team"] == "Arsenal"
    assert table[0]["form"] == []
    assert all(r["zone"] is None for r in table)

    overall = table_rows(ROWS, "overall")
    assert overall[0]["points"] == 30
    assert overall[0]["form"] == ["W"]
    assert overall[0]["zone"] == "champions_league"


def test_zone_for_position_twenty_team_table():
    assert zone_for_position(0, 20) == "champions_league"
    assert zone_for_position(3, 20) == "champions_league"
    assert zone_for_position(4, 20) is None
    assert zone_for_position(16, 20) is None
    assert zone_for_position(17, 20) == "relegation"
    assert zone_for_position(19, 20) == "relegation"


def test_unknown_view_rejected():
    with pytest.raises(ValueError):
        standings_view(ROWS, "neutral")
