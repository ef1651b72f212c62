"""League table reshaping: overall/home/away views built from standings details."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

from .constants import (
    CHAMPIONS_LEAGUE_SPOTS,
    MISSING_STAT_RANK,
    RELEGATION_SPOTS,
    STANDING_TYPE_IDS,
    STANDING_VIEWS,
)
from .ports.competitions import StandingRow

Stat = Union[int, float, str]

MISSING = "-"


def stat_value(details: Optional[Sequence[Dict[str, Any]]], type_id: int) -> Stat:
    for detail in details or []:
        if detail.get("type_id") == type_id:
            value = detail.get("value")
            return MISSING if value is None else value
    return MISSING


def goal_difference(details: Optional[Sequence[Dict[str, Any]]], view: str) -> Stat:
    ids = STANDING_TYPE_IDS[view]
    if "goal_diff" in ids:
        return stat_value(details, ids["goal_diff"])
    # home/away goal difference is not stored upstream
    gf = stat_value(details, ids["goals_for"])
    ga = stat_value(details, ids["goals_against"])
    if gf == MISSING or ga == MISSING:
        return MISSING
    return gf - ga


def _rank(value: Stat) -> float:
    return MISSING_STAT_RANK if value == MISSING else value


def _check_view(view: str) -> str:
    if view not in STANDING_VIEWS:
        raise ValueError(f"Unsupported table view: {view}. Allowed: {', '.join(STANDING_VIEWS)}")
    return view


def row_points(row: StandingRow, view: str) -> Stat:
    if view == "overall":
        return MISSING if row.get("points") is None else row["points"]
    return stat_value(row.get("details"), STANDING_TYPE_IDS[view]["points"])


def standings_view(rows: Sequence[StandingRow], view: str = "overall") -> List[StandingRow]:
    """Rows in display order for ``view``.

    The overall table keeps upstream order. Home/away tables are re-sorted
    by points, then goal difference, both descending.
    """

    _check_view(view)
    if view == "overall":
        return list(rows)
    return sorted(
        rows,
        key=lambda r: (_rank(row_points(r, view)), _rank(goal_difference(r.get("details"), view))),
        reverse=True,
    )


def zone_for_position(index: int, table_size: int) -> Optional[str]:
    """Zone for the 0-based table index, or None."""

    if index < CHAMPIONS_LEAGUE_SPOTS:
        return "champions_league"
    if table_size > RELEGATION_SPOTS + CHAMPIONS_LEAGUE_SPOTS and index >= table_size - RELEGATION_SPOTS:
        return "relegation"
    return None


def table_rows(rows: Sequence[StandingRow], view: str = "overall", show_zones: bool = True) -> List[Dict[str, Any]]:
    ordered = standings_view(rows, view)
    ids = STANDING_TYPE_IDS[view]
    table = []
    for index, row in enumerate(ordered):
        details = row.get("details")
        table.append(
            {
                "position": row.get("position") if view == "overall" else index + 1,
                "participant_id": row.get("participant_id"),
                "team": row.get("name"),
                "image_path": row.get("image_path"),
                "played": stat_value(details, ids["played"]),
                "won": stat_value(details, ids["won"]),
                "drawn": stat_value(details, ids["drawn"]),
                "lost": stat_value(details, ids["lost"]),
                "goals_for": stat_value(details, ids["goals_for"]),
                "goals_against": stat_value(details, ids["goals_against"]),
                "goal_diff": goal_difference(details, view),
                "points": row_points(row, view),
                "form": list(row.get("form") or []) if view == "overall" else [],
                "zone": zone_for_position(index, len(ordered)) if show_zones and view == "overall" else None,
            }
        )
    return table
