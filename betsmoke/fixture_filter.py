"""Team-name search over stage fixtures, with a cross-stage fallback."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .constants import CURRENT_SCORE_DESCRIPTION
from .ports.competitions import Fixture, Participant, Stage


@dataclass
class StageMatches:
    stage: Stage
    fixtures: List[Fixture]


@dataclass
class FilterResult:
    """Either in-stage matches or cross-stage groups, never both.

    ``is_cross_stage`` is set whenever a non-blank query missed the selected
    stage, even if no other stage matched either.
    """

    fixtures: List[Fixture] = field(default_factory=list)
    cross_stage: List[StageMatches] = field(default_factory=list)
    is_cross_stage: bool = False


def home_away(fixture: Mapping[str, Any]) -> Tuple[Optional[Participant], Optional[Participant]]:
    """Home and away participants; untagged lists fall back to positions 0 and 1."""

    participants = list(fixture.get("participants") or [])
    home = next((p for p in participants if p.get("location") == "home"), None)
    away = next((p for p in participants if p.get("location") == "away"), None)
    if home is None and participants:
        home = participants[0]
    if away is None and len(participants) > 1:
        away = participants[1]
    return home, away


def _name_matches(participant: Optional[Mapping[str, Any]], needle: str) -> bool:
    if not participant:
        return False
    return needle in str(participant.get("name") or "").lower()


def filter_fixtures_by_team(fixtures: Sequence[Fixture], query: Optional[str]) -> Sequence[Fixture]:
    """Fixtures where either side's name contains ``query`` (case-insensitive).

    A blank query returns ``fixtures`` itself, unfiltered.
    """

    if not query or not query.strip():
        return fixtures
    needle = query.strip().lower()
    matched = []
    for fixture in fixtures:
        home, away = home_away(fixture)
        if _name_matches(home, needle) or _name_matches(away, needle):
            matched.append(fixture)
    return matched


def search_across_stages(
    stages: Sequence[Stage],
    query: Optional[str],
    exclude_stage_id: Optional[int] = None,
) -> List[StageMatches]:
    if not query or not query.strip():
        return []
    groups = []
    for stage in stages:
        if exclude_stage_id is not None and stage.get("id") == exclude_stage_id:
            continue
        matches = filter_fixtures_by_team(stage.get("fixtures") or [], query)
        if matches:
            groups.append(StageMatches(stage=stage, fixtures=list(matches)))
    return groups


def filter_stage_fixtures(
    stages: Sequence[Stage],
    selected_stage: Optional[Stage],
    query: Optional[str],
) -> FilterResult:
    """Filter the selected stage; fall back to the rest of the season on a miss."""

    stage_fixtures = (selected_stage or {}).get("fixtures") or []
    in_stage = filter_fixtures_by_team(stage_fixtures, query)
    if in_stage or not query or not query.strip():
        return FilterResult(fixtures=list(in_stage))

    exclude_id = selected_stage.get("id") if selected_stage else None
    return FilterResult(
        cross_stage=search_across_stages(stages, query, exclude_stage_id=exclude_id),
        is_cross_stage=True,
    )


def fixture_score(fixture: Mapping[str, Any]) -> Dict[str, Any]:
    """Current home/away goals, "-" where unknown."""

    home_score = fixture.get("home_score")
    away_score = fixture.get("away_score")

    current = [
        s for s in fixture.get("scores") or []
        if isinstance(s, Mapping) and s.get("description") == CURRENT_SCORE_DESCRIPTION
    ]
    if len(current) == 2:
        for entry in current:
            score = entry.get("score") or {}
            if score.get("participant") == "home":
                home_score = score.get("goals")
            elif score.get("participant") == "away":
                away_score = score.get("goals")

    return {
        "home": "-" if home_score is None else home_score,
        "away": "-" if away_score is None else away_score,
    }
