"""Season ordering and auto-selection for league, squad and team-stats views."""
from __future__ import annotations

import re
from typing import List, Optional, Sequence

from .constants import UNKNOWN_LEAGUE_RANK
from .ports.competitions import Season
from .settings import PRIMARY_LEAGUE_ID
from .config import setup_logger

log = setup_logger(__name__)

_YEAR_RE = re.compile(r"\d{4}")


def season_start_year(season: Season) -> int:
    """First four-digit year in the season name ("2025/2026" -> 2025), else 0."""

    match = _YEAR_RE.search(season.get("name") or "")
    return int(match.group(0)) if match else 0


def _league_rank(season: Season, primary_league_id: int) -> int:
    league_id = season.get("league_id")
    if league_id is None:
        return UNKNOWN_LEAGUE_RANK
    if league_id == primary_league_id:
        return -1
    return league_id


def sort_team_seasons(seasons: Sequence[Season], primary_league_id: int = PRIMARY_LEAGUE_ID) -> List[Season]:
    """Newest year first; within a year the primary league first, then by league id."""

    return sorted(
        seasons,
        key=lambda s: (-season_start_year(s), _league_rank(s, primary_league_id)),
    )


def sort_league_seasons(seasons: Sequence[Season]) -> List[Season]:
    """Seasons of a single league, most recent name first."""

    return sorted(seasons, key=lambda s: s.get("name") or "", reverse=True)


def resolve_season(seasons: Sequence[Season], primary_league_id: int = PRIMARY_LEAGUE_ID) -> Optional[Season]:
    """Pick the active season from an already-sorted list.

    First match wins:
      1. current season of the primary league
      2. any current season
      3. first season of the primary league
      4. first season
    Returns None for an empty list.
    """

    if not seasons:
        return None

    def _in_primary(s: Season) -> bool:
        return s.get("league_id") == primary_league_id

    candidates = (
        ("current_primary", lambda s: s.get("is_current") and _in_primary(s)),
        ("current_any", lambda s: s.get("is_current")),
        ("first_primary", _in_primary),
    )
    for via, predicate in candidates:
        for season in seasons:
            if predicate(season):
                log.debug("season_resolved season=%s via=%s", season.get("id"), via)
                return season

    log.debug("season_resolved season=%s via=first", seasons[0].get("id"))
    return seasons[0]


def resolve_league_season(seasons: Sequence[Season]) -> Optional[Season]:
    """Current season of a single-league list, else the first one."""

    for season in seasons:
        if season.get("is_current"):
            return season
    return seasons[0] if seasons else None


def find_season(seasons: Sequence[Season], season_id: Optional[int]) -> Optional[Season]:
    if season_id is None:
        return None
    return next((s for s in seasons if s.get("id") == season_id), None)
