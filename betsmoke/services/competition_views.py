from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..constants import league_name
from ..fixture_filter import filter_stage_fixtures, fixture_score, home_away
from ..fixture_state import has_pending_fixtures, is_finished, match_state_label
from ..formatters import parse_date_string, parse_utc_datetime
from ..normalizers import normalize_participant, normalize_seasons, normalize_stages, normalize_standings
from ..ports.competitions import CompetitionsPort, Fixture, Season, Stage
from ..season_resolver import (
    find_season,
    resolve_league_season,
    resolve_season,
    sort_league_seasons,
    sort_team_seasons,
)
from ..settings import PRIMARY_LEAGUE_ID
from ..stage_resolver import find_stage, resolve_stage, sort_stages
from ..standings import table_rows

log = logging.getLogger(__name__)


def _season_item(season: Season, selected_id: Optional[int]) -> Dict[str, Any]:
    return {
        "id": season["id"],
        "name": season["name"],
        "league_id": season.get("league_id"),
        "league_name": season.get("league_name") or league_name(season.get("league_id")),
        "is_current": season["is_current"],
        "selected": season["id"] == selected_id,
    }


def _stage_item(stage: Stage, selected_id: Optional[int]) -> Dict[str, Any]:
    return {
        "id": stage["id"],
        "name": stage["name"],
        "starting_at": stage.get("starting_at"),
        "ending_at": stage.get("ending_at"),
        "is_current": stage["is_current"],
        "finished": stage["finished"],
        "fixture_count": len(stage["fixtures"]),
        "has_pending": has_pending_fixtures(stage),
        "selected": stage["id"] == selected_id,
    }


def _side(participant) -> Optional[Dict[str, Any]]:
    if not participant:
        return None
    return {"id": participant.get("id"), "name": participant.get("name"), "image_path": participant.get("image_path")}


def fixture_item(fixture: Fixture) -> Dict[str, Any]:
    home, away = home_away(fixture)
    kickoff = parse_utc_datetime(fixture.get("starting_at"))
    match_date = parse_date_string(fixture.get("starting_at"))
    return {
        "id": fixture["id"],
        "starting_at": fixture.get("starting_at"),
        "kickoff_utc": kickoff.strftime("%Y-%m-%dT%H:%M:%SZ") if kickoff else None,
        "date": match_date.isoformat() if match_date else None,
        "state": match_state_label(fixture),
        "finished": is_finished(fixture),
        "home": _side(home),
        "away": _side(away),
        "score": fixture_score(fixture),
    }


class CompetitionViewService:
    """Builds the season/stage/fixture payloads behind the competition pages.

    Each call fetches its own lists and derives a selection from them; nothing
    is shared between calls. Upstream failures surface as ``APIError``.
    """

    def __init__(self, client: CompetitionsPort, primary_league_id: int = PRIMARY_LEAGUE_ID) -> None:
        self.client = client
        self.primary_league_id = primary_league_id

    def _pick(self, seasons: List[Season], season_id: Optional[int], resolver) -> Optional[Season]:
        explicit = find_season(seasons, season_id)
        if season_id is not None and explicit is None:
            log.info("season_not_found requested=%s available=%d", season_id, len(seasons))
        return explicit or resolver(seasons)

    def cup_view(
        self,
        league_id: int,
        season_id: Optional[int] = None,
        stage_id: Optional[int] = None,
        team_filter: str = "",
    ) -> Dict[str, Any]:
        seasons = sort_league_seasons(normalize_seasons(self.client.get_seasons_by_league(league_id)))
        season = self._pick(seasons, season_id, resolve_league_season)
        payload: Dict[str, Any] = {
            "league_id": league_id,
            "league_name": league_name(league_id, default="Cup Competition"),
            "seasons": [_season_item(s, season["id"] if season else None) for s in seasons],
            "season": _season_item(season, season["id"]) if season else None,
            "stages": [],
            "stage": None,
            "team_filter": (team_filter or "").strip(),
            "fixtures": [],
            "cross_stage": [],
            "is_cross_stage": False,
        }
        if season is None:
            payload["state"] = "empty"
            return payload

        stages = sort_stages(normalize_stages(self.client.get_stages_by_season(season["id"])))
        stage = find_stage(stages, stage_id)
        if stage_id is not None and stage is None:
            log.info("stage_not_found requested=%s season=%s available=%d", stage_id, season["id"], len(stages))
        stage = stage or resolve_stage(stages)
        payload["stages"] = [_stage_item(s, stage["id"] if stage else None) for s in stages]
        if stage is None:
            payload["state"] = "empty"
            return payload

        result = filter_stage_fixtures(stages, stage, team_filter)
        payload["stage"] = _stage_item(stage, stage["id"])
        payload["fixtures"] = [fixture_item(f) for f in result.fixtures]
        payload["cross_stage"] = [
            {"stage": _stage_item(group.stage, stage["id"]), "fixtures": [fixture_item(f) for f in group.fixtures]}
            for group in result.cross_stage
        ]
        payload["is_cross_stage"] = result.is_cross_stage
        payload["state"] = "ok"
        log.info(
            "cup_view league=%s season=%s stage=%s fixtures=%d cross_stage=%d",
            league_id,
            season["id"],
            stage["id"],
            len(payload["fixtures"]),
            len(payload["cross_stage"]),
        )
        return payload

    def standings_view(
        self,
        league_id: int,
        season_id: Optional[int] = None,
        view: str = "overall",
        show_zones: bool = True,
    ) -> Dict[str, Any]:
        seasons = sort_league_seasons(normalize_seasons(self.client.get_seasons_by_league(league_id)))
        season = self._pick(seasons, season_id, resolve_league_season)
        payload: Dict[str, Any] = {
            "league_id": league_id,
            "league_name": league_name(league_id),
            "view": view,
            "seasons": [_season_item(s, season["id"] if season else None) for s in seasons],
            "season": _season_item(season, season["id"]) if season else None,
            "table": [],
        }
        if season is None:
            payload["state"] = "empty"
            return payload

        rows = normalize_standings(self.client.get_standings(season["id"]))
        payload["table"] = table_rows(rows, view, show_zones=show_zones)
        payload["state"] = "ok" if payload["table"] else "empty"
        return payload

    def team_seasons_view(self, team_id: int, season_id: Optional[int] = None) -> Dict[str, Any]:
        """Season selector for squad and team statistics pages."""

        seasons = sort_team_seasons(
            normalize_seasons(self.client.get_team_seasons(team_id)),
            self.primary_league_id,
        )
        season = self._pick(
            seasons,
            season_id,
            lambda rows: resolve_season(rows, self.primary_league_id),
        )
        return {
            "team_id": team_id,
            "seasons": [_season_item(s, season["id"] if season else None) for s in seasons],
            "season": _season_item(season, season["id"]) if season else None,
            "state": "ok" if season else "empty",
        }

    def team_search_view(self, query: str) -> Dict[str, Any]:
        query = (query or "").strip()
        if not query:
            return {"query": "", "teams": [], "state": "empty"}
        teams = [
            {"id": team["id"], "name": team["name"], "image_path": team.get("image_path")}
            for team in (normalize_participant(row) for row in self.client.search_teams(query) if isinstance(row, dict))
        ]
        return {"query": query, "teams": teams, "state": "ok" if teams else "empty"}
