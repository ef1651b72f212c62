from __future__ import annotations

import logging
import threading
from typing import Optional

from flask import Blueprint, request

from ..app_utils import make_error, make_ok, upstream_status
from ..composition import providers
from ..constants import CUP_LEAGUE_IDS, STANDING_VIEWS, league_name
from ..errors import APIError
from ..services.competition_views import CompetitionViewService

bp = Blueprint("competitions_api", __name__, url_prefix="/api/competitions")
_service_singleton = None
_service_lock = threading.Lock()
log = logging.getLogger(__name__)


def _get_service() -> CompetitionViewService:
    global _service_singleton
    if _service_singleton is None:
        with _service_lock:
            if _service_singleton is None:
                _service_singleton = CompetitionViewService(client=providers.betsmoke_client())
                log.info("competitions_api service ready")
    return _service_singleton


def _parse_bool(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


def _optional_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number") from None


@bp.get("/leagues/<int:league_id>/cup")
def cup(league_id: int):
    if league_id not in CUP_LEAGUE_IDS:
        return make_error(
            f"league_id must be one of: {', '.join(str(i) for i in CUP_LEAGUE_IDS)}",
            message="Unknown cup competition",
            status_code=404,
        )
    try:
        season_id = _optional_int("season_id")
        stage_id = _optional_int("stage_id")
    except ValueError as exc:
        return make_error(str(exc), message="Invalid request", status_code=400)

    team_filter = request.args.get("team") or ""
    name = league_name(league_id, default="Cup Competition")
    try:
        payload = _get_service().cup_view(league_id, season_id=season_id, stage_id=stage_id, team_filter=team_filter)
    except APIError as exc:
        log.warning("cup_view_failed league=%s code=%s", league_id, exc.code)
        return make_error(exc, message=f"Failed to load {name} stages", status_code=upstream_status(exc))
    message = "success" if payload["state"] == "ok" else "No data available"
    return make_ok(payload, message=message)


@bp.get("/leagues/<int:league_id>/standings")
def standings(league_id: int):
    view = (request.args.get("view") or "overall").strip().lower()
    if view not in STANDING_VIEWS:
        return make_error(f"view must be one of: {', '.join(STANDING_VIEWS)}", message="Invalid request", status_code=400)
    try:
        season_id = _optional_int("season_id")
    except ValueError as exc:
        return make_error(str(exc), message="Invalid request", status_code=400)

    show_zones = _parse_bool(request.args.get("zones"), True)
    try:
        payload = _get_service().standings_view(league_id, season_id=season_id, view=view, show_zones=show_zones)
    except APIError as exc:
        log.warning("standings_view_failed league=%s code=%s", league_id, exc.code)
        return make_error(exc, message="Failed to load standings", status_code=upstream_status(exc))
    message = "success" if payload["state"] == "ok" else "No data available"
    return make_ok(payload, message=message)


@bp.get("/teams/<int:team_id>/seasons")
def team_seasons(team_id: int):
    try:
        season_id = _optional_int("season_id")
    except ValueError as exc:
        return make_error(str(exc), message="Invalid request", status_code=400)
    try:
        payload = _get_service().team_seasons_view(team_id, season_id=season_id)
    except APIError as exc:
        log.warning("team_seasons_failed team=%s code=%s", team_id, exc.code)
        return make_error(exc, message="Failed to load seasons", status_code=upstream_status(exc))
    message = "success" if payload["state"] == "ok" else "No data available"
    return make_ok(payload, message=message)


@bp.get("/teams/search")
def team_search():
    query = (request.args.get("q") or "").strip()
    if not query:
        return make_error("q is required", message="Invalid request", status_code=400)
    try:
        payload = _get_service().team_search_view(query)
    except APIError as exc:
        log.warning("team_search_failed code=%s", exc.code)
        return make_error(exc, message="Search failed", status_code=upstream_status(exc))
    message = "success" if payload["state"] == "ok" else "No data available"
    return make_ok(payload, message=message)
