"""Boundary normalisation for BetSmoke proxy payloads.

The proxy passes SportsMonks records through mostly untouched, so optional
fields come and go between endpoints and seasons. Everything the resolvers
and views read is defaulted here once, instead of at every use site.
Source dicts are never mutated.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .ports.competitions import Fixture, Participant, Season, Stage, StandingRow
from .config import setup_logger

log = setup_logger(__name__)


def as_list(value: Any) -> List[Any]:
    """Coerce list-ish payload fields (``[...]`` or ``{"data": [...]}``) to a list."""

    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        data = value.get("data")
        if isinstance(data, list):
            return data
        return list(value.values())
    return []


def as_dict(value: Any) -> Dict[str, Any]:
    if isinstance(value, dict):
        nested = value.get("data")
        if isinstance(nested, dict):
            return nested
        return value
    return {}


def safe_int(value: Any) -> Optional[int]:
    try:
        if value is None or isinstance(value, bool):
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _state_code(raw: Dict[str, Any]) -> Optional[str]:
    state = raw.get("state")
    if isinstance(state, str):
        return _text(state)
    state = as_dict(state)
    return _text(state.get("state")) or _text(state.get("developer_name")) or _text(state.get("short_name"))


def normalize_participant(raw: Dict[str, Any]) -> Participant:
    # Some responses nest the team under raw['participant']
    team = as_dict(raw.get("participant")) or raw
    meta = as_dict(raw.get("meta"))
    location = str(meta.get("location") or "").lower() or None
    if location not in {"home", "away"}:
        location = None
    return {
        "id": safe_int(team.get("id")),
        "name": _text(team.get("name")) or "",
        "location": location,
        "image_path": _text(team.get("image_path")),
    }


def normalize_fixture(raw: Dict[str, Any]) -> Fixture:
    participants = [normalize_participant(p) for p in as_list(raw.get("participants")) if isinstance(p, dict)]
    scores = [s for s in as_list(raw.get("scores")) if isinstance(s, dict)]
    state_id = safe_int(raw.get("state_id"))
    if state_id is None:
        state_id = safe_int(as_dict(raw.get("state")).get("id"))
    fixture: Fixture = {
        "id": safe_int(raw.get("id")) or 0,
        "starting_at": _text(raw.get("starting_at")),
        "state_id": state_id or None,
        "state": _state_code(raw),
        "participants": participants,
        "scores": scores,
        "name": _text(raw.get("name")),
    }
    home_score = safe_int(raw.get("home_score"))
    away_score = safe_int(raw.get("away_score"))
    if home_score is not None:
        fixture["home_score"] = home_score
    if away_score is not None:
        fixture["away_score"] = away_score
    return fixture


def normalize_stage(raw: Dict[str, Any]) -> Stage:
    fixtures_raw = raw.get("fixtures")
    if fixtures_raw is None:
        fixtures_raw = raw.get("games")
    return {
        "id": safe_int(raw.get("id")) or 0,
        "name": _text(raw.get("name")) or "",
        "starting_at": _text(raw.get("starting_at")),
        "ending_at": _text(raw.get("ending_at")),
        "sort_order": safe_int(raw.get("sort_order")),
        "is_current": bool(raw.get("is_current")),
        "finished": bool(raw.get("finished")),
        "fixtures": [normalize_fixture(f) for f in as_list(fixtures_raw) if isinstance(f, dict)],
    }


def normalize_season(raw: Dict[str, Any]) -> Season:
    league = as_dict(raw.get("league"))
    league_id = safe_int(raw.get("league_id"))
    if league_id is None:
        league_id = safe_int(league.get("id"))
    season: Season = {
        "id": safe_int(raw.get("id")) or 0,
        "name": _text(raw.get("name")) or "",
        "league_id": league_id,
        "is_current": bool(raw.get("is_current")),
    }
    league_name = _text(league.get("name"))
    if league_name:
        season["league_name"] = league_name
    return season


def _form_letters(raw_form: Any) -> List[str]:
    """Last five results, oldest first."""

    entries = [f for f in as_list(raw_form) if isinstance(f, dict) and _text(f.get("form"))]
    entries.sort(key=lambda f: safe_int(f.get("sort_order")) or 0, reverse=True)
    recent = entries[:5]
    recent.reverse()
    return [str(f["form"]).strip().upper() for f in recent]


def normalize_standing_row(raw: Dict[str, Any]) -> StandingRow:
    participant = as_dict(raw.get("participant"))
    return {
        "participant_id": safe_int(raw.get("participant_id")) or safe_int(participant.get("id")),
        "name": _text(participant.get("name")) or "",
        "image_path": _text(participant.get("image_path")),
        "position": safe_int(raw.get("position")),
        "points": safe_int(raw.get("points")),
        "form": _form_letters(raw.get("form")),
        "details": [d for d in as_list(raw.get("details")) if isinstance(d, dict)],
    }


def _normalize_rows(rows: Any, normalizer, kind: str) -> list:
    items = []
    dropped = 0
    for row in as_list(rows):
        if not isinstance(row, dict):
            dropped += 1
            continue
        items.append(normalizer(row))
    if dropped:
        log.debug("normalize_dropped kind=%s count=%d", kind, dropped)
    return items


def normalize_seasons(rows: Any) -> List[Season]:
    return _normalize_rows(rows, normalize_season, "season")


def normalize_stages(rows: Any) -> List[Stage]:
    return _normalize_rows(rows, normalize_stage, "stage")


def normalize_standings(rows: Any) -> List[StandingRow]:
    return _normalize_rows(rows, normalize_standing_row, "standing")
