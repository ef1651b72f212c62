from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests

from ..config import API_MAX_RETRIES, API_RETRY_BACKOFF, API_TIMEOUT
from ..errors import APIError
from ..net_retry import request_with_retries, scrub_url
from ..ports.competitions import CompetitionsPort
from ..settings import BETSMOKE_API_URL, BETSMOKE_TOKEN

log = logging.getLogger(__name__)

SOURCE = "BetSmokeAPI"

TokenProvider = Callable[[], Optional[str]]


def _error_message(response: Optional[requests.Response], default: str) -> str:
    if response is None:
        return default
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or default)
    return default


class BetSmokeClient(CompetitionsPort):
    """Thin client for the BetSmoke proxy (auth, notes and SportsMonks data routes).

    Data routes need a bearer token, supplied by ``token_provider`` on every
    call so that a session store can swap tokens without rebuilding the client.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        token_provider: Optional[TokenProvider] = None,
        max_attempts: Optional[int] = None,
        session: Optional[Any] = None,
    ) -> None:
        self.base_url = (base_url or BETSMOKE_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else API_TIMEOUT
        self.max_attempts = max_attempts or API_MAX_RETRIES
        self.token_provider: TokenProvider = token_provider or (lambda: BETSMOKE_TOKEN)
        self.session = session

    # -------- transport --------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
        auth: bool = True,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if auth:
            bearer = token or self.token_provider()
            if not bearer:
                raise APIError(SOURCE, "UNAUTHENTICATED", "Not logged in", path)
            headers["Authorization"] = f"Bearer {bearer}"
        # proxy responses must never come from an intermediate cache
        headers["Cache-Control"] = "no-store"

        try:
            response = request_with_retries(
                method,
                url,
                max_attempts=self.max_attempts,
                backoff_factor=API_RETRY_BACKOFF,
                timeout=self.timeout,
                logger=log,
                context=f"{method} {path}",
                session=self.session,
                headers=headers,
                json=json,
            )
        except requests.exceptions.HTTPError as exc:
            resp = exc.response
            status = getattr(resp, "status_code", None) or 0
            raise APIError(
                SOURCE,
                f"HTTP_{status}",
                _error_message(resp, "Request failed"),
                scrub_url(url),
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise APIError(SOURCE, "NETWORK", "Network error", f"{type(exc).__name__}: {scrub_url(str(exc))}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise APIError(SOURCE, "BAD_JSON", "Invalid response from server", scrub_url(url)) from exc
        if not isinstance(body, dict):
            raise APIError(SOURCE, "BAD_JSON", "Unexpected response shape", scrub_url(url))
        return body

    # -------- auth --------
    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Return ``{"token": ..., "user": {...}}``."""
        return self._request("POST", "/auth/login", json={"email": email, "password": password}, auth=False)

    def me(self, token: Optional[str] = None) -> Dict[str, Any]:
        body = self._request("GET", "/auth/me", token=token)
        user = body.get("user")
        if not isinstance(user, dict):
            raise APIError(SOURCE, "BAD_JSON", "User missing from response", "/auth/me")
        return user

    # -------- CompetitionsPort --------
    def get_seasons_by_league(self, league_id: int) -> List[Dict[str, Any]]:
        body = self._request("GET", f"/seasons/leagues/{int(league_id)}")
        # { league: { seasons: [...] } } on some deployments, { seasons: [...] } on others
        league = body.get("league") if isinstance(body.get("league"), dict) else {}
        rows = league.get("seasons") or body.get("seasons") or []
        return rows if isinstance(rows, list) else []

    def get_team_seasons(self, team_id: int) -> List[Dict[str, Any]]:
        rows = self._request("GET", f"/teams/{int(team_id)}/seasons").get("seasons") or []
        return rows if isinstance(rows, list) else []

    def get_stages_by_season(self, season_id: int) -> List[Dict[str, Any]]:
        body = self._request("GET", f"/fixtures/seasons/{int(season_id)}")
        rows = body.get("stages") or body.get("rounds") or []
        log.info(
            "betsmoke_stages_fetched season=%s stages=%s fixtures=%s",
            season_id,
            body.get("totalStages", len(rows) if isinstance(rows, list) else 0),
            body.get("totalFixtures"),
        )
        return rows if isinstance(rows, list) else []

    def get_standings(self, season_id: int) -> List[Dict[str, Any]]:
        rows = self._request("GET", f"/standings/seasons/{int(season_id)}").get("standings") or []
        return rows if isinstance(rows, list) else []

    def search_teams(self, query: str) -> List[Dict[str, Any]]:
        rows = self._request("GET", f"/teams/search/{quote(query, safe='')}").get("teams") or []
        return rows if isinstance(rows, list) else []

    # -------- notes --------
    def list_notes(self) -> List[Dict[str, Any]]:
        rows = self._request("GET", "/notes").get("notes") or []
        return rows if isinstance(rows, list) else []

    def get_note(self, note_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/notes/{quote(str(note_id), safe='')}").get("note") or {}

    def create_note(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/notes", json=data).get("note") or {}

    def update_note(self, note_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/notes/{quote(str(note_id), safe='')}", json=data).get("note") or {}

    def delete_note(self, note_id: str) -> None:
        self._request("DELETE", f"/notes/{quote(str(note_id), safe='')}")
