import threading

import pytest
from flask import Flask

from betsmoke.errors import APIError
from betsmoke.routes import competitions_api
from betsmoke.services.competition_views import CompetitionViewService


@pytest.fixture
def client(monkeypatch, fa_cup_client):
    monkeypatch.setattr(competitions_api, "_service_singleton", CompetitionViewService(fa_cup_client))
    app = Flask(__name__)
    app.register_blueprint(competitions_api.bp)
    app.testing = True
    with app.test_client() as client:
        yield client


def test_cup_route_returns_envelope(client):
    response = client.get("/api/competitions/leagues/24/cup")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["message"] == "success"
    assert payload["data"]["stage"]["id"] == 2


def test_cup_route_passes_query_args(client):
    response = client.get("/api/competitions/leagues/24/cup?season_id=200&stage_id=2&team=barnet")
    data = response.get_json()["data"]
    assert data["team_filter"] == "barnet"
    assert data["is_cross_stage"] is True


def test_cup_route_rejects_bad_ids(client):
    response = client.get("/api/competitions/leagues/24/cup?season_id=abc")
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["status"] == "error"
    assert payload["message"] == "Invalid request"


def test_cup_route_empty_state(client, fa_cup_client):
    fa_cup_client.seasons = []
    response = client.get("/api/competitions/leagues/27/cup")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["message"] == "No data available"
    assert payload["data"]["state"] == "empty"


@pytest.mark.parametrize(
    "code, status",
    [("NETWORK", 502), ("HTTP_500", 502), ("HTTP_404", 404), ("HTTP_401", 401), ("UNAUTHENTICATED", 401)],
)
def test_cup_route_maps_upstream_errors(client, fa_cup_client, code, status):
    fa_cup_client.error = APIError("BetSmokeAPI", code, "boom")
    response = client.get("/api/competitions/leagues/24/cup")
    assert response.status_code == status
    payload = response.get_json()
    assert payload["message"] == "Failed to load FA Cup stages"
    assert payload["error"]["code"] == code


def test_standings_route_validates_view(client):
    response = client.get("/api/competitions/leagues/8/standings?view=neutral")
    assert response.status_code == 400


def test_standings_route_home_view(client, fa_cup_client):
    fa_cup_client.standings = [{"participant_id": 1, "participant": {"name": "Arsenal"}, "position": 1, "details": []}]
    response = client.get("/api/competitions/leagues/8/standings?view=HOME&zones=false")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["view"] == "home"
    assert data["table"][0]["zone"] is None


def test_team_seasons_route(client, fa_cup_client):
    fa_cup_client.team_seasons = [{"id": 3, "name": "2025/2026", "league_id": 8, "is_current": True}]
    response = client.get("/api/competitions/teams/11/seasons")
    assert response.status_code == 200
    assert response.get_json()["data"]["season"]["id"] == 3


def test_cup_route_rejects_non_cup_league(client, fa_cup_client):
    response = client.get("/api/competitions/leagues/8/cup")
    assert response.status_code == 404
    assert response.get_json()["message"] == "Unknown cup competition"
    assert fa_cup_client.stage_requests == []


def test_team_search_route(client, fa_cup_client):
    fa_cup_client.teams = [{"id": 1, "name": "Fulham"}]
    response = client.get("/api/competitions/teams/search?q=ful")
    assert response.status_code == 200
    assert response.get_json()["data"]["teams"][0]["name"] == "Fulham"
    assert fa_cup_client.searches == ["ful"]


def test_team_search_route_requires_query(client):
    response = client.get("/api/competitions/teams/search?q=%20")
    assert response.status_code == 400


def test_service_is_built_once_under_concurrent_requests(monkeypatch):
    built = []

    def _client():
        built.append(1)
        return object()

    monkeypatch.setattr(competitions_api, "_service_singleton", None)
    monkeypatch.setattr(competitions_api.providers, "betsmoke_client", _client)

    services = []
    threads = [threading.Thread(target=lambda: services.append(competitions_api._get_service())) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(built) == 1
    assert len({id(s) for s in services}) == 1
