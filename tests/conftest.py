import pytest


def _fixture(fid, home, away, state_id=None, starting_at="2025-11-01 15:00:00"):
    return {
        "id": fid,
        "starting_at": starting_at,
        "state_id": state_id,
        "participants": [
            {"id": fid * 10, "name": home, "meta": {"location": "home"}},
            {"id": fid * 10 + 1, "name": away, "meta": {"location": "away"}},
        ],
        "scores": [],
    }


FA_CUP_SEASONS = [
    {"id": 100, "name": "2024/2025", "league_id": 24, "is_current": False},
    {"id": 200, "name": "2025/2026", "league_id": 24, "is_current": True},
]

FA_CUP_STAGES = {
    200: [
        {
            "id": 2,
            "name": "2nd Round",
            "starting_at": "2025-12-06",
            "fixtures": [_fixture(21, "Fulham", "Bury", 1), _fixture(22, "Hull City", "Leeds", 1)],
        },
        {
            "id": 1,
            "name": "1st Round",
            "starting_at": "2025-11-01",
            "fixtures": [_fixture(11, "Wigan", "Crewe", state_id=5), _fixture(12, "Barnet", "Fulham", state_id=5)],
        },
    ],
    100: [{"id": 9, "name": "Final", "starting_at": "2025-05-17", "fixtures": [_fixture(91, "Palace", "Man City", 5)]}],
}


class FakeCompetitions:
    def __init__(self, seasons=None, stages=None, team_seasons=None, standings=None, teams=None, error=None):
        self.seasons = seasons or []
        self.stages = stages or {}
        self.team_seasons = team_seasons or []
        self.standings = standings or []
        self.teams = teams or []
        self.searches = []
        self.error = error
        self.stage_requests = []

    def _check(self):
        if self.error:
            raise self.error

    def get_seasons_by_league(self, league_id):
        self._check()
        return self.seasons

    def get_team_seasons(self, team_id):
        self._check()
        return self.team_seasons

    def get_stages_by_season(self, season_id):
        self._check()
        self.stage_requests.append(season_id)
        return self.stages.get(season_id, [])

    def get_standings(self, season_id):
        self._check()
        return self.standings

    def search_teams(self, query):
        self._check()
        self.searches.append(query)
        return self.teams


@pytest.fixture
def make_competitions():
    return FakeCompetitions


@pytest.fixture
def fa_cup_client():
    return FakeCompetitions(seasons=FA_CUP_SEASONS, stages=FA_CUP_STAGES)
