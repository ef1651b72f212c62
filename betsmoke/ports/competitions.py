from typing import Any, Dict, List, Optional, TypedDict, NotRequired


class Participant(TypedDict):
    id: Optional[int]
    name: str
    location: Optional[str]     # "home" | "away" | None when untagged
    image_path: NotRequired[Optional[str]]


class Fixture(TypedDict):
    id: int
    starting_at: Optional[str]  # "YYYY-MM-DD HH:MM:SS" UTC
    state_id: Optional[int]
    state: Optional[str]        # developer name, e.g. "FT", "NS"
    participants: List[Participant]
    scores: List[Dict[str, Any]]
    home_score: NotRequired[Optional[int]]
    away_score: NotRequired[Optional[int]]
    name: NotRequired[Optional[str]]


class Stage(TypedDict):
    id: int
    name: str
    starting_at: Optional[str]
    ending_at: Optional[str]
    sort_order: Optional[int]
    is_current: bool
    finished: bool
    fixtures: List[Fixture]


class Season(TypedDict):
    id: int
    name: str
    league_id: Optional[int]
    is_current: bool
    league_name: NotRequired[Optional[str]]


class StandingRow(TypedDict):
    participant_id: Optional[int]
    name: str
    position: Optional[int]
    points: Optional[int]
    form: List[str]             # most recent last, "W" | "D" | "L"
    details: List[Dict[str, Any]]
    image_path: NotRequired[Optional[str]]


class CompetitionsPort:
    def get_seasons_by_league(self, league_id: int) -> List[Dict[str, Any]]: ...

    def get_team_seasons(self, team_id: int) -> List[Dict[str, Any]]: ...

    def get_stages_by_season(self, season_id: int) -> List[Dict[str, Any]]: ...

    def get_standings(self, season_id: int) -> List[Dict[str, Any]]: ...

    def search_teams(self, query: str) -> List[Dict[str, Any]]: ...
