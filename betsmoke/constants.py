"""Centralized configuration constants for the BetSmoke competition browser."""

# ---- SportsMonks league ids exposed by the BetSmoke proxy ----
PREMIER_LEAGUE_ID = 8
FA_CUP_ID = 24
EFL_CUP_ID = 27

LEAGUE_NAMES = {
    PREMIER_LEAGUE_ID: "Premier League",
    FA_CUP_ID: "FA Cup",
    EFL_CUP_ID: "EFL Cup",
}

CUP_LEAGUE_IDS = (FA_CUP_ID, EFL_CUP_ID)

# Leagues without an id sort after every known league
UNKNOWN_LEAGUE_RANK = 999


def league_name(league_id: int | None, default: str = "Other") -> str:
    """Return the display name for a league id, or ``default`` if unknown."""

    if league_id is None:
        return default
    return LEAGUE_NAMES.get(league_id, default)


# ---- Fixture states (SportsMonks state ids + developer names) ----
# kind: finished | disrupted | stale | live | upcoming
FIXTURE_STATES = (
    # (state_id, code, label, kind)
    (5, "FT", "FT", "finished"),
    (7, "AET", "AET", "finished"),            # cup games
    (8, "FT_PEN", "FT (Pen)", "finished"),    # cup games
    (15, "WO", "W/O", "finished"),
    (10, "POSTPONED", "Postponed", "disrupted"),
    (11, "SUSP", "Suspended", "disrupted"),
    (13, "CANCELLED", "Cancelled", "disrupted"),
    (16, "ABANDONED", "Abandoned", "disrupted"),
    (17, "INT", "Interrupted", "disrupted"),
    (19, "AWAITING_UPDATES", "Stale", "stale"),  # ghost fixture upstream
    (2, "INPLAY_1ST_HALF", "1st Half", "live"),
    (22, "INPLAY_2ND_HALF", "2nd Half", "live"),
    (3, "HT", "HT", "live"),
    (4, "BREAK", "Break", "live"),
    (6, "INPLAY_ET", "ET", "live"),
    (9, "INPLAY_PENALTIES", "Penalties", "live"),
    (1, "NS", "Upcoming", "upcoming"),
    (14, "TBA", "TBA", "upcoming"),
)

RESOLVED_STATE_KINDS = frozenset({"finished", "disrupted", "stale"})

# Sort key for stages without a start date
STAGE_DATE_FALLBACK = "9999-12-31"

# Scores entry carrying the live/final score
CURRENT_SCORE_DESCRIPTION = "CURRENT"

# ---- Standings detail type ids (SportsMonks) ----
STANDING_TYPE_IDS = {
    "overall": {
        "played": 129,
        "won": 130,
        "drawn": 131,
        "lost": 132,
        "goals_for": 133,
        "goals_against": 134,
        "goal_diff": 179,
        "points": 187,  # also available as row["points"]
    },
    "home": {
        "played": 135,
        "won": 136,
        "drawn": 137,
        "lost": 138,
        "goals_for": 139,
        "goals_against": 140,
        "points": 185,
    },
    "away": {
        "played": 141,
        "won": 142,
        "drawn": 143,
        "lost": 144,
        "goals_for": 145,
        "goals_against": 146,
        "points": 186,
    },
}

STANDING_VIEWS = tuple(STANDING_TYPE_IDS)

# Table zones
CHAMPIONS_LEAGUE_SPOTS = 4
RELEGATION_SPOTS = 3
MISSING_STAT_RANK = -999  # "-" sorts below any real value
