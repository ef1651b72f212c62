"""Fixture state classification.

SportsMonks reports a fixture's state either as a numeric ``state_id`` or a
developer-name string (``"FT"``, ``"NS"``...), sometimes both. Every known
code is listed once in :data:`constants.FIXTURE_STATES` and looked up from
either representation here.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple

from .constants import FIXTURE_STATES, RESOLVED_STATE_KINDS
from .config import setup_logger
from .logging_utils import warn_once

log = setup_logger(__name__)


class FixtureClass(str, Enum):
    RESOLVED = "resolved"
    PENDING = "pending"


class StateInfo(NamedTuple):
    state_id: int
    code: str
    label: str
    kind: str

    @property
    def resolved(self) -> bool:
        return self.kind in RESOLVED_STATE_KINDS


STATES_BY_ID: Dict[int, StateInfo] = {}
STATES_BY_CODE: Dict[str, StateInfo] = {}
for _row in FIXTURE_STATES:
    _info = StateInfo(*_row)
    STATES_BY_ID[_info.state_id] = _info
    STATES_BY_CODE[_info.code] = _info


def _state_keys(fixture: Mapping[str, Any]) -> Tuple[Optional[int], Optional[str]]:
    state_id = fixture.get("state_id")
    if isinstance(state_id, bool) or not isinstance(state_id, int) or state_id == 0:
        state_id = None
    state = fixture.get("state")
    if isinstance(state, Mapping):
        state = state.get("state")
    if not isinstance(state, str) or not state.strip():
        state = None
    else:
        state = state.strip().upper()
    return state_id, state


def lookup_state(fixture: Mapping[str, Any]) -> Optional[StateInfo]:
    """Return the known state for a fixture; the numeric id wins over the code."""

    state_id, code = _state_keys(fixture)
    info = STATES_BY_ID.get(state_id) if state_id is not None else None
    if info is None and code is not None:
        info = STATES_BY_CODE.get(code)
    if info is None and (state_id is not None or code is not None):
        warn_once(
            ("unknown_state", state_id, code),
            "fixture_state_unknown state_id=%s state=%s",
            state_id,
            code,
            logger=log,
        )
    return info


def classify_fixture(fixture: Mapping[str, Any]) -> FixtureClass:
    """Classify a fixture as resolved or pending.

    A fixture is resolved when either its id or its code names a finished,
    disrupted or stale state. A fixture with no state data at all is also
    resolved. Anything else, unknown codes included, is pending.
    """

    state_id, code = _state_keys(fixture)
    if state_id is None and code is None:
        return FixtureClass.RESOLVED

    by_id = STATES_BY_ID.get(state_id) if state_id is not None else None
    by_code = STATES_BY_CODE.get(code) if code is not None else None
    if (by_id is not None and by_id.resolved) or (by_code is not None and by_code.resolved):
        return FixtureClass.RESOLVED
    if by_id is None and by_code is None:
        lookup_state(fixture)  # logs the unknown code once
    return FixtureClass.PENDING


def has_pending_fixtures(stage: Mapping[str, Any]) -> bool:
    return any(
        classify_fixture(fixture) is FixtureClass.PENDING
        for fixture in stage.get("fixtures") or []
    )


def is_finished(fixture: Mapping[str, Any]) -> bool:
    """True when the result is final (FT, AET, FT_PEN, W/O)."""

    state_id, code = _state_keys(fixture)
    for info in (STATES_BY_ID.get(state_id), STATES_BY_CODE.get(code)):
        if info is not None and info.kind == "finished":
            return True
    return False


def is_live(fixture: Mapping[str, Any]) -> bool:
    info = lookup_state(fixture)
    return info is not None and info.kind == "live"


def match_state_label(fixture: Mapping[str, Any]) -> Dict[str, str]:
    info = lookup_state(fixture)
    if info is None:
        return {"text": "TBD", "kind": "unknown"}
    return {"text": info.label, "kind": info.kind}
