"""Stage (round) ordering and auto-selection for cup competitions."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Sequence

from .constants import STAGE_DATE_FALLBACK
from .fixture_state import has_pending_fixtures
from .ports.competitions import Stage
from .config import setup_logger

log = setup_logger(__name__)

_DATE_FALLBACK = date.fromisoformat(STAGE_DATE_FALLBACK)


def _stage_date(stage: Stage) -> date:
    raw = (stage.get("starting_at") or "").strip()
    if not raw:
        return _DATE_FALLBACK
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            return _DATE_FALLBACK


def _sort_key(stage: Stage):
    sort_order = stage.get("sort_order")
    return (
        _stage_date(stage),
        # sort_order only breaks ties when present; missing values go last
        (0, sort_order) if sort_order is not None else (1, 0),
        stage.get("name") or "",
    )


def sort_stages(stages: Sequence[Stage]) -> List[Stage]:
    """Chronological order by start date, then sort_order, then name."""

    return sorted(stages, key=_sort_key)


def resolve_stage(stages: Sequence[Stage]) -> Optional[Stage]:
    """Pick the stage to show from a list sorted with :func:`sort_stages`.

    First match wins:
      1. stage flagged is_current upstream
      2. first stage with a pending fixture
      3. last stage with any fixture
      4. first stage
    Returns None for an empty list.
    """

    if not stages:
        return None

    for stage in stages:
        if stage.get("is_current"):
            log.debug("stage_resolved stage=%s via=is_current", stage.get("id"))
            return stage

    for stage in stages:
        if has_pending_fixtures(stage):
            log.debug("stage_resolved stage=%s via=pending", stage.get("id"))
            return stage

    for stage in reversed(stages):
        if stage.get("fixtures"):
            log.debug("stage_resolved stage=%s via=last_with_fixtures", stage.get("id"))
            return stage

    log.debug("stage_resolved stage=%s via=first", stages[0].get("id"))
    return stages[0]


def find_stage(stages: Sequence[Stage], stage_id: Optional[int]) -> Optional[Stage]:
    if stage_id is None:
        return None
    return next((s for s in stages if s.get("id") == stage_id), None)
