from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Blueprint, request

from ..app_utils import make_error, make_ok, upstream_status
from ..composition import providers
from ..errors import APIError

bp = Blueprint("notes_api", __name__, url_prefix="/api/notes")
log = logging.getLogger(__name__)

NOTE_FIELDS = ("title", "content", "links")


def _note_body() -> Optional[Dict[str, Any]]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return None
    return {key: body[key] for key in NOTE_FIELDS if key in body}


def _failed(exc: APIError, action: str):
    log.warning("notes_%s_failed code=%s", action, exc.code)
    return make_error(exc, message=f"Failed to {action} note", status_code=upstream_status(exc))


@bp.get("")
def list_notes():
    try:
        notes = providers.betsmoke_client().list_notes()
    except APIError as exc:
        log.warning("notes_list_failed code=%s", exc.code)
        return make_error(exc, message="Failed to load notes", status_code=upstream_status(exc))
    return make_ok({"notes": notes, "count": len(notes)})


@bp.get("/<note_id>")
def get_note(note_id: str):
    try:
        note = providers.betsmoke_client().get_note(note_id)
    except APIError as exc:
        return _failed(exc, "load")
    return make_ok({"note": note})


@bp.post("")
def create_note():
    data = _note_body()
    if not data or not data.get("title") or not data.get("content"):
        return make_error("title and content are required", message="Invalid request", status_code=400)
    try:
        note = providers.betsmoke_client().create_note(data)
    except APIError as exc:
        return _failed(exc, "create")
    return make_ok({"note": note}, message="Note created", status_code=201)


@bp.put("/<note_id>")
def update_note(note_id: str):
    data = _note_body()
    if not data:
        return make_error("Provide at least title, content, or links", message="Invalid request", status_code=400)
    try:
        note = providers.betsmoke_client().update_note(note_id, data)
    except APIError as exc:
        return _failed(exc, "update")
    return make_ok({"note": note}, message="Note updated")


@bp.delete("/<note_id>")
def delete_note(note_id: str):
    try:
        providers.betsmoke_client().delete_note(note_id)
    except APIError as exc:
        return _failed(exc, "delete")
    return make_ok({"id": note_id}, message="Note deleted")
