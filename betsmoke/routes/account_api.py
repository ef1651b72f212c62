from __future__ import annotations

import logging

from flask import Blueprint, request

from ..app_utils import make_error, make_ok, upstream_status
from ..composition import providers
from ..errors import APIError

bp = Blueprint("account_api", __name__, url_prefix="/api/auth")
log = logging.getLogger(__name__)


@bp.post("/login")
def login():
    body = request.get_json(silent=True) or {}
    email = str(body.get("email") or "").strip()
    password = str(body.get("password") or "")
    if not email or not password:
        return make_error("email and password are required", message="Invalid request", status_code=400)

    store = providers.session_store()
    try:
        session = store.login(providers.betsmoke_client(), email, password)
    except APIError as exc:
        log.warning("login_failed code=%s", exc.code)
        return make_error(exc, message="Login failed", status_code=upstream_status(exc))
    log.info("login_ok user=%s", session.user.get("id"))
    return make_ok({"user": session.user}, message="Logged in")


@bp.post("/logout")
def logout():
    providers.session_store().logout()
    return make_ok({"user": None}, message="Logged out")


@bp.get("/me")
def me():
    session = providers.session_store().session
    if session is None:
        return make_error("Not logged in", message="Not logged in", status_code=401)
    return make_ok({"user": session.user})
