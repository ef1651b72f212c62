"""Persisted login session (token + user) for the BetSmoke proxy."""
from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import setup_logger
from .errors import APIError
from .settings import BETSMOKE_SESSION_FILE

log = setup_logger(__name__)


@dataclass
class Session:
    token: str
    user: Dict[str, Any]


class SessionStore:
    """Load/save/clear a session in a JSON file and validate it against ``/auth/me``.

    The store is handed to whoever needs a token; nothing reads the file
    behind its back. ``token`` is suitable as a client ``token_provider``.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or BETSMOKE_SESSION_FILE
        self._lock = threading.Lock()
        self._session: Optional[Session] = None

    def load(self) -> Optional[Session]:
        with self._lock:
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            except FileNotFoundError:
                self._session = None
                return None
            except (OSError, ValueError) as exc:
                log.warning("session_load_failed path=%s err=%s", self.path, exc)
                self._session = None
                return None

            token = raw.get("token") if isinstance(raw, dict) else None
            user = raw.get("user") if isinstance(raw, dict) else None
            if not isinstance(token, str) or not token or not isinstance(user, dict):
                # both halves are required, same as a fresh login
                self._session = None
                return None
            self._session = Session(token=token, user=user)
            return self._session

    def save(self, token: str, user: Dict[str, Any]) -> Session:
        with self._lock:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump({"token": token, "user": user}, f)
            os.replace(tmp_path, self.path)
            self._session = Session(token=token, user=user)
            return self._session

    def clear(self) -> None:
        with self._lock:
            self._session = None
            try:
                os.remove(self.path)
            except FileNotFoundError:
                pass

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def token(self) -> Optional[str]:
        return self._session.token if self._session else None

    def validate(self, client) -> Optional[Session]:
        """Check the stored token with ``client.me``; drop it if rejected."""

        session = self.load()
        if session is None:
            return None
        try:
            user = client.me(token=session.token)
        except APIError as exc:
            log.warning("session_invalid code=%s clearing", exc.code)
            self.clear()
            return None
        return self.save(session.token, user)

    def login(self, client, email: str, password: str) -> Session:
        body = client.login(email, password)
        token = body.get("token")
        user = body.get("user")
        if not isinstance(token, str) or not token or not isinstance(user, dict):
            raise APIError("BetSmokeAPI", "BAD_JSON", "Login response missing token", "/auth/login")
        return self.save(token, user)

    def logout(self) -> None:
        self.clear()
