from __future__ import annotations

import logging
import threading
from typing import Optional

from ..adapters.betsmoke_api import BetSmokeClient
from ..session_store import SessionStore
from ..settings import BETSMOKE_TOKEN, VALIDATE_SESSION_ON_INIT

log = logging.getLogger(__name__)

_lock = threading.Lock()
_store_singleton: Optional[SessionStore] = None
_client_singleton: Optional[BetSmokeClient] = None


def session_store() -> SessionStore:
    """Process-wide session store, shared by the client and the auth routes."""
    global _store_singleton
    with _lock:
        if _store_singleton is None:
            _store_singleton = SessionStore()
        return _store_singleton


def betsmoke_client() -> BetSmokeClient:
    """
    Return the proxy client, built once.
    - token comes from the stored session, else BETSMOKE_TOKEN
    - the stored session is checked against /auth/me on first build when
      VALIDATE_SESSION_ON_INIT is set
    """
    global _client_singleton
    store = session_store()
    with _lock:
        if _client_singleton is None:
            client = BetSmokeClient(token_provider=lambda: store.token() or BETSMOKE_TOKEN)
            if VALIDATE_SESSION_ON_INIT:
                store.validate(client)
            else:
                store.load()
            log.info("betsmoke_client built session=%s", store.session is not None)
            _client_singleton = client
        return _client_singleton
