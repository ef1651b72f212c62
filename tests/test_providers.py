import threading

from betsmoke.composition import providers
from betsmoke.session_store import SessionStore


class FakeClient:
    instances = []

    def __init__(self, token_provider=None):
        self.token_provider = token_provider
        self.me_calls = 0
        FakeClient.instances.append(self)

    def me(self, token=None):
        self.me_calls += 1
        return {"id": 1}


def test_client_built_and_validated_once(tmp_path, monkeypatch):
    store = SessionStore(str(tmp_path / "session.json"))
    store.save("stored-token", {"id": 1})
    FakeClient.instances = []
    monkeypatch.setattr(providers, "_store_singleton", store)
    monkeypatch.setattr(providers, "_client_singleton", None)
    monkeypatch.setattr(providers, "BetSmokeClient", FakeClient)
    monkeypatch.setattr(providers, "VALIDATE_SESSION_ON_INIT", True)

    clients = []
    threads = [threading.Thread(target=lambda: clients.append(providers.betsmoke_client())) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(FakeClient.instances) == 1
    assert FakeClient.instances[0].me_calls == 1
    assert all(c is FakeClient.instances[0] for c in clients)


def test_token_provider_prefers_stored_session(tmp_path, monkeypatch):
    store = SessionStore(str(tmp_path / "session.json"))
    FakeClient.instances = []
    monkeypatch.setattr(providers, "_store_singleton", store)
    monkeypatch.setattr(providers, "_client_singleton", None)
    monkeypatch.setattr(providers, "BetSmokeClient", FakeClient)
    monkeypatch.setattr(providers, "VALIDATE_SESSION_ON_INIT", False)
    monkeypatch.setattr(providers, "BETSMOKE_TOKEN", "service-token")

    client = providers.betsmoke_client()
    assert client.token_provider() == "service-token"
    store.save("user-token", {"id": 1})
    assert client.token_provider() == "user-token"
