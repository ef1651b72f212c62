import pytest
from flask import Flask

from betsmoke.composition import providers
from betsmoke.errors import APIError
from betsmoke.routes import notes_api


class FakeNotesClient:
    def __init__(self):
        self.notes = {"n1": {"id": "n1", "title": "BTTS", "content": "Arsenal home games"}}
        self.error = None
        self.calls = []

    def _check(self):
        if self.error:
            raise self.error

    def list_notes(self):
        self._check()
        return list(self.notes.values())

    def get_note(self, note_id):
        self._check()
        if note_id not in self.notes:
            raise APIError("BetSmokeAPI", "HTTP_404", "Note not found")
        return self.notes[note_id]

    def create_note(self, data):
        self._check()
        self.calls.append(("create", data))
        return {"id": "n2", **data}

    def update_note(self, note_id, data):
        self._check()
        self.calls.append(("update", note_id, data))
        return {**self.notes[note_id], **data}

    def delete_note(self, note_id):
        self._check()
        self.calls.append(("delete", note_id))


@pytest.fixture
def notes_client(monkeypatch):
    fake = FakeNotesClient()
    monkeypatch.setattr(providers, "_client_singleton", fake)
    return fake


@pytest.fixture
def client(notes_client):
    app = Flask(__name__)
    app.register_blueprint(notes_api.bp)
    app.testing = True
    with app.test_client() as client:
        yield client


def test_list_notes(client):
    response = client.get("/api/notes")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["count"] == 1
    assert data["notes"][0]["id"] == "n1"


def test_get_missing_note_is_404(client):
    response = client.get("/api/notes/nope")
    assert response.status_code == 404
    assert response.get_json()["message"] == "Failed to load note"


def test_create_note_forwards_known_fields(client, notes_client):
    body = {"title": "Cup upsets", "content": "Lower league sides at home", "links": [{"contextType": "general"}], "userId": 9}
    response = client.post("/api/notes", json=body)
    assert response.status_code == 201
    assert notes_client.calls == [
        ("create", {"title": "Cup upsets", "content": "Lower league sides at home", "links": [{"contextType": "general"}]})
    ]


def test_create_note_requires_title_and_content(client, notes_client):
    assert client.post("/api/notes", json={"title": "x"}).status_code == 400
    assert client.post("/api/notes", data="not json").status_code == 400
    assert notes_client.calls == []


def test_update_and_delete(client, notes_client):
    response = client.put("/api/notes/n1", json={"content": "updated"})
    assert response.status_code == 200
    assert response.get_json()["data"]["note"]["content"] == "updated"
    assert client.put("/api/notes/n1", json={}).status_code == 400

    response = client.delete("/api/notes/n1")
    assert response.status_code == 200
    assert notes_client.calls[-1] == ("delete", "n1")


def test_upstream_failure_is_502(client, notes_client):
    notes_client.error = APIError("BetSmokeAPI", "NETWORK", "Network error")
    response = client.get("/api/notes")
    assert response.status_code == 502
    assert response.get_json()["error"]["code"] == "NETWORK"
