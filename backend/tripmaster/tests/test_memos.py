"""
Tests for memo endpoints.
"""
from datetime import datetime

from tripmaster.models import Memo


def test_create_memo_defaults(client, auth_headers):
    response = client.post("/api/memos", headers=auth_headers(), json={})
    assert response.status_code == 201
    memo = response.json()
    assert memo["title"] == "new memo"
    assert memo["content"] == ""


def test_update_memo(client, auth_headers):
    headers = auth_headers()
    created = client.post(
        "/api/memos", headers=headers, json={"title": "Packing", "content": "passport"}
    ).json()

    response = client.put(
        f"/api/memos/{created['id']}", headers=headers, json={"content": "passport, charger"}
    )
    assert response.status_code == 200
    memo = response.json()
    assert memo["title"] == "Packing"
    assert memo["content"] == "passport, charger"


def test_delete_memo(client, auth_headers):
    headers = auth_headers()
    created = client.post("/api/memos", headers=headers, json={"title": "Temp"}).json()

    assert client.delete(f"/api/memos/{created['id']}", headers=headers).status_code == 200
    assert client.get("/api/memos", headers=headers).json() == []


def test_memos_are_scoped_to_owner(client, auth_headers):
    alice = auth_headers("alice")
    bob = auth_headers("bob")
    created = client.post("/api/memos", headers=alice, json={"title": "Secret"}).json()

    assert client.get("/api/memos", headers=bob).json() == []
    assert client.put(
        f"/api/memos/{created['id']}", headers=bob, json={"title": "Mine"}
    ).status_code == 404
    assert client.delete(f"/api/memos/{created['id']}", headers=bob).status_code == 404
    assert client.get("/api/memos", headers=alice).json()[0]["title"] == "Secret"


def test_memos_listed_by_last_update(client, database, auth_headers):
    headers = auth_headers()
    client.post("/api/memos", headers=headers, json={"id": "first", "title": "First"})
    client.post("/api/memos", headers=headers, json={"id": "second", "title": "Second"})

    session = database.session()
    try:
        session.get(Memo, "first").updated_at = datetime(2000, 1, 1, 9, 0)
        session.get(Memo, "second").updated_at = datetime(2000, 1, 1, 10, 0)
        session.commit()
    finally:
        session.close()
    assert [m["id"] for m in client.get("/api/memos", headers=headers).json()] == ["second", "first"]

    # Editing the older memo moves it to the front
    client.put("/api/memos/first", headers=headers, json={"content": "edited"})
    assert [m["id"] for m in client.get("/api/memos", headers=headers).json()] == ["first", "second"]
