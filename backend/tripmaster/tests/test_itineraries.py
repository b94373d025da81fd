"""
Tests for itinerary endpoints.
"""
from sqlalchemy.exc import SQLAlchemyError

from tripmaster.services import itinerary_service


def _tokyo():
    return {
        "name": "Tokyo",
        "date": "2026-04-01",
        "description": "First day",
        "pois": [
            {"id": "p1", "name": "Tower", "budget": 20},
            {"id": "p2", "name": "Park", "budget": 0}
        ]
    }


def test_create_itinerary(client, auth_headers):
    headers = auth_headers()
    response = client.post("/api/itineraries", headers=headers, json=_tokyo())
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Tokyo"
    assert data["date"] == "2026-04-01"
    assert len(data["pois"]) == 2

    listed = client.get("/api/itineraries", headers=headers).json()
    assert len(listed) == 1
    stops = listed[0]["pois"]
    assert [s["sortOrder"] for s in stops] == [0, 1]
    assert stops[0]["poi"]["id"] == "p1"
    assert stops[0]["poi"]["name"] == "Tower"
    assert stops[0]["budget"] == 20
    assert stops[1]["poi"]["name"] == "Park"
    assert stops[1]["transportBudget"] == 0


def test_stop_order_follows_input(client, auth_headers):
    headers = auth_headers()
    names = ["E", "B", "D", "A", "C"]
    created = client.post(
        "/api/itineraries",
        headers=headers,
        json={"name": "Loop", "pois": [{"id": n, "name": n} for n in names]}
    ).json()

    stops = client.get(f"/api/itineraries/{created['id']}", headers=headers).json()["pois"]
    assert [s["poiId"] for s in stops] == names
    assert [s["sortOrder"] for s in stops] == list(range(len(names)))


def test_stop_transport_fields(client, auth_headers):
    headers = auth_headers()
    response = client.post(
        "/api/itineraries",
        headers=headers,
        json={
            "name": "Transit",
            "pois": [{
                "id": "p1",
                "name": "Station",
                "description": "meet here",
                "budget": "12.5",
                "transport": {"type": "subway", "description": "Ginza line", "budget": 3}
            }]
        }
    )
    stop = response.json()["pois"][0]
    assert stop["description"] == "meet here"
    assert stop["budget"] == 12.5
    assert stop["transportType"] == "subway"
    assert stop["transportDescription"] == "Ginza line"
    assert stop["transportBudget"] == 3


def test_stops_create_pois_for_caller(client, auth_headers):
    headers = auth_headers()
    client.post("/api/itineraries", headers=headers, json=_tokyo())

    pois = client.get("/api/pois", headers=headers).json()
    assert sorted(p["id"] for p in pois) == ["p1", "p2"]


def test_stop_refreshes_existing_poi(client, auth_headers):
    headers = auth_headers()
    client.post("/api/pois", headers=headers, json={"id": "p1", "name": "Old name"})
    client.post("/api/itineraries", headers=headers, json=_tokyo())

    pois = {p["id"]: p for p in client.get("/api/pois", headers=headers).json()}
    assert pois["p1"]["name"] == "Tower"


def test_same_poi_twice_in_one_itinerary(client, auth_headers):
    headers = auth_headers()
    response = client.post(
        "/api/itineraries",
        headers=headers,
        json={"name": "Back and forth", "pois": [
            {"id": "hotel", "name": "Hotel"},
            {"id": "museum", "name": "Museum"},
            {"id": "hotel", "name": "Hotel"}
        ]}
    )
    assert response.status_code == 201
    assert [s["poiId"] for s in response.json()["pois"]] == ["hotel", "museum", "hotel"]


def test_update_replaces_stops(client, auth_headers):
    headers = auth_headers()
    created = client.post("/api/itineraries", headers=headers, json=_tokyo()).json()

    response = client.put(
        f"/api/itineraries/{created['id']}",
        headers=headers,
        json={"name": "Tokyo revised", "pois": [{"id": "p3", "name": "Shrine"}]}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Tokyo revised"
    assert data["date"] is None
    assert [s["poiId"] for s in data["pois"]] == ["p3"]
    assert data["pois"][0]["sortOrder"] == 0


def test_update_with_empty_stops_removes_all(client, auth_headers):
    headers = auth_headers()
    created = client.post("/api/itineraries", headers=headers, json=_tokyo()).json()

    response = client.put(
        f"/api/itineraries/{created['id']}",
        headers=headers,
        json={"name": "Tokyo", "pois": []}
    )
    assert response.status_code == 200
    assert response.json()["pois"] == []
    fetched = client.get(f"/api/itineraries/{created['id']}", headers=headers).json()
    assert fetched["pois"] == []


def test_delete_itinerary(client, auth_headers):
    headers = auth_headers()
    created = client.post("/api/itineraries", headers=headers, json=_tokyo()).json()

    assert client.delete(f"/api/itineraries/{created['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/itineraries/{created['id']}", headers=headers).status_code == 404
    assert client.get("/api/itineraries", headers=headers).json() == []
    # POIs outlive the itinerary
    assert len(client.get("/api/pois", headers=headers).json()) == 2


def test_itineraries_are_scoped_to_owner(client, auth_headers):
    alice = auth_headers("alice")
    bob = auth_headers("bob")
    created = client.post("/api/itineraries", headers=alice, json=_tokyo()).json()
    path = f"/api/itineraries/{created['id']}"

    assert client.get("/api/itineraries", headers=bob).json() == []
    assert client.get(path, headers=bob).status_code == 404
    assert client.put(path, headers=bob, json={"name": "Mine"}).status_code == 404
    assert client.delete(path, headers=bob).status_code == 404
    assert len(client.get(path, headers=alice).json()["pois"]) == 2


def test_itinerary_requires_name(client, auth_headers):
    response = client.post("/api/itineraries", headers=auth_headers(), json={"pois": []})
    assert response.status_code == 400


def test_failed_update_leaves_itinerary_untouched(client, auth_headers, monkeypatch):
    headers = auth_headers()
    created = client.post("/api/itineraries", headers=headers, json=_tokyo()).json()

    calls = []
    real_upsert = itinerary_service.upsert_poi

    def failing_upsert(db, owner_id, stop):
        calls.append(stop.id)
        if len(calls) == 2:
            raise SQLAlchemyError("write failed")
        return real_upsert(db, owner_id, stop)

    monkeypatch.setattr(itinerary_service, "upsert_poi", failing_upsert)

    response = client.put(
        f"/api/itineraries/{created['id']}",
        headers=headers,
        json={"name": "Osaka", "pois": [{"id": "p9", "name": "Castle"}, {"id": "p8", "name": "Market"}]}
    )
    assert response.status_code == 500
    assert calls == ["p9", "p8"]

    fetched = client.get(f"/api/itineraries/{created['id']}", headers=headers).json()
    assert fetched["name"] == "Tokyo"
    assert fetched["date"] == "2026-04-01"
    assert [s["poiId"] for s in fetched["pois"]] == ["p1", "p2"]
    assert [s["sortOrder"] for s in fetched["pois"]] == [0, 1]
    pois = client.get("/api/pois", headers=headers).json()
    assert "p9" not in [p["id"] for p in pois]
