"""
Tests for the seating HTTP surface
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from seatsync.api import routes_public, routes_seating
from seatsync.core.db import Base
from seatsync.schemas.seating import Guest, Seating, Table
from seatsync.services.repositories import LocalSeatingRepository
from seatsync.services.sync_engine import SyncEngine

def default_seating():
    return Seating(tables=(
        Table(id="main", category="Head Table", guests=(Guest(id="h1", name="Groom"),)),
        Table(id="5", category="Friends", guests=(Guest(id="a", name="Chen"),)),
        Table(id="7", category="Colleagues", guests=(Guest(id="x", name="Weber"),)),
    ))

@pytest.fixture
def sync_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'cache.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    local = LocalSeatingRepository(sessionmaker(bind=engine), "wedding_seating_data")
    sync_engine = SyncEngine(local=local, default_factory=default_seating)
    yield sync_engine
    sync_engine.close()
    engine.dispose()

@pytest.fixture
def client(sync_engine):
    app = FastAPI()
    app.include_router(routes_public.router)
    app.include_router(routes_seating.router, prefix="/seating")
    app.state.sync_engine = sync_engine
    return TestClient(app)

def test_not_ready_returns_503(client):
    response = client.get("/seating")
    assert response.status_code == 503

    status = client.get("/seating/status").json()
    assert status == {"mode": None, "online": False, "ready": False}

def test_get_seating(client, sync_engine):
    sync_engine.start()

    data = client.get("/seating").json()

    assert data["mode"] == "local"
    assert [t["id"] for t in data["tables"]] == ["main", "5", "7"]
    assert client.get("/seating/status").json() == {"mode": "local", "online": False, "ready": True}
    assert client.get("/status").status_code == 404
    assert client.get("/health").json() == {"status": "ok"}

def test_add_guest_and_plus_one(client, sync_engine):
    sync_engine.start()

    response = client.post("/seating/tables/5/guests", json={"name": "  Lopez "})
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert [g["name"] for g in body["data"]["guests"]] == ["Chen", "Lopez"]

    response = client.post("/seating/tables/5/guests/a/plus-ones")
    assert response.status_code == 201
    guests = response.json()["data"]["guests"]
    assert guests[-1]["name"] == "Chen-companion"
    assert guests[-1]["parentId"] == "a"
    assert guests[0]["plus_one_count"] == 1

    response = client.delete("/seating/tables/5/guests/a/plus-ones")
    assert [g["name"] for g in response.json()["data"]["guests"]] == ["Chen", "Lopez"]

def test_blank_name_rejected(client, sync_engine):
    sync_engine.start()
    assert client.post("/seating/tables/5/guests", json={"name": "   "}).status_code == 422

def test_unknown_table_and_guest(client, sync_engine):
    sync_engine.start()
    assert client.post("/seating/tables/99/guests", json={"name": "Lopez"}).status_code == 404
    assert client.delete("/seating/tables/5/guests/zzz").status_code == 404
    assert client.get("/seating/guests/zzz").status_code == 404

def test_capacity_warning_on_overfull_table(client, sync_engine):
    sync_engine.start()
    for i in range(10):
        response = client.post("/seating/tables/7/guests", json={"name": f"Guest {i}"})

    assert response.status_code == 201
    assert response.json()["warnings"] == ["Table 7 is over capacity: 11/10 (+1)"]
    assert response.json()["data"]["over_capacity"] is True

def test_move_guest_with_companion(client, sync_engine):
    sync_engine.start()
    client.post("/seating/tables/5/guests/a/plus-ones")

    response = client.post("/seating/guests/a/move", json={"target_table_id": "7"})

    assert response.status_code == 200
    assert [g["id"] for g in response.json()["data"]["guests"]][:2] == ["x", "a"]
    assert len(response.json()["data"]["guests"]) == 3
    assert client.get("/seating/tables/5").json()["total_guests"] == 0

def test_move_plus_one_alone_conflicts(client, sync_engine):
    sync_engine.start()
    client.post("/seating/tables/5/guests/a/plus-ones")
    companion_id = sync_engine.seating.find_table("5").guests[1].id

    response = client.post(f"/seating/guests/{companion_id}/move", json={"target_table_id": "7"})

    assert response.status_code == 409
    assert len(sync_engine.seating.find_table("5").guests) == 2

def test_rename_check_in_and_remove(client, sync_engine):
    sync_engine.start()

    client.patch("/seating/tables/5/guests/a", json={"name": "Chen Wei"})
    response = client.post("/seating/tables/5/guests/a/check-in")
    guest = response.json()["data"]["guests"][0]
    assert guest["name"] == "Chen Wei"
    assert guest["isCheckedIn"] is True

    response = client.delete("/seating/tables/5/guests/a")
    assert response.json()["data"]["guests"] == []

def test_update_table(client, sync_engine):
    sync_engine.start()

    response = client.patch("/seating/tables/7", json={"category": "Vegetarian", "note": "High chair"})

    assert response.json()["data"]["category"] == "Vegetarian"
    assert response.json()["data"]["note"] == "High chair"
    assert client.patch("/seating/tables/7", json={"category": " "}).status_code == 422

def test_search_endpoint(client, sync_engine):
    sync_engine.start()

    assert client.get("/seating/search").json() == {"query": "", "searched": False, "results": []}

    data = client.get("/seating/search", params={"q": "CHEN"}).json()
    assert data["searched"] is True
    assert data["results"] == [{
        "tableId": "5",
        "guestId": "a",
        "guestName": "Chen",
        "category": "Friends",
        "isCheckedIn": False,
        "isPlusOne": False,
    }]

def test_summary_and_guest_info(client, sync_engine):
    sync_engine.start()

    summary = client.get("/seating/summary").json()
    assert summary["total_guests"] == 3
    assert summary["total_tables"] == 3

    info = client.get("/seating/guests/x").json()
    assert info["table_id"] == "7"
    assert info["seat_no"] == 1
    assert info["table_mates"] == []

    tables = client.get("/seating/tables").json()
    assert tables[0] == {"id": "main", "category": "Head Table", "guest_count": 1, "capacity": 12}

def test_writes_after_shutdown_return_503(client, sync_engine):
    sync_engine.start()
    sync_engine.close()

    response = client.post("/seating/tables/5/guests", json={"name": "Lopez"})

    assert response.status_code == 503
    assert [g["name"] for g in client.get("/seating/tables/5").json()["guests"]] == ["Chen"]
