import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from structure_engines.server import create_app
from structure_engines.structures import routes
from structure_engines.structures.manager import IWGOManager
from structure_engines.structures.routes import get_manager, router

SHED = """
name: shed
materials:
  walls:
    type: inner-outer
    properties: {inner.material: air, outer.material: planks}
instructions:
  body:
    shape: cuboid
    material: walls
    size: {x: 3, y: 3, z: 3}
"""


@pytest.fixture
def manager(tmp_path):
    (tmp_path / "shed.yml").write_text(SHED)
    manager = IWGOManager(str(tmp_path))
    manager.load_iwgos()
    return manager


@pytest.fixture
def client(manager):
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_manager] = lambda: manager
    return TestClient(app)


def test_list_iwgos(client):
    resp = client.get("/iwgo")
    assert resp.status_code == 200
    assert resp.json() == [{"name": "shed", "instructions": 1}]


def test_get_iwgo(client):
    resp = client.get("/iwgo/shed")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "shed"
    assert body["instructions"][0]["size"] == {"x": "3", "y": "3", "z": "3"}


def test_unknown_iwgo_returns_envelope(client):
    resp = client.get("/iwgo/castle")
    assert resp.status_code == 404
    error = resp.json()["detail"]["error"]
    assert error["code"] == "iwgo.not_found"
    assert error["details"] == {"name": "castle"}

    resp = client.post("/iwgo/castle/place", json={})
    assert resp.status_code == 404


def test_place_returns_writes(client):
    resp = client.post("/iwgo/shed/place", json={"x": 100, "y": 64, "z": -20, "seed": 5})
    assert resp.status_code == 200
    body = resp.json()
    assert body["seed"] == 5
    assert body["count"] == 27
    assert len(body["writes"]) == 27
    by_position = {(w["x"], w["y"], w["z"]): w["material"] for w in body["writes"]}
    assert by_position[(101, 65, -19)] == "air"
    assert by_position[(100, 64, -20)] == "planks"


def test_place_uses_default_seed(client, monkeypatch):
    monkeypatch.setenv("IWGO_DEFAULT_SEED", "11")
    resp = client.post("/iwgo/shed/place", json={})
    assert resp.status_code == 200
    assert resp.json()["seed"] == 11


def test_reload(client, manager):
    with open(f"{manager.folder}/hut.yml", "w") as f:
        f.write(SHED.replace("name: shed", "name: hut"))
    resp = client.post("/iwgo/reload")
    assert resp.status_code == 200
    assert resp.json() == {"loaded": ["hut", "shed"]}


def test_app_health_and_status(manager):
    routes.set_manager(manager)
    try:
        client = TestClient(create_app())
        assert client.get("/health").json()["status"] == "ok"
        status = client.get("/ops/status").json()
        assert status["iwgos"] == ["shed"]
        assert "iwgo_folder" in status
        assert client.get("/iwgo").json() == [{"name": "shed", "instructions": 1}]
    finally:
        routes.set_manager(None)
