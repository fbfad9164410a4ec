import pytest
from fastapi.testclient import TestClient

from parkvision.config import AppConfig, SimulationConfig
from parkvision.main import build_app_state, create_app
from parkvision.state import SpotStatus


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(simulation=SimulationConfig(seed=11, interval_seconds=60))


@pytest.fixture
def client(config):
    with TestClient(create_app(config)) as client:
        yield client


@pytest.fixture
def engine(client):
    return client.app.state.parkvision.engine


def _force_all(engine, status: SpotStatus) -> None:
    engine.force_state({s: status for s in engine.location.spot_ids})


def test_build_app_state_selects_default_location(config):
    app_state = build_app_state(config)
    assert app_state.engine.location_id == "freedom-square"
    assert len(app_state.engine.current_state()) == 12
    assert not app_state.driver.is_running()


def test_build_app_state_honours_default_location():
    app_state = build_app_state(AppConfig(default_location="vake-park"))
    assert app_state.engine.location_id == "vake-park"


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["location_id"] == "freedom-square"
    assert body["simulation_running"] is False


def test_list_locations(client):
    body = client.get("/api/v1/locations").json()
    assert [loc["id"] for loc in body["locations"]] == [
        "freedom-square",
        "rustaveli",
        "vake-park",
        "tbilisi-mall",
    ]
    assert body["selected_location_id"] == "freedom-square"
    assert "destination=41.6938,44.8015" in body["locations"][0]["directions_url"]


def test_get_unknown_location(client):
    response = client.get("/api/v1/locations/nowhere")
    assert response.status_code == 404
    assert "nowhere" in response.json()["detail"]


def test_select_location(client):
    response = client.post("/api/v1/locations/rustaveli/select")
    assert response.status_code == 200
    body = response.json()
    assert body["location"]["id"] == "rustaveli"
    assert [s["id"] for s in body["spots"]] == [f"R{i}" for i in range(1, 9)]
    assert body["selected_spot"] is None
    assert body["analytics"]["total"] == 8


def test_select_unknown_location(client):
    response = client.post("/api/v1/locations/nowhere/select")
    assert response.status_code == 404
    assert client.get("/api/v1/status").json()["location"]["id"] == "freedom-square"


def test_status_reports_analytics(client, engine):
    _force_all(engine, SpotStatus.FREE)
    engine.toggle_spot("A1")
    engine.toggle_spot("A2")
    engine.toggle_spot("A3")

    body = client.get("/api/v1/status").json()
    assert body["analytics"] == {
        "total": 12,
        "occupied": 3,
        "free": 9,
        "occupancy_rate_percent": 25.0,
        "distribution": {"occupied": 3, "free": 9},
    }
    assert body["free_spots"] == ["A4", "A5", "A6", "B1", "B2", "B3", "B4", "B5", "B6"]


def test_toggle_spot(client, engine):
    before = engine.current_state()["B2"]
    response = client.post("/api/v1/spots/B2/toggle")
    assert response.status_code == 200
    assert response.json()["status"] == before.flipped().value

    response = client.get("/api/v1/spots/B2")
    assert response.json()["status"] == before.flipped().value


def test_toggle_unknown_spot(client):
    response = client.post("/api/v1/spots/Z1/toggle")
    assert response.status_code == 404
    assert client.get("/api/v1/spots/Z1").status_code == 404


def test_select_and_clear_spot(client, engine):
    _force_all(engine, SpotStatus.FREE)

    response = client.put("/api/v1/selection/A4")
    assert response.status_code == 200
    body = response.json()
    assert body["selected_spot"] == "A4"
    assert [s["id"] for s in body["spots"] if s["selected"]] == ["A4"]

    response = client.delete("/api/v1/selection")
    assert response.json()["selected_spot"] is None


def test_select_occupied_spot_conflicts(client, engine):
    _force_all(engine, SpotStatus.OCCUPIED)
    response = client.put("/api/v1/selection/A1")
    assert response.status_code == 409
    assert client.put("/api/v1/selection/Z1").status_code == 404


def test_analytics_endpoint(client, engine):
    _force_all(engine, SpotStatus.OCCUPIED)
    body = client.get("/api/v1/analytics").json()
    assert body["occupancy_rate_percent"] == 100.0
    assert body["free"] == 0


def test_navigation(client, engine):
    _force_all(engine, SpotStatus.FREE)
    client.put("/api/v1/selection/B1")

    body = client.get("/api/v1/navigation").json()
    assert body["location_id"] == "freedom-square"
    assert body["spot_id"] == "B1"
    assert body["url"].endswith("destination=41.6938,44.8015&travelmode=driving")


def test_simulation_start_stop(client):
    assert client.get("/api/v1/simulation").json()["running"] is False

    body = client.post("/api/v1/simulation/start").json()
    assert body["running"] is True
    assert body["interval_seconds"] == 60

    assert client.post("/api/v1/simulation/start").json()["running"] is True

    body = client.post("/api/v1/simulation/stop").json()
    assert body == {"running": False, "interval_seconds": 60, "tick_count": 0}


def test_metrics(client):
    client.post("/api/v1/spots/A1/toggle")
    response = client.get("/api/v1/metrics")
    assert response.status_code == 200
    assert "parkvision_spots_total 12.0" in response.text
    assert "parkvision_spot_state_changes_total" in response.text


def test_build_app_state_with_empty_catalog():
    app_state = build_app_state(AppConfig(locations=[]))
    assert app_state.engine.location is None
    assert dict(app_state.engine.current_state()) == {}
