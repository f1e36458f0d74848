from __future__ import annotations

from app import create_app
from app.constants import APP_LICENSE, APP_REPOSITORY, APP_VERSION


def test_health_is_plain_json(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_info(client):
    data = client.get("/api/info").get_json()["data"]

    assert data == {"version": APP_VERSION, "repository": APP_REPOSITORY, "license": APP_LICENSE}


def test_stats_counts_plants_and_events(client):
    assert client.get("/api/stats").get_json()["data"] == {"plant_count": 0, "care_event_count": 0}

    plant_id = client.post("/api/plants", json={"name": "Fern"}).get_json()["data"]["id"]
    client.post(f"/api/plants/{plant_id}/water")
    client.post(f"/api/plants/{plant_id}/care", json={"event_type": "pruned"})

    assert client.get("/api/stats").get_json()["data"] == {"plant_count": 1, "care_event_count": 2}


def test_unknown_api_path_is_json_404(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.get_json()["ok"] is False


def test_spa_fallback_serves_index(tmp_path):
    static_dir = tmp_path / "web"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html>flowl</html>", encoding="utf-8")
    (static_dir / "app.js").write_text("console.log('flowl')", encoding="utf-8")
    app = create_app(
        {
            "database_path": str(tmp_path / "spa.db"),
            "static_dir": str(static_dir),
            "mqtt_disabled": True,
            "log_dir": None,
        }
    )
    client = app.test_client()

    try:
        assert b"flowl" in client.get("/").data
        assert client.get("/app.js").data == b"console.log('flowl')"
        deep_link = client.get("/plants/12")
        assert deep_link.status_code == 200
        assert b"<html>flowl</html>" in deep_link.data
        assert client.get("/api/nope").status_code == 404
    finally:
        app.config["CONTAINER"].shutdown()


def test_missing_web_bundle_is_404(client):
    assert client.get("/").status_code == 404
