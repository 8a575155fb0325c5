from __future__ import annotations

from fastapi.testclient import TestClient

from services.monitor import MonitorService


def test_dashboard_without_readings(api_client: TestClient) -> None:
    response = api_client.get("/ui")

    assert response.status_code == 200
    body = response.text
    assert "Sensor Data Dashboard" in body
    assert "Temperature: 22.0°C" in body
    assert "No data available" in body
    assert "No actions to display" in body
    assert "Temperature is Normal" not in body


def test_generate_renders_actions_and_latest(
    api_client: TestClient, monitor: MonitorService
) -> None:
    response = api_client.post("/ui/generate?setpoint=25")

    assert response.status_code == 200
    latest = monitor.fetch_latest()
    body = response.text
    assert f"Temperature: {latest.temperature}°C" in body
    assert f"<strong>Soil Moisture:</strong> {latest.soil_moisture}%" in body
    for action in monitor.evaluator.evaluate(latest):
        assert f"<li>{action}</li>" in body


def test_generate_redirects_so_reload_does_not_store_again(
    api_client: TestClient, monitor: MonitorService
) -> None:
    response = api_client.post("/ui/generate?setpoint=25", follow_redirects=False)

    assert response.status_code == 303
    latest = monitor.fetch_latest()
    location = response.headers["location"]
    assert location.endswith(f"/ui?setpoint=25.0&reading={latest.id}")

    first = api_client.get(location)
    second = api_client.get(location)

    assert first.status_code == second.status_code == 200
    assert len(monitor.fetch_all()) == 1
    assert first.text == second.text


def test_unknown_reading_in_query_shows_no_actions(
    api_client: TestClient, monitor: MonitorService
) -> None:
    monitor.generate_reading()

    response = api_client.get("/ui", params={"reading": "missing"})

    assert response.status_code == 200
    assert "No actions to display" in response.text


def test_temperature_control_links_follow_setpoint(
    api_client: TestClient, monitor: MonitorService
) -> None:
    monitor.generate_reading()
    latest = monitor.fetch_latest()

    below = api_client.get("/ui", params={"setpoint": 10})
    assert "Increase" in below.text
    assert "temp-btn blue" in below.text
    assert "setpoint=11.0" in below.text

    above = api_client.get("/ui", params={"setpoint": 40})
    assert "Decrease" in above.text
    assert "temp-btn red" in above.text
    assert "setpoint=39.0" in above.text

    equal = api_client.get("/ui", params={"setpoint": latest.temperature})
    assert "Temperature is Normal" in equal.text


def test_dashboard_reports_storage_failure(
    api_client: TestClient, monitor: MonitorService
) -> None:
    monitor.table.close()

    listing = api_client.get("/ui")
    assert listing.status_code == 500
    assert "Failed to fetch data" in listing.text

    generate = api_client.post("/ui/generate")
    assert generate.status_code == 500
    assert "Failed to generate data" in generate.text


def test_static_stylesheet_is_served(api_client: TestClient) -> None:
    response = api_client.get("/static/dashboard.css")

    assert response.status_code == 200
    assert ".temp-btn" in response.text
