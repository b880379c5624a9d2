import json

from app import create_app
from tests.conftest import JUNE_3


def test_creates_visit_log_on_startup(app, data_dir):
    assert json.loads((data_dir / "visits.json").read_text()) == []


def test_starts_without_writable_data_dir(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    app = create_app({"TESTING": True, "DATA_DIR": str(blocker / "data")})

    resp = app.test_client().post("/visit", headers={"X-Real-IP": "1.2.3.4"})
    assert resp.status_code == 200
    assert resp.get_json()["count"] == 1


def test_cors_open_outside_production(client):
    resp = client.get("/health", headers={"Origin": "http://anywhere.test"})
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_allow_list(data_dir):
    app = create_app({
        "TESTING": True,
        "DATA_DIR": str(data_dir),
        "CORS_ORIGINS": ["https://site.test"],
    })
    client = app.test_client()

    resp = client.get("/health", headers={"Origin": "https://site.test"})
    assert resp.headers["Access-Control-Allow-Origin"] == "https://site.test"

    resp = client.get("/health", headers={"Origin": "https://evil.test"})
    assert "Access-Control-Allow-Origin" not in resp.headers


def test_visit_count_command(app, client, freeze_clock):
    freeze_clock(JUNE_3)
    client.post("/visit", headers={"X-Real-IP": "1.2.3.4"})

    result = app.test_cli_runner().invoke(args=["visit-count"])
    assert result.exit_code == 0
    assert result.output.strip() == "1"


def test_export_visits_command(app, client, data_dir, tmp_path, freeze_clock):
    freeze_clock(JUNE_3)
    client.post("/visit", headers={"X-Real-IP": "1.2.3.4"})
    out = tmp_path / "export.json"

    result = app.test_cli_runner().invoke(args=["export-visits", str(out)])
    assert result.exit_code == 0
    assert "Exported 1 visits" in result.output
    assert out.read_bytes() == (data_dir / "visits.json").read_bytes()
