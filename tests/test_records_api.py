from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from passkeep.app import create_app  # noqa: E402
from passkeep.core.config import Settings  # noqa: E402


def _settings(file_path: Path, app_env: str = "dev") -> Settings:
    return Settings(
        app_env=app_env,
        file_path=str(file_path),
        server_host="127.0.0.1",
        server_port=8080,
        record_types=("login", "email"),
        log_level="INFO",
    )


@pytest.fixture()
def vault_file(tmp_path: Path) -> Path:
    return tmp_path / "storage.json"


@pytest.fixture()
def client(vault_file: Path):
    app = create_app(_settings(vault_file))
    with TestClient(app) as c:
        yield c


def test_add_get_and_delete_flow(client: TestClient, vault_file: Path) -> None:
    resp = client.post("/add", params={"name": "GitHub "}, json={"type": "login", "password": "x"})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    all_records = client.get("/get-all").json()
    assert all_records == {
        "github": {"type": "login", "password": "x", "description": "", "additional": "", "favorite": False}
    }
    assert json.loads(vault_file.read_text(encoding="utf-8")) == all_records

    assert client.get("/get", params={"name": "github"}).json()["password"] == "x"

    resp = client.delete("/delete", params={"name": "github"})
    assert resp.status_code == 200
    assert client.get("/get-all").json() == {}
    assert json.loads(vault_file.read_text(encoding="utf-8")) == {}


def test_error_status_codes(client: TestClient) -> None:
    assert client.post("/add", params={"name": "ab"}, json={"type": "login"}).status_code == 400
    assert client.post("/add", params={"name": "github"}, json={"type": "wifi"}).status_code == 400
    assert client.post("/add", params={"name": "github"}, json={"type": "login"}).status_code == 200
    assert client.post("/add", params={"name": "GITHUB"}, json={"type": "login"}).status_code == 409
    assert client.put("/update", params={"name": "gitlab"}, json={"type": "login"}).status_code == 404
    assert client.delete("/delete", params={"name": "gitlab"}).status_code == 404
    assert client.delete("/delete").status_code == 400
    assert client.get("/get", params={"name": "gitlab"}).status_code == 404
    assert client.post("/add", params={"name": "github2"}, json={"favorite": "maybe"}).status_code == 422


def test_update_changes_record(client: TestClient) -> None:
    client.post("/add", params={"name": "github"}, json={"type": "login", "password": "x"})
    resp = client.put("/update", params={"name": "github"}, json={"type": "login", "password": "y", "favorite": True})
    assert resp.status_code == 200
    record = client.get("/get", params={"name": "github"}).json()
    assert record["password"] == "y"
    assert record["favorite"] is True


def test_get_by_type(client: TestClient) -> None:
    client.post("/add", params={"name": "github"}, json={"type": "login"})
    client.post("/add", params={"name": "inbox"}, json={"type": "email"})
    resp = client.get("/get-by-type", params={"type": "login"})
    assert resp.status_code == 200
    assert list(resp.json()) == ["github"]
    assert client.get("/get-by-type", params={"type": "card"}).status_code == 400


def test_startup_loads_file_and_shutdown_flushes(vault_file: Path) -> None:
    vault_file.write_text(json.dumps({"github": {"type": "login", "password": "x"}}), encoding="utf-8")
    app = create_app(_settings(vault_file))
    with TestClient(app) as c:
        assert c.get("/get-all").json()["github"]["password"] == "x"
        # bypass the service so only the shutdown flush writes the file
        app.state.record_service.store.delete("github")
        assert "github" in json.loads(vault_file.read_text(encoding="utf-8"))
    assert json.loads(vault_file.read_text(encoding="utf-8")) == {}


def test_unreadable_file_starts_empty(vault_file: Path) -> None:
    vault_file.write_text("{broken", encoding="utf-8")
    with TestClient(create_app(_settings(vault_file))) as c:
        assert c.get("/get-all").json() == {}


def test_flush_and_write_failure(tmp_path: Path) -> None:
    # the vault path is a directory, so every write fails
    app = create_app(_settings(tmp_path))
    with TestClient(app) as c:
        resp = c.post("/add", params={"name": "github"}, json={"type": "login"})
        assert resp.status_code == 500
        assert "github" in c.get("/get-all").json()
        assert c.post("/flush").status_code == 500


def test_security_headers(client: TestClient) -> None:
    resp = client.get("/get-all")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["Cache-Control"] == "no-store"
    assert "Strict-Transport-Security" not in resp.headers


def test_hsts_in_prod(vault_file: Path) -> None:
    with TestClient(create_app(_settings(vault_file, app_env="prod"))) as c:
        assert "Strict-Transport-Security" in c.get("/get-all").headers


def test_no_cross_origin_access(client: TestClient) -> None:
    resp = client.get("/get-all", headers={"Origin": "http://localhost:5173"})
    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers
    preflight = client.options(
        "/add",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert "access-control-allow-origin" not in preflight.headers
