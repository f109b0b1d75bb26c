from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from projreg.api.app import create_app
from projreg.api.deps import get_registry
from projreg.core.access import AdminAuthority
from projreg.core.registry import ProjectRegistry
from projreg.db.store import SQLiteStore

ADMIN_HEADERS = {"X-Caller-Id": "admin"}


def _client(tmp_path: Path) -> TestClient:
    app = create_app()
    registry = ProjectRegistry(SQLiteStore(tmp_path / "registry.db"), AdminAuthority("admin"))
    app.dependency_overrides[get_registry] = lambda: registry
    return TestClient(app)


def test_project_lifecycle(tmp_path: Path) -> None:
    client = _client(tmp_path)

    create = client.post(
        "/api/v1/projects",
        json={"proposal_uri": "ipfs://proposalA"},
        headers=ADMIN_HEADERS,
    )
    assert create.status_code == 201
    assert create.json() == {"id": 0}

    listing = client.get("/api/v1/projects")
    assert listing.status_code == 200
    assert len(listing.json()["items"]) == 1

    ongoing = client.post(
        "/api/v1/projects/0/status",
        json={"status": "ongoing"},
        headers=ADMIN_HEADERS,
    )
    assert ongoing.status_code == 200
    assert ongoing.json()["project"]["status"] == "ongoing"
    assert ongoing.json()["project"]["report_uri"] == ""

    completed = client.post(
        "/api/v1/projects/0/status",
        json={"status": "completed", "report_uri": "ipfs://reportA"},
        headers=ADMIN_HEADERS,
    )
    assert completed.status_code == 200

    fetched = client.get("/api/v1/projects/0")
    assert fetched.status_code == 200
    project = fetched.json()["project"]
    assert project["status"] == "completed"
    assert project["report_uri"] == "ipfs://reportA"

    again = client.post(
        "/api/v1/projects/0/status",
        json={"status": "ongoing"},
        headers=ADMIN_HEADERS,
    )
    assert again.status_code == 409
    assert again.json()["kind"] == "invalid_state"


def test_error_mapping(tmp_path: Path) -> None:
    client = _client(tmp_path)

    empty = client.post("/api/v1/projects", json={"proposal_uri": ""}, headers=ADMIN_HEADERS)
    assert empty.status_code == 422
    assert empty.json()["kind"] == "invalid_argument"

    anonymous = client.post("/api/v1/projects", json={"proposal_uri": "ipfs://proposalA"})
    assert anonymous.status_code == 403
    assert anonymous.json()["kind"] == "permission_denied"

    stranger = client.post(
        "/api/v1/projects",
        json={},
        headers={"X-Caller-Id": "mallory"},
    )
    assert stranger.status_code == 403

    missing = client.post(
        "/api/v1/projects/99/status",
        json={"status": "ongoing"},
        headers=ADMIN_HEADERS,
    )
    assert missing.status_code == 404
    assert missing.json()["kind"] == "not_found"

    client.post("/api/v1/projects", json={"proposal_uri": "ipfs://p"}, headers=ADMIN_HEADERS)

    no_report = client.post(
        "/api/v1/projects/0/status",
        json={"status": "cancelled"},
        headers=ADMIN_HEADERS,
    )
    assert no_report.status_code == 422
    assert no_report.json()["detail"] == "report required"

    unknown_status = client.post(
        "/api/v1/projects/0/status",
        json={"status": "paused"},
        headers=ADMIN_HEADERS,
    )
    assert unknown_status.status_code == 422

    assert client.get("/api/v1/projects/5").status_code == 404
    assert client.get("/api/v1/registry").json()["next_id"] == 1


def test_owner_and_balance(tmp_path: Path) -> None:
    client = _client(tmp_path)
    client.post("/api/v1/projects", json={"proposal_uri": "ipfs://a"}, headers=ADMIN_HEADERS)
    client.post("/api/v1/projects", json={"proposal_uri": "ipfs://b"}, headers=ADMIN_HEADERS)

    owner = client.get("/api/v1/projects/1/owner")
    assert owner.status_code == 200
    assert owner.json() == {"project_id": 1, "owner": "admin"}

    assert client.get("/api/v1/projects/7/owner").status_code == 404

    balance = client.get("/api/v1/owners/admin/balance")
    assert balance.json() == {"owner": "admin", "balance": 2}

    info = client.get("/api/v1/registry").json()
    assert info["administrator"] == "admin"
    assert info["next_id"] == 2


def test_transfer_routes_do_not_exist(tmp_path: Path) -> None:
    client = _client(tmp_path)
    client.post("/api/v1/projects", json={"proposal_uri": "ipfs://a"}, headers=ADMIN_HEADERS)

    transfer = client.post(
        "/api/v1/projects/0/transfer",
        json={"to": "bob"},
        headers=ADMIN_HEADERS,
    )
    assert transfer.status_code in {404, 405}
    assert client.get("/api/v1/projects/0/owner").json()["owner"] == "admin"


def test_ids_beyond_storage_range_return_not_found(tmp_path: Path) -> None:
    client = _client(tmp_path)
    client.post("/api/v1/projects", json={"proposal_uri": "ipfs://a"}, headers=ADMIN_HEADERS)

    assert client.get(f"/api/v1/projects/{2**64}").status_code == 404
    assert client.get(f"/api/v1/projects/{2**63}/owner").status_code == 404
    assert client.get(f"/api/v1/projects/{2**63}/events").status_code == 404

    advance = client.post(
        f"/api/v1/projects/{2**63}/status",
        json={"status": "ongoing"},
        headers=ADMIN_HEADERS,
    )
    assert advance.status_code == 404
    assert advance.json()["kind"] == "not_found"
