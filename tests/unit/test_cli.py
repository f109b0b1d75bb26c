from __future__ import annotations

import json
from pathlib import Path

import pytest

from projreg.cli import main


def _run(capsys: pytest.CaptureFixture[str], db: Path, *argv: str) -> tuple[int, str, str]:
    code = main(["--db", str(db), *argv])
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_cli_create_advance_show(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("PROJREG_ADMIN", "admin")
    db = tmp_path / "registry.db"

    code, out, _ = _run(capsys, db, "--caller", "admin", "create", "ipfs://proposalA")
    assert code == 0
    assert json.loads(out)["id"] == 0

    code, out, _ = _run(capsys, db, "--caller", "admin", "advance", "0", "ongoing")
    assert code == 0
    assert json.loads(out)["status"] == "ongoing"

    code, out, _ = _run(
        capsys,
        db,
        "--caller",
        "admin",
        "advance",
        "0",
        "completed",
        "--report-uri",
        "ipfs://reportA",
    )
    assert code == 0

    code, out, _ = _run(capsys, db, "show", "0")
    shown = json.loads(out)
    assert shown["status"] == "completed"
    assert shown["report_uri"] == "ipfs://reportA"

    code, out, _ = _run(capsys, db, "events", "--project-id", "0")
    assert [event["event_type"] for event in json.loads(out)] == [
        "ProjectCreated",
        "ProjectStatusChanged",
        "ProjectStatusChanged",
    ]


def test_cli_reports_registry_errors(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("PROJREG_ADMIN", "admin")
    monkeypatch.delenv("PROJREG_CALLER", raising=False)
    db = tmp_path / "registry.db"

    code, out, err = _run(capsys, db, "create", "ipfs://proposalA")
    assert code == 1
    assert out == ""
    assert "error[permission_denied]" in err

    code, _, err = _run(capsys, db, "show", "4")
    assert code == 1
    assert "error[not_found]" in err


def test_cli_uses_caller_from_environment(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("PROJREG_ADMIN", "admin")
    monkeypatch.setenv("PROJREG_CALLER", "admin")
    db = tmp_path / "registry.db"

    code, _, _ = _run(capsys, db, "create", "ipfs://proposalA")
    assert code == 0

    code, out, _ = _run(capsys, db, "info")
    info = json.loads(out)
    assert info["next_id"] == 1
    assert info["administrator"] == "admin"


def test_cli_has_no_transfer_command(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--db", str(tmp_path / "registry.db"), "transfer", "0", "bob"])
