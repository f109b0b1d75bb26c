"""Command line access to a project registry database."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any

from projreg.config import Settings, get_default_caller, get_settings
from projreg.core.errors import RegistryError
from projreg.core.registry import ProjectRegistry, build_registry
from projreg.db.store import SQLiteStore
from projreg.logs import configure_logging
from projreg.models.events import EventType


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="projreg", description="Project registry CLI")
    parser.add_argument("--db", default=None, help="Registry database path")
    parser.add_argument(
        "--caller",
        default=None,
        help="Caller identity for mutating commands (default: $PROJREG_CALLER)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Register a project from a proposal URI")
    create.add_argument("proposal_uri", help="Proposal document URI")

    advance = subparsers.add_parser("advance", help="Advance a project's lifecycle status")
    advance.add_argument("project_id", type=int, help="Project id")
    advance.add_argument(
        "status",
        help="Target status: ongoing, completed or cancelled",
    )
    advance.add_argument("--report-uri", default="", help="Report document URI")

    show = subparsers.add_parser("show", help="Print one project record")
    show.add_argument("project_id", type=int, help="Project id")

    subparsers.add_parser("list", help="List all project records")

    events = subparsers.add_parser("events", help="List lifecycle events")
    events.add_argument("--project-id", type=int, default=None, help="Filter by project id")
    events.add_argument(
        "--event-type",
        choices=[member.value for member in EventType],
        default=None,
        help="Filter by event type",
    )

    subparsers.add_parser("info", help="Print registry metadata")

    return parser


def _print_json(value: Any) -> None:
    sys.stdout.write(json.dumps(value, indent=2, sort_keys=True) + "\n")


async def _dispatch(args: argparse.Namespace, registry: ProjectRegistry) -> Any:
    if args.command == "create":
        project = await registry.create(args.caller, args.proposal_uri)
        return project.model_dump(mode="json")

    if args.command == "advance":
        project = await registry.advance_status(
            args.caller,
            args.project_id,
            args.status,
            args.report_uri,
        )
        return project.model_dump(mode="json")

    if args.command == "show":
        project = await registry.require(args.project_id)
        return project.model_dump(mode="json")

    if args.command == "list":
        return [project.model_dump(mode="json") for project in await registry.list()]

    if args.command == "events":
        event_type = EventType(args.event_type) if args.event_type else None
        events = await registry.events(project_id=args.project_id, event_type=event_type)
        return [event.model_dump(mode="json") for event in events]

    if args.command == "info":
        return asdict(await registry.info())

    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = settings or get_settings()
    if args.db:
        settings = replace(settings, db_path=Path(args.db))
    if args.caller is None:
        args.caller = get_default_caller()
    configure_logging(settings, stream=sys.stderr, force=True)

    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    registry = build_registry(SQLiteStore(settings.db_path), settings)
    try:
        result = asyncio.run(_dispatch(args, registry))
    except RegistryError as exc:
        sys.stderr.write(f"error[{exc.kind}]: {exc.reason}\n")
        return 1

    _print_json(result)
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
