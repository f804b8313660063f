#!/usr/bin/env python3
"""Command-line front end for FieldSync.

Records observations into the local store, shows the outbox, and pushes
pending observations to the configured GitHub repository.

Commands:
    record           Save an observation (and sync right away when online)
    list             Show every stored observation
    outbox           Show pending outbox items with last error and retries
    remove ID        Unqueue an observation (the record itself is kept)
    sync             Push all unsynced observations
    test-connection  Check the configured repository is reachable
    clear            Delete all local data (requires --yes)

Configuration comes from FIELDSYNC_* environment variables or a .env file;
see fieldsync/config/field_sync_config.py.

Exit codes:
    0 success
    1 sync ran but at least one observation failed, or a check failed
    2 usage, configuration, connectivity or busy error
    3 local storage error
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from fieldsync.bootstrap import FieldSync, configure_structlog, create_field_sync
from fieldsync.config import RemoteConfig, load_field_sync_config
from fieldsync.config.field_sync_config import DEFAULT_BASE_PATH
from fieldsync.domain.errors import (
    ConfigError,
    LocationUnavailableError,
    OfflineError,
    StorageError,
    SyncBusyError,
)
from fieldsync.domain.models import GPSLocation
from fieldsync.infrastructure.observability import (
    generate_correlation_id,
    set_correlation_id,
)

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_USAGE = 2
EXIT_STORAGE = 3


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Offline-first wildlife observation capture and sync",
    )
    p.add_argument("--data-dir", type=Path, help="Local store directory")
    p.add_argument("--token", help="GitHub token (overrides FIELDSYNC_GITHUB_TOKEN)")
    p.add_argument("--repo", help="GitHub repository owner/name")
    p.add_argument("--path", help=f"Base path in the repository (default: {DEFAULT_BASE_PATH})")
    p.add_argument(
        "--log-format",
        choices=["production", "development"],
        help="JSON (production) or console (development) logs",
    )

    sub = p.add_subparsers(dest="command", required=True)

    rec = sub.add_parser("record", help="Save an observation")
    rec.add_argument("--species", required=True)
    rec.add_argument("--enumerator", help="Recorder name (default: last used)")
    rec.add_argument("--lat", type=float, help="Latitude (default: configured station)")
    rec.add_argument("--lon", type=float, help="Longitude (default: configured station)")
    rec.add_argument("--accuracy", type=float)
    rec.add_argument("--altitude", type=float)
    rec.add_argument("--items", default="", help="Comma-separated notes")
    rec.add_argument("--no-sync", action="store_true", help="Do not sync after saving")

    sub.add_parser("list", help="Show stored observations")
    sub.add_parser("outbox", help="Show pending outbox items")

    rm = sub.add_parser("remove", help="Unqueue an observation")
    rm.add_argument("observation_id")

    sub.add_parser("sync", help="Push all unsynced observations")
    sub.add_parser("test-connection", help="Check the repository is reachable")

    clr = sub.add_parser("clear", help="Delete all local data")
    clr.add_argument("--yes", action="store_true", help="Confirm deletion")

    return p.parse_args(argv)


def build_app(args: argparse.Namespace) -> FieldSync:
    config = load_field_sync_config()
    if args.data_dir is not None:
        config = replace(config, data_dir=args.data_dir)
    if args.token or args.repo:
        base = config.remote
        remote = RemoteConfig(
            token=args.token or (base.token if base else ""),
            repository=args.repo or (base.repository if base else ""),
            base_path=args.path or (base.base_path if base else DEFAULT_BASE_PATH),
        )
        remote.validate()
        config = replace(config, remote=remote)
    elif args.path and config.remote is not None:
        config = replace(config, remote=replace(config.remote, base_path=args.path))
    elif args.path:
        print("warning: --path ignored: no GitHub credentials configured", file=sys.stderr)
    configure_structlog(args.log_format or config.environment)
    return create_field_sync(config)


async def cmd_record(app: FieldSync, args: argparse.Namespace) -> int:
    enumerator = args.enumerator or await app.capture.default_enumerator()
    if not enumerator:
        print("error: --enumerator is required (no previous name saved)", file=sys.stderr)
        return EXIT_USAGE
    if (args.lat is None) != (args.lon is None):
        print("error: --lat and --lon must be given together", file=sys.stderr)
        return EXIT_USAGE
    try:
        location = None
        if args.lat is not None:
            location = GPSLocation(
                latitude=args.lat,
                longitude=args.lon,
                accuracy=args.accuracy,
                altitude=args.altitude,
            )
        result = await app.capture.record_observation(
            species=args.species,
            enumerator=enumerator,
            location=location,
            items=args.items,
            auto_sync=not args.no_sync,
        )
    except (ValueError, LocationUnavailableError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    print(f"saved {result.observation.id} ({result.observation.species})")
    if result.sync_result is not None:
        print(
            f"synced {result.sync_result.success_count}, "
            f"failed {result.sync_result.failed_count}"
        )
    else:
        print(f"queued for later sync: {result.sync_skipped_reason}")
    return EXIT_OK


async def cmd_list(app: FieldSync, args: argparse.Namespace) -> int:
    observations = await app.observations.get_all()
    if not observations:
        print("no observations")
    for obs in observations:
        status = "synced" if obs.synced else "pending"
        print(
            f"{obs.id}  {obs.timestamp.isoformat()}  {obs.species}  "
            f"({obs.location.latitude:.5f}, {obs.location.longitude:.5f})  "
            f"{obs.enumerator}  [{status}]"
        )
    return EXIT_OK


async def cmd_outbox(app: FieldSync, args: argparse.Namespace) -> int:
    entries = await app.outbox_view.get_outbox_view()
    if not entries:
        print("outbox empty")
    for entry in entries:
        species = entry.observation.species if entry.observation else "<missing record>"
        line = (
            f"{entry.observation_id}  {species}  "
            f"queued {entry.item.created_at.isoformat()}  retries {entry.retry_count}"
        )
        if entry.last_error:
            line += f"  last error: {entry.last_error}"
        print(line)
    return EXIT_OK


async def cmd_remove(app: FieldSync, args: argparse.Namespace) -> int:
    if await app.outbox_view.remove_item(args.observation_id):
        print(f"removed {args.observation_id} from outbox")
        return EXIT_OK
    print(f"{args.observation_id} is not in the outbox", file=sys.stderr)
    return EXIT_PARTIAL


async def cmd_sync(app: FieldSync, args: argparse.Namespace) -> int:
    try:
        result = await app.sync.sync_all()
    except (OfflineError, ConfigError, SyncBusyError) as e:
        print(f"sync not run: {e}", file=sys.stderr)
        return EXIT_USAGE
    print(f"Successfully synced {result.success_count} observations. {result.failed_count} failed.")
    for failure in result.failures:
        print(f"  {failure.observation_id}: {failure.message}")
    return EXIT_PARTIAL if result.failed_count else EXIT_OK


async def cmd_test_connection(app: FieldSync, args: argparse.Namespace) -> int:
    if not app.sync.is_configured():
        print("GitHub credentials not configured", file=sys.stderr)
        return EXIT_USAGE
    if await app.sync.test_connection():
        print("connection ok")
        return EXIT_OK
    print("connection failed", file=sys.stderr)
    return EXIT_PARTIAL


async def cmd_clear(app: FieldSync, args: argparse.Namespace) -> int:
    if not args.yes:
        print("refusing to clear local data without --yes", file=sys.stderr)
        return EXIT_USAGE
    await app.clear_all_data()
    print("local data cleared")
    return EXIT_OK


COMMANDS = {
    "record": cmd_record,
    "list": cmd_list,
    "outbox": cmd_outbox,
    "remove": cmd_remove,
    "sync": cmd_sync,
    "test-connection": cmd_test_connection,
    "clear": cmd_clear,
}


async def run(args: argparse.Namespace, app: FieldSync | None = None) -> int:
    set_correlation_id(generate_correlation_id())
    if app is None:
        try:
            app = build_app(args)
        except (ConfigError, ValueError) as e:
            print(f"configuration error: {e}", file=sys.stderr)
            return EXIT_USAGE
    try:
        return await COMMANDS[args.command](app, args)
    except StorageError as e:
        print(f"storage error: {e}", file=sys.stderr)
        return EXIT_STORAGE


def main(argv: Sequence[str] | None = None) -> int:
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
