# File: territory/cli.py
"""
Command-line entry point for Territory Manager.

Loads the saved snapshot, runs one command and saves the snapshot back when
the command changed it.
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from territory.core.config_manager import Config
from territory.core.engine import TerritoryEngine, default_snapshot
from territory.models import (
    ClientForm,
    ConflictFilter,
    EntityKind,
    EventForm,
    SchedulingAdvisory,
    TerritoryError,
)
from territory.processors.event_filter import client_label, filter_events
from territory.services.csv_service import read_csv_rows, write_csv_rows
from territory.services.snapshot_store import SnapshotStore
from territory.utils.logger import setup_logger

logger = setup_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ZIP territory and event conflict manager")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Config.DATA_DIR,
        help="Directory holding clients.json and events.json.",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    
    imp = sub.add_parser("import-clients", help="Append clients from a CSV file.")
    imp.add_argument("csv_path", type=Path)
    
    exp = sub.add_parser("export-clients", help="Write all clients to a CSV file.")
    exp.add_argument("csv_path", type=Path, nargs="?", default=Path(Config.EXPORT_FILE))
    
    lst = sub.add_parser("list-events", help="List events with filters.")
    lst.add_argument("--search", default="", help="Match event name or ZIP.")
    lst.add_argument("--client", default=None, help="Only this client id.")
    lst.add_argument(
        "--conflicts",
        choices=[f.value for f in ConflictFilter],
        default=ConflictFilter.ALL.value,
    )
    lst.add_argument("--all", action="store_true", help="Include inactive events.")
    
    sub.add_parser("conflicts", help="Show every active event that has conflicts.")
    sub.add_parser("audit", help="Show events whose client no longer holds rights to the ZIP.")
    sub.add_parser("seed", help="Write the sample clients and events if no data exists.")
    
    add_event = sub.add_parser("add-event", help="Schedule a new event.")
    add_event.add_argument("--client", required=True, dest="client_id", help="Client id.")
    add_event.add_argument("--name", required=True, dest="event_name")
    add_event.add_argument("--zip", required=True, dest="zip_code")
    add_event.add_argument("--date", required=True, dest="event_date", help="YYYY-MM-DD")
    add_event.add_argument("--time", default="", dest="event_time", help="HH:MM")
    add_event.add_argument("--notes", default="")
    add_event.add_argument("--yes", action="store_true", help="Schedule despite conflicts without asking.")
    
    edit_event = sub.add_parser("edit-event", help="Change fields of an existing event.")
    edit_event.add_argument("event_id")
    edit_event.add_argument("--client", dest="client_id")
    edit_event.add_argument("--name", dest="event_name")
    edit_event.add_argument("--zip", dest="zip_code")
    edit_event.add_argument("--date", dest="event_date")
    edit_event.add_argument("--time", dest="event_time")
    edit_event.add_argument("--notes")
    
    for command, help_text in (("add-client", "Add a client."), ("edit-client", "Change fields of an existing client.")):
        client_parser = sub.add_parser(command, help=help_text)
        if command == "edit-client":
            client_parser.add_argument("client_id")
        client_parser.add_argument("--name", required=command == "add-client")
        client_parser.add_argument("--email", dest="contact_email")
        client_parser.add_argument("--phone", dest="contact_phone")
        client_parser.add_argument("--zips", dest="assigned_zip_codes", help="Comma-separated ZIP codes.")
    
    del_event = sub.add_parser("delete-event", help="Delete an event.")
    del_event.add_argument("event_id")
    
    del_client = sub.add_parser("delete-client", help="Delete a client and all of its events.")
    del_client.add_argument("client_id")
    
    toggle = sub.add_parser("toggle", help="Flip a client or event between active and inactive.")
    toggle.add_argument("kind", choices=[k.value for k in EntityKind])
    toggle.add_argument("entity_id")
    
    return parser.parse_args(argv)


def _print_event(engine: TerritoryEngine, event) -> None:
    status = "" if event.is_active else " [inactive]"
    print(
        f"{event.id}  {event.event_date} {event.event_time or '--:--'}  {event.zip_code}  "
        f"{event.event_name} ({client_label(event.client_id, engine.clients)}){status}"
    )


def _or(value, fallback):
    """Command-line value if given, else the stored one."""
    return fallback if value is None else value


def _confirm(advisory: SchedulingAdvisory) -> bool:
    """Ask on the terminal whether to schedule despite conflicts."""
    try:
        answer = input(f"{advisory.describe()} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def run(args: argparse.Namespace) -> int:
    store = SnapshotStore(args.data_dir)
    
    if args.command == "seed":
        if store.exists():
            logger.error(f"Data already present in {args.data_dir}; not seeding")
            return 1
        engine = TerritoryEngine.from_snapshot(default_snapshot())
        return 0 if store.save(engine.snapshot) else 1
    
    engine = TerritoryEngine.from_snapshot(store.load())
    
    if args.command == "import-clients":
        imported, skipped = engine.import_clients(read_csv_rows(args.csv_path))
        print(f"Successfully imported {len(imported)} clients ({len(skipped)} rows skipped)")
        for skip in skipped:
            print(f"  {skip}")
        return 0 if store.save(engine.snapshot) else 1
    
    if args.command == "export-clients":
        count = write_csv_rows(args.csv_path, engine.export_clients())
        print(f"Exported {count - 1} clients to {args.csv_path}")
        return 0
    
    if args.command == "list-events":
        events = filter_events(
            engine.events,
            search=args.search,
            client_id=args.client,
            conflict_filter=ConflictFilter(args.conflicts),
            active_only=not args.all,
        )
        for event in events:
            _print_event(engine, event)
        print(f"{len(events)} event(s)")
        return 0
    
    if args.command == "conflicts":
        conflicted = [e for e in engine.events if e.has_conflicts]
        for event in conflicted:
            _print_event(engine, event)
            for other, miles in engine.conflict_details(event.id):
                print(f"    conflicts with {other.event_name} ({miles} miles away)")
        print(f"{len(conflicted)} event(s) in conflict")
        return 0
    
    if args.command == "audit":
        flagged = engine.audit_event_rights()
        for event in flagged:
            _print_event(engine, event)
        print(f"{len(flagged)} event(s) outside their client's rights")
        return 0
    
    if args.command == "add-event":
        form = EventForm(
            client_id=args.client_id,
            event_name=args.event_name,
            zip_code=args.zip_code,
            event_date=args.event_date,
            event_time=args.event_time,
            notes=args.notes,
        )
        result = engine.create_or_update_event(form, confirm=None if args.yes else _confirm)
        if not result.committed:
            print("Event not scheduled")
            return 1
        _print_event(engine, result.event)
        return 0 if store.save(engine.snapshot) else 1
    
    if args.command == "edit-event":
        current = engine.get_event(args.event_id)
        form = EventForm(
            client_id=_or(args.client_id, current.client_id),
            event_name=_or(args.event_name, current.event_name),
            zip_code=_or(args.zip_code, current.zip_code),
            event_date=_or(args.event_date, current.event_date),
            event_time=_or(args.event_time, current.event_time),
            notes=_or(args.notes, current.notes),
            is_active=current.is_active,
        )
        result = engine.create_or_update_event(form, existing_id=args.event_id)
        _print_event(engine, result.event)
        return 0 if store.save(engine.snapshot) else 1
    
    if args.command in ("add-client", "edit-client"):
        current = engine.get_client(args.client_id) if args.command == "edit-client" else None
        form = ClientForm(
            name=_or(args.name, current.name if current else ""),
            contact_email=_or(args.contact_email, current.contact_email if current else ""),
            contact_phone=_or(args.contact_phone, current.contact_phone if current else ""),
            assigned_zip_codes=_or(args.assigned_zip_codes, current.assigned_zip_codes if current else ""),
            is_active=current.is_active if current else True,
        )
        client = engine.create_or_update_client(form, existing_id=current.id if current else None)
        print(f"{client.id}  {client.name}  {', '.join(client.assigned_zip_codes) or '(no ZIP codes)'}")
        return 0 if store.save(engine.snapshot) else 1
    
    if args.command == "delete-event":
        engine.delete_event(args.event_id)
        print(f"Deleted event {args.event_id}")
        return 0 if store.save(engine.snapshot) else 1
    
    if args.command == "delete-client":
        engine.delete_client(args.client_id)
        print(f"Deleted client {args.client_id} and its events")
        return 0 if store.save(engine.snapshot) else 1
    
    if args.command == "toggle":
        record = engine.toggle_active(args.kind, args.entity_id)
        print(f"{args.kind} {args.entity_id} is now {'active' if record.is_active else 'inactive'}")
        return 0 if store.save(engine.snapshot) else 1
    
    logger.error(f"Unknown command: {args.command}")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main execution function.
    
    Returns:
        Exit code (0 for success, 1 for failure)
    """
    start_time = time.time()
    args = parse_args(argv)
    
    if not Config.validate():
        logger.error("Configuration validation failed")
        return 1
    
    try:
        code = run(args)
    except (OSError, ValueError, TerritoryError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    
    logger.debug(f"{args.command} finished in {time.time() - start_time:.2f}s")
    return code


if __name__ == "__main__":
    sys.exit(main())
