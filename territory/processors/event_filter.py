# File: territory/processors/event_filter.py
"""
Event list filtering and per-client summaries for display layers.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from territory.core.config_manager import Config
from territory.models import Client, ConflictFilter, Event


@dataclass
class ClientSummary:
    """Event counts for one client (or for events with an unknown client)."""
    client_id: Optional[str]
    name: str
    total_events: int = 0
    active_events: int = 0
    zip_count: int = 0


def client_label(client_id: str, clients: Iterable[Client]) -> str:
    """Client name, or the unknown-client label for a dangling id."""
    for client in clients:
        if client.id == client_id:
            return client.name
    return Config.UNKNOWN_CLIENT_LABEL


def filter_events(
    events: Iterable[Event],
    search: str = "",
    client_id: Optional[str] = None,
    conflict_filter: ConflictFilter = ConflictFilter.ALL,
    active_only: bool = True,
) -> List[Event]:
    """
    Filter events the way the events list does.
    
    - search: case-insensitive match on the event name, or substring of the ZIP
    - client_id: only this client's events (None for all)
    - conflict_filter: all / with conflicts / without conflicts
    - active_only: hide inactive events
    """
    needle = search.strip().lower()
    result = []
    for event in events:
        if needle and needle not in event.event_name.lower() and needle not in event.zip_code:
            continue
        if client_id is not None and event.client_id != client_id:
            continue
        if conflict_filter == ConflictFilter.WITH_CONFLICTS and not event.has_conflicts:
            continue
        if conflict_filter == ConflictFilter.WITHOUT_CONFLICTS and event.has_conflicts:
            continue
        if active_only and not event.is_active:
            continue
        result.append(event)
    return result


def summarize_clients(
    clients: Iterable[Client],
    events: Iterable[Event],
    active_only: bool = False,
) -> List[ClientSummary]:
    """Per-client event counts, plus one trailing entry for unknown-client events if any."""
    clients = list(clients)
    summaries = {
        c.id: ClientSummary(c.id, c.name, zip_count=len(c.assigned_zip_codes))
        for c in clients
    }
    unknown = ClientSummary(None, Config.UNKNOWN_CLIENT_LABEL)
    
    for event in events:
        summary = summaries.get(event.client_id, unknown)
        summary.total_events += 1
        if event.is_active:
            summary.active_events += 1
    
    result = [summaries[c.id] for c in clients if c.is_active or not active_only]
    if unknown.total_events:
        result.append(unknown)
    return result
