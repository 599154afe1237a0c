# File: territory/core/engine.py
"""
Territory & conflict engine.

Owns the client and event collections and is the only way to mutate them.
Every operation validates first, builds the new collections, recomputes
conflicts over the whole event set and only then swaps the new state in,
so a rejected operation leaves both collections untouched.
"""

import dataclasses
import random
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from territory.models import (
    Client,
    ClientForm,
    EntityKind,
    Event,
    EventForm,
    ImportRowSkipped,
    NotFoundError,
    SchedulingAdvisory,
    Snapshot,
    TerritoryConflict,
    ValidationError,
    is_valid_zip,
    parse_iso_date,
    parse_time_of_day,
)
from territory.processors.client_csv import client_rows, parse_client_rows
from territory.processors.conflict_detector import ConflictDetector
from territory.processors.geocoder import geocode_zip
from territory.processors.rights_validator import (
    find_blocking_client,
    find_territory_overlaps,
    may_operate,
)
from territory.utils.logger import LoggerMixin


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


def random_color() -> str:
    """Pseudo-random display color, '#rrggbb'."""
    return f"#{random.randint(0, 0xFFFFFF):06x}"


@dataclass
class EventResult:
    """Outcome of create_or_update_event."""
    event: Optional[Event]
    advisory: Optional[SchedulingAdvisory] = None
    committed: bool = True


class TerritoryEngine(LoggerMixin):
    """
    Main engine for territory rights and event conflicts.
    
    Example usage:
        engine = TerritoryEngine.from_snapshot(store.load())
        result = engine.create_or_update_event(form)
        store.save(engine.snapshot)
    """
    
    def __init__(
        self,
        clients: Iterable[Client] = (),
        events: Iterable[Event] = (),
        detector: Optional[ConflictDetector] = None,
        id_factory: Callable[[], str] = generate_id,
        color_factory: Callable[[], str] = random_color,
    ):
        """
        Initialize the engine with existing collections.
        
        Coordinates and conflicts on the given events are not trusted; both
        are recomputed here.
        
        Args:
            clients: Existing clients
            events: Existing events
            detector: Conflict detector (defaults to the configured radius)
            id_factory: Issues ids for new clients and events
            color_factory: Issues display colors for new clients
        """
        self.detector = detector or ConflictDetector()
        self._id_factory = id_factory
        self._color_factory = color_factory
        
        self._clients: Tuple[Client, ...] = tuple(clients)
        self._events: Tuple[Event, ...] = tuple(
            self.detector.recompute_conflicts([self._rederive(e) for e in events])
        )
        self.logger.info(
            f"Engine ready with {len(self._clients)} clients and {len(self._events)} events"
        )
    
    @classmethod
    def from_snapshot(cls, snapshot: Snapshot, **kwargs) -> 'TerritoryEngine':
        return cls(clients=snapshot.clients, events=snapshot.events, **kwargs)
    
    # ==================== State Access ====================
    
    @property
    def clients(self) -> Tuple[Client, ...]:
        return self._clients
    
    @property
    def events(self) -> Tuple[Event, ...]:
        return self._events
    
    @property
    def snapshot(self) -> Snapshot:
        return Snapshot(clients=self._clients, events=self._events)
    
    def get_client(self, client_id: str) -> Client:
        for client in self._clients:
            if client.id == client_id:
                return client
        raise NotFoundError(EntityKind.CLIENT.value, client_id)
    
    def get_event(self, event_id: str) -> Event:
        for event in self._events:
            if event.id == event_id:
                return event
        raise NotFoundError(EntityKind.EVENT.value, event_id)
    
    # ==================== Events ====================
    
    def build_event(self, form: EventForm, event_id: str) -> Event:
        """
        Validate the form and build an uncommitted event.
        
        Raises:
            ValidationError: on a malformed ZIP, date or time
        """
        zip_code = (form.zip_code or "").strip()
        if not is_valid_zip(zip_code):
            raise ValidationError("zip_code", f"Please enter a valid 5-digit zip code (got '{form.zip_code}')")
        
        event_day = parse_iso_date((form.event_date or "").strip())
        if event_day is None:
            raise ValidationError("event_date", f"Expected a YYYY-MM-DD date (got '{form.event_date}')")
        
        event_time = ""
        if form.event_time and form.event_time.strip():
            event_time = parse_time_of_day(form.event_time)
            if event_time is None:
                raise ValidationError("event_time", f"Expected HH:MM (got '{form.event_time}')")
        
        lat, lng = geocode_zip(zip_code)
        return Event(
            id=event_id,
            client_id=form.client_id,
            event_name=form.event_name,
            zip_code=zip_code,
            latitude=lat,
            longitude=lng,
            event_date=event_day.isoformat(),
            event_time=event_time,
            notes=form.notes or "",
            is_active=form.is_active,
        )
    
    def check_rights(self, client_id: str, zip_code: str) -> None:
        """
        Raises:
            TerritoryConflict: if the client may not operate in the ZIP
        """
        if may_operate(client_id, zip_code, self._clients):
            return
        known = any(c.id == client_id for c in self._clients)
        blocking = find_blocking_client(client_id, zip_code, self._clients) if known else None
        raise TerritoryConflict(zip_code, client_id, blocking.id if blocking else None)
    
    def preview_event(self, form: EventForm, existing_id: Optional[str] = None) -> SchedulingAdvisory:
        """Conflicts a form would produce, without committing anything."""
        return self._advisory_for(self.build_event(form, existing_id or ""))
    
    def create_or_update_event(
        self,
        form: EventForm,
        existing_id: Optional[str] = None,
        confirm: Optional[Callable[[SchedulingAdvisory], bool]] = None,
    ) -> EventResult:
        """
        Create a new event, or replace the event with existing_id.
        
        For a new event that would conflict, the advisory is passed to
        confirm (if given); a False answer aborts without changing state.
        Edits never ask.
        
        Raises:
            ValidationError: malformed ZIP, date or time
            TerritoryConflict: the client may not operate in the ZIP
            NotFoundError: existing_id does not exist
        """
        if existing_id is not None:
            self.get_event(existing_id)
        
        event_id = existing_id or self._new_id(e.id for e in self._events)
        try:
            candidate = self.build_event(form, event_id)
        except ValidationError as e:
            self.logger.warning(f"Rejected event '{form.event_name}': {e}")
            raise

        try:
            self.check_rights(candidate.client_id, candidate.zip_code)
        except TerritoryConflict as e:
            self.logger.warning(f"Rejected event '{candidate.event_name}': {e}")
            raise
        
        advisory = None
        if existing_id is None:
            advisory = self._advisory_for(candidate)
            if advisory:
                self.logger.warning(advisory.describe())
                if confirm is not None and not confirm(advisory):
                    self.logger.info(f"Event '{candidate.event_name}' not created (declined)")
                    return EventResult(event=None, advisory=advisory, committed=False)
            events = list(self._events) + [candidate]
        else:
            events = [candidate if e.id == existing_id else e for e in self._events]
        
        self._commit(events=events)
        committed = self.get_event(event_id)
        self.logger.info(
            f"{'Updated' if existing_id else 'Created'} event '{committed.event_name}' "
            f"({committed.zip_code}, {committed.event_date}) with {len(committed.conflicts)} conflict(s)"
        )
        return EventResult(event=committed, advisory=advisory or None, committed=True)
    
    def delete_event(self, event_id: str) -> Snapshot:
        self.get_event(event_id)
        self._commit(events=[e for e in self._events if e.id != event_id])
        self.logger.info(f"Deleted event {event_id}")
        return self.snapshot
    
    # ==================== Clients ====================
    
    def create_or_update_client(self, form: ClientForm, existing_id: Optional[str] = None) -> Client:
        """
        Create a new client, or replace the client with existing_id.
        
        Malformed ZIP tokens are dropped. The color is kept on edit and
        issued on creation. Existing events are not re-checked against the
        new territory; see audit_event_rights.
        
        Raises:
            NotFoundError: existing_id does not exist
        """
        if existing_id is not None:
            previous = self.get_client(existing_id)
            client_id, color = previous.id, previous.color
        else:
            client_id = self._new_id(c.id for c in self._clients)
            color = self._color_factory()
        
        client = Client(
            id=client_id,
            name=form.name,
            contact_email=form.contact_email,
            contact_phone=form.contact_phone,
            assigned_zip_codes=tuple(form.zip_codes()),
            color=color,
            is_active=form.is_active,
        )
        
        if existing_id is None:
            clients = list(self._clients) + [client]
        else:
            clients = [client if c.id == existing_id else c for c in self._clients]
        
        self._commit(clients=clients)
        self._warn_overlaps(client)
        self.logger.info(
            f"{'Updated' if existing_id else 'Created'} client '{client.name}' "
            f"with {len(client.assigned_zip_codes)} ZIP code(s)"
        )
        return client
    
    def delete_client(self, client_id: str) -> Snapshot:
        """Delete the client and every event that references it."""
        self.get_client(client_id)
        events = [e for e in self._events if e.client_id != client_id]
        removed = len(self._events) - len(events)
        self._commit(
            clients=[c for c in self._clients if c.id != client_id],
            events=events,
        )
        self.logger.info(f"Deleted client {client_id} and {removed} of its event(s)")
        return self.snapshot
    
    # ==================== Shared ====================
    
    def toggle_active(self, kind: Union[EntityKind, str], entity_id: str) -> Union[Client, Event]:
        """Flip is_active on a client or event and return the updated record."""
        kind = EntityKind(kind)
        if kind == EntityKind.CLIENT:
            current = self.get_client(entity_id)
            updated = dataclasses.replace(current, is_active=not current.is_active)
            self._commit(
                clients=[updated if c.id == entity_id else c for c in self._clients],
                events=self._events,
            )
        else:
            current = self.get_event(entity_id)
            flipped = dataclasses.replace(current, is_active=not current.is_active)
            self._commit(events=[flipped if e.id == entity_id else e for e in self._events])
            updated = self.get_event(entity_id)
        
        self.logger.info(
            f"{kind.value.capitalize()} {entity_id} is now {'active' if updated.is_active else 'inactive'}"
        )
        return updated
    
    def import_clients(
        self, rows: Iterable[Sequence[str]], has_header: bool = True
    ) -> Tuple[List[Client], List[ImportRowSkipped]]:
        """
        Append clients parsed from CSV rows.
        
        Returns:
            (imported clients, skipped rows); len(skipped rows) is the error count
        """
        issued: List[str] = []
        
        def next_id() -> str:
            new_id = self._new_id([c.id for c in self._clients] + issued)
            issued.append(new_id)
            return new_id
        
        imported, skipped = parse_client_rows(rows, next_id, self._color_factory, has_header)
        self._commit(clients=list(self._clients) + imported)
        self.logger.info(f"Successfully imported {len(imported)} clients ({len(skipped)} rows skipped)")
        return imported, skipped
    
    def export_clients(self, clients: Optional[Iterable[Client]] = None) -> List[List[str]]:
        """Export rows (header first) for the given clients, or all of them."""
        return client_rows(self._clients if clients is None else clients)
    
    def audit_event_rights(self) -> List[Event]:
        """
        Events whose client would fail the rights check today.
        
        Client edits do not re-validate existing events; this reports them
        so the caller can decide. Nothing is changed.
        """
        return [
            e for e in self._events
            if not may_operate(e.client_id, e.zip_code, self._clients)
        ]
    
    def territory_overlaps(self) -> Dict[str, List[str]]:
        return find_territory_overlaps(self._clients)
    
    def conflict_details(self, event_id: str) -> List[Tuple[Event, float]]:
        return self.detector.conflict_details(self.get_event(event_id), self._events)
    
    # ==================== Internals ====================
    
    def _commit(
        self,
        clients: Optional[Iterable[Client]] = None,
        events: Optional[Iterable[Event]] = None,
    ) -> None:
        """Build the new state fully, then swap it in."""
        new_clients = self._clients if clients is None else tuple(clients)
        new_events = self._events
        if events is not None:
            new_events = tuple(self.detector.recompute_conflicts(list(events)))
        self._clients, self._events = new_clients, new_events
    
    def _advisory_for(self, candidate: Event) -> SchedulingAdvisory:
        others = [e for e in self._events if e.id != candidate.id]
        ids = self.detector.would_conflict(candidate, others)
        details = self.detector.conflict_details(
            dataclasses.replace(candidate, conflicts=tuple(ids)), others
        )
        return SchedulingAdvisory(candidate=candidate, conflicting_ids=ids, details=details)
    
    def _new_id(self, taken: Iterable[str]) -> str:
        taken = set(taken)
        new_id = self._id_factory()
        while new_id in taken:
            new_id = self._id_factory()
        return new_id
    
    def _warn_overlaps(self, client: Client) -> None:
        if not client.is_active:
            return
        shared = [z for z, ids in self.territory_overlaps().items() if client.id in ids]
        if shared:
            self.logger.warning(
                f"Client '{client.name}' shares ZIP code(s) with other active clients: {', '.join(sorted(shared))}"
            )
    
    @staticmethod
    def _rederive(event: Event) -> Event:
        lat, lng = geocode_zip(event.zip_code)
        return dataclasses.replace(event, latitude=lat, longitude=lng, conflicts=())


def default_snapshot() -> Snapshot:
    """Sample clients and events for a fresh installation."""
    clients = (
        Client('1', 'Acme Events', 'contact@acme.com', '555-0101', ('10001', '10002', '10003'), '#3b82f6'),
        Client('2', 'Premier Productions', 'info@premier.com', '555-0102', ('10004', '10005'), '#10b981'),
        Client('3', 'Elite Entertainment', 'hello@elite.com', '555-0103', ('10006', '10007'), '#f59e0b'),
    )
    seed_events = (
        ('1', '1', 'Corporate Gala 2024', '10001', '2024-02-15', '18:00', 'Annual corporate event'),
        ('2', '2', 'Product Launch', '10004', '2024-02-15', '19:00', 'New product unveiling'),
    )
    events = []
    for event_id, client_id, name, zip_code, day, time, notes in seed_events:
        lat, lng = geocode_zip(zip_code)
        events.append(Event(event_id, client_id, name, zip_code, lat, lng, day, time, notes))
    return Snapshot(clients=clients, events=tuple(events))
