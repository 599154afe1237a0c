# File: territory/models/snapshot.py

from dataclasses import dataclass
from typing import Optional, Tuple

from .client import Client
from .event import Event


@dataclass(frozen=True)
class Snapshot:
    """The two collections the engine owns, as of one point in time."""
    clients: Tuple[Client, ...] = ()
    events: Tuple[Event, ...] = ()
    
    def get_client(self, client_id: str) -> Optional[Client]:
        return next((c for c in self.clients if c.id == client_id), None)
    
    def get_event(self, event_id: str) -> Optional[Event]:
        return next((e for e in self.events if e.id == event_id), None)
    
    def to_dict(self) -> dict:
        return {
            'clients': [c.to_dict() for c in self.clients],
            'events': [e.to_dict() for e in self.events],
        }
