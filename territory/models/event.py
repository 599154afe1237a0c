# File: territory/models/event.py

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from territory.processors.geocoder import geocode_zip
from .common import parse_bool, parse_iso_date, pick


@dataclass(frozen=True)
class Event:
    """
    A scheduled event inside a ZIP territory.
    
    latitude/longitude are derived from zip_code and conflicts is derived by
    the conflict detector; neither is trusted when read from input.
    """
    id: str
    client_id: str
    event_name: str
    zip_code: str
    latitude: float
    longitude: float
    event_date: str  # YYYY-MM-DD
    event_time: str = ""  # HH:MM, local, no timezone
    notes: str = ""
    is_active: bool = True
    conflicts: Tuple[str, ...] = ()
    
    def __post_init__(self):
        if not isinstance(self.conflicts, tuple):
            object.__setattr__(self, 'conflicts', tuple(self.conflicts))
    
    @property
    def coordinates(self) -> Tuple[float, float]:
        return self.latitude, self.longitude
    
    @property
    def has_conflicts(self) -> bool:
        return len(self.conflicts) > 0
    
    @property
    def calendar_day(self) -> Optional[date]:
        return parse_iso_date(self.event_date)
    
    def to_dict(self) -> dict:
        """Convert to a plain record for persistence."""
        return {
            'id': self.id,
            'client_id': self.client_id,
            'event_name': self.event_name,
            'zip_code': self.zip_code,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'event_date': self.event_date,
            'event_time': self.event_time,
            'notes': self.notes,
            'is_active': self.is_active,
            'conflicts': list(self.conflicts),
        }


@dataclass
class EventForm:
    """Event fields a caller may set. Coordinates and conflicts are not among them."""
    client_id: str
    event_name: str
    zip_code: str
    event_date: str
    event_time: str = ""
    notes: str = ""
    is_active: bool = True


def event_form_from_dict(data: dict) -> EventForm:
    """Build an EventForm, ignoring any derived fields present in the input."""
    return EventForm(
        client_id=str(pick(data, ['client_id', 'clientId'], '')),
        event_name=str(pick(data, ['event_name', 'eventName'], '')),
        zip_code=str(pick(data, ['zip_code', 'zipCode'], '')).strip(),
        event_date=str(pick(data, ['event_date', 'eventDate'], '')).strip(),
        event_time=str(pick(data, ['event_time', 'eventTime'], '')).strip(),
        notes=str(data.get('notes') or ''),
        is_active=parse_bool(pick(data, ['is_active', 'isActive']), default=True),
    )


def event_from_dict(data: dict) -> Event:
    """
    Create Event from a stored record.
    
    Coordinates are recomputed from the ZIP and conflicts are cleared; the
    engine recomputes conflicts over the whole set after loading.
    """
    form = event_form_from_dict(data)
    lat, lng = geocode_zip(form.zip_code)
    return Event(
        id=str(data.get('id', '')),
        client_id=form.client_id,
        event_name=form.event_name,
        zip_code=form.zip_code,
        latitude=lat,
        longitude=lng,
        event_date=form.event_date,
        event_time=form.event_time,
        notes=form.notes,
        is_active=form.is_active,
    )
