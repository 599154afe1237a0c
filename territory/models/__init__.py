from .enums import EntityKind, ConflictFilter
from .common import is_valid_zip, parse_zip_list, parse_iso_date, parse_time_of_day, parse_bool
from .client import Client, ClientForm, client_from_dict
from .event import Event, EventForm, event_from_dict, event_form_from_dict
from .errors import (
    TerritoryError,
    ValidationError,
    TerritoryConflict,
    NotFoundError,
    SchedulingAdvisory,
    ImportRowSkipped,
)
from .snapshot import Snapshot

__all__ = [
    "EntityKind",
    "ConflictFilter",
    "is_valid_zip",
    "parse_zip_list",
    "parse_iso_date",
    "parse_time_of_day",
    "parse_bool",
    "Client",
    "ClientForm",
    "client_from_dict",
    "Event",
    "EventForm",
    "event_from_dict",
    "event_form_from_dict",
    "TerritoryError",
    "ValidationError",
    "TerritoryConflict",
    "NotFoundError",
    "SchedulingAdvisory",
    "ImportRowSkipped",
    "Snapshot",
]
