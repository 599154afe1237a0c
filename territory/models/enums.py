# File: territory/models/enums.py

from enum import Enum


class EntityKind(Enum):
    """Kinds of records the engine can activate, deactivate or delete."""
    CLIENT = "client"
    EVENT = "event"


class ConflictFilter(Enum):
    """Event list filter on conflict status."""
    ALL = "all"
    WITH_CONFLICTS = "conflicts"
    WITHOUT_CONFLICTS = "no-conflicts"
