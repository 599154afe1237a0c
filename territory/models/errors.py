# File: territory/models/errors.py
"""
Error and advisory types raised or returned by the territory engine.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .event import Event


class TerritoryError(Exception):
    """Base class for engine errors. A raised error means no state changed."""


class ValidationError(TerritoryError):
    """A required field is malformed (e.g. a ZIP that is not 5 digits)."""
    
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class TerritoryConflict(TerritoryError):
    """The client may not operate in the ZIP because another active client holds it."""
    
    def __init__(self, zip_code: str, client_id: str, blocking_client_id: Optional[str] = None):
        self.zip_code = zip_code
        self.client_id = client_id
        self.blocking_client_id = blocking_client_id
        if blocking_client_id is None:
            message = f"Client '{client_id}' is unknown and cannot schedule events in {zip_code}"
        else:
            message = (
                f"This zip code ({zip_code}) is assigned to another client "
                f"('{blocking_client_id}'). You cannot schedule events here."
            )
        super().__init__(message)


class NotFoundError(TerritoryError):
    """No record of the given kind has the given id."""
    
    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"No {kind} with id '{entity_id}'")


@dataclass
class SchedulingAdvisory:
    """Non-fatal warning: a new event would conflict with existing active events."""
    candidate: Event
    conflicting_ids: List[str] = field(default_factory=list)
    details: List[Tuple[Event, float]] = field(default_factory=list)
    
    def __bool__(self) -> bool:
        return bool(self.conflicting_ids)
    
    def describe(self) -> str:
        """Confirmation text shown before committing the event."""
        names = ", ".join(f"{e.event_name} ({e.event_date})" for e, _ in self.details)
        return (
            f"Warning: This event conflicts with {len(self.conflicting_ids)} "
            f"existing event(s): {names}. Do you want to proceed anyway?"
        )


@dataclass
class ImportRowSkipped:
    """Represents an import row that was skipped."""
    row_index: int
    reason: str
    raw: Sequence[str] = field(default_factory=list)
    
    def __str__(self) -> str:
        return f"Row {self.row_index}: {self.reason}"
