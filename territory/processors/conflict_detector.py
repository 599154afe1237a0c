# File: territory/processors/conflict_detector.py
"""
Scheduling conflict detection.

Two events conflict when both are active, they fall on the same calendar
day (time of day is ignored) and their coordinates are within the conflict
radius. The relation is symmetric and is recomputed over the full event set
every time, so recomputing twice gives the same result.
"""

import dataclasses
from typing import Dict, List, Sequence, Tuple

from territory.core.config_manager import Config
from territory.models import Event
from territory.processors.distance import haversine_distance
from territory.utils.logger import setup_logger


class ConflictDetector:
    """Computes derived conflict lists for events."""
    
    def __init__(self, radius_miles: float = Config.CONFLICT_RADIUS_MILES):
        """
        Initialize conflict detector.
        
        Args:
            radius_miles: Events closer than or equal to this on the same day conflict
        """
        if radius_miles <= 0:
            raise ValueError(f"Conflict radius must be positive: {radius_miles}")
        self.radius_miles = radius_miles
        self.logger = setup_logger(__name__)
    
    def distance_between(self, first: Event, second: Event) -> float:
        return haversine_distance(first.latitude, first.longitude,
                                  second.latitude, second.longitude)
    
    def in_conflict(self, first: Event, second: Event) -> bool:
        """Pairwise predicate. An event never conflicts with itself."""
        if first.id == second.id:
            return False
        if not (first.is_active and second.is_active):
            return False
        if not first.event_date or first.event_date != second.event_date:
            return False
        return self.distance_between(first, second) <= self.radius_miles
    
    def recompute_conflicts(self, events: Sequence[Event]) -> List[Event]:
        """
        Return copies of the events with every conflicts list recomputed.
        
        Inactive events get an empty list and never appear in another event's list.
        Each list is ordered by the position of the other event in the input.
        """
        found: List[List[str]] = [[] for _ in events]
        
        for i, first in enumerate(events):
            if not first.is_active:
                continue
            for j in range(i + 1, len(events)):
                second = events[j]
                if self.in_conflict(first, second):
                    found[i].append(second.id)
                    found[j].append(first.id)
        
        result = [
            dataclasses.replace(event, conflicts=tuple(ids))
            for event, ids in zip(events, found)
        ]
        
        conflicted = sum(1 for e in result if e.conflicts)
        self.logger.debug(f"Recomputed conflicts for {len(result)} events ({conflicted} in conflict)")
        return result
    
    def would_conflict(self, candidate: Event, events: Sequence[Event]) -> List[str]:
        """Ids of committed events the candidate would conflict with. Does not mutate anything."""
        return [e.id for e in events if self.in_conflict(candidate, e)]
    
    def conflict_details(self, event: Event, events: Sequence[Event]) -> List[Tuple[Event, float]]:
        """
        Resolve an event's conflict ids to (event, miles) pairs for display.
        
        Ids that no longer resolve are left out. Distances are rounded to 0.1 mile.
        """
        by_id: Dict[str, Event] = {e.id: e for e in events}
        details = []
        for conflict_id in event.conflicts:
            other = by_id.get(conflict_id)
            if other is None:
                continue
            details.append((other, round(self.distance_between(event, other), 1)))
        return details
