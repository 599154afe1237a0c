# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable test data for all tests.
"""

import itertools
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Keep test logs out of the project tree
os.environ.setdefault("TERRITORY_LOG_DIR", tempfile.mkdtemp(prefix="territory-logs-"))

from territory.core.engine import TerritoryEngine
from territory.models import Client, Event, EventForm
from territory.processors.geocoder import geocode_zip


def make_event(event_id, zip_code, event_date="2024-02-15", client_id="A",
               is_active=True, name=None, conflicts=()):
    """Build an event with coordinates derived from its ZIP."""
    lat, lng = geocode_zip(zip_code)
    return Event(
        id=event_id,
        client_id=client_id,
        event_name=name or f"Event {event_id}",
        zip_code=zip_code,
        latitude=lat,
        longitude=lng,
        event_date=event_date,
        is_active=is_active,
        conflicts=conflicts,
    )


# ==================== Client Fixtures ====================

@pytest.fixture
def client_a():
    """Active client holding 10001-10003."""
    return Client(
        id="A",
        name="Acme Events",
        contact_email="contact@acme.com",
        contact_phone="555-0101",
        assigned_zip_codes=("10001", "10002", "10003"),
        color="#3b82f6",
    )


@pytest.fixture
def client_b():
    """Active client holding 10004-10005."""
    return Client(
        id="B",
        name="Premier Productions",
        contact_email="info@premier.com",
        contact_phone="555-0102",
        assigned_zip_codes=("10004", "10005"),
        color="#10b981",
    )


@pytest.fixture
def client_c():
    """Active client without any territory."""
    return Client(id="C", name="Elite Entertainment", color="#f59e0b")


@pytest.fixture
def sample_clients(client_a, client_b, client_c):
    return [client_a, client_b, client_c]


# ==================== Event Fixtures ====================

@pytest.fixture
def gala_form():
    """Form for client A in 10001 on 2024-02-15."""
    return EventForm(
        client_id="A",
        event_name="Corporate Gala 2024",
        zip_code="10001",
        event_date="2024-02-15",
        event_time="18:00",
        notes="Annual corporate event",
    )


@pytest.fixture
def launch_form():
    """Form for client B in 10004 on 2024-02-15 (near 10001)."""
    return EventForm(
        client_id="B",
        event_name="Product Launch",
        zip_code="10004",
        event_date="2024-02-15",
        event_time="19:00",
        notes="New product unveiling",
    )


# ==================== Engine Fixtures ====================

@pytest.fixture
def id_factory():
    """Deterministic ids: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def engine(sample_clients, id_factory):
    """Engine with three clients and no events."""
    return TerritoryEngine(
        clients=sample_clients,
        id_factory=id_factory,
        color_factory=lambda: "#123456",
    )


@pytest.fixture
def event_factory():
    """Factory for events with ZIP-derived coordinates."""
    return make_event
