# File: tests/unit/test_event_filter.py
"""
Unit tests for event list filtering and client summaries.
"""

import dataclasses

import pytest

from territory.models import ConflictFilter
from territory.processors.conflict_detector import ConflictDetector
from territory.processors.event_filter import client_label, filter_events, summarize_clients


@pytest.fixture
def events(event_factory):
    """Gala and Launch conflict; Picnic is far away; Retreat is inactive; one event has no client."""
    raw = [
        event_factory("1", "10001", client_id="A", name="Corporate Gala"),
        event_factory("2", "10004", client_id="B", name="Product Launch"),
        event_factory("3", "99999", client_id="A", name="Summer Picnic"),
        event_factory("4", "10002", client_id="A", name="Team Retreat", is_active=False),
        event_factory("5", "55555", client_id="ghost", name="Orphan Show", event_date="2024-05-01"),
    ]
    return ConflictDetector(radius_miles=15).recompute_conflicts(raw)


class TestFilterEvents:
    """Tests for filter_events."""
    
    def test_defaults_hide_inactive(self, events):
        """Test only active events are shown by default."""
        assert [e.id for e in filter_events(events)] == ["1", "2", "3", "5"]
    
    def test_search_by_name_case_insensitive(self, events):
        """Test name search."""
        assert [e.id for e in filter_events(events, search="GALA")] == ["1"]
    
    def test_search_by_zip_substring(self, events):
        """Test ZIP search."""
        assert [e.id for e in filter_events(events, search="9999")] == ["3"]
    
    def test_filter_by_client(self, events):
        """Test client filter including inactive events."""
        result = filter_events(events, client_id="A", active_only=False)
        assert [e.id for e in result] == ["1", "3", "4"]
    
    def test_filter_by_conflict_status(self, events):
        """Test with/without conflicts."""
        with_conflicts = filter_events(events, conflict_filter=ConflictFilter.WITH_CONFLICTS)
        without = filter_events(events, conflict_filter=ConflictFilter.WITHOUT_CONFLICTS)
        
        assert [e.id for e in with_conflicts] == ["1", "2"]
        assert [e.id for e in without] == ["3", "5"]


class TestClientSummaries:
    """Tests for summarize_clients and client_label."""
    
    def test_counts_per_client(self, sample_clients, events):
        """Test total and active counts, with unknown-client events grouped last."""
        summaries = summarize_clients(sample_clients, events)
        by_name = {s.name: s for s in summaries}
        
        assert by_name["Acme Events"].total_events == 3
        assert by_name["Acme Events"].active_events == 2
        assert by_name["Acme Events"].zip_count == 3
        assert by_name["Elite Entertainment"].total_events == 0
        assert summaries[-1].client_id is None
        assert summaries[-1].total_events == 1
    
    def test_active_only_hides_inactive_clients(self, client_a, client_b, events):
        """Test inactive clients drop out without their events becoming unknown."""
        inactive_b = dataclasses.replace(client_b, is_active=False)
        
        summaries = summarize_clients([client_a, inactive_b], events, active_only=True)
        
        assert [s.name for s in summaries] == ["Acme Events", "Unknown client"]
        assert summaries[-1].total_events == 1
    
    def test_client_label(self, sample_clients):
        """Test dangling ids render as unknown."""
        assert client_label("B", sample_clients) == "Premier Productions"
        assert client_label("ghost", sample_clients) == "Unknown client"
