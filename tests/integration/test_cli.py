# File: tests/integration/test_cli.py
"""
Integration tests for the command-line entry point.
Each test runs against a temporary data directory.
"""

from unittest.mock import patch

import pytest

from territory.cli import main
from territory.services.csv_service import read_csv_rows, write_csv_rows
from territory.services.snapshot_store import SnapshotStore


class TestCli:
    """Tests for territory.cli.main."""
    
    def test_seed_then_list_conflicts(self, tmp_path, capsys):
        """Test seeding writes the sample data and conflicts are reported."""
        data_dir = tmp_path / "data"
        
        assert main(["--data-dir", str(data_dir), "seed"]) == 0
        assert main(["--data-dir", str(data_dir), "conflicts"]) == 0
        
        out = capsys.readouterr().out
        assert "Corporate Gala 2024" in out
        assert "miles away" in out
        assert "2 event(s) in conflict" in out
    
    def test_seed_refuses_existing_data(self, tmp_path):
        """Test seeding twice fails instead of overwriting."""
        data_dir = tmp_path / "data"
        main(["--data-dir", str(data_dir), "seed"])
        
        assert main(["--data-dir", str(data_dir), "seed"]) == 1
    
    def test_import_then_export(self, tmp_path, capsys):
        """Test CSV import persists clients and export writes them back."""
        data_dir = tmp_path / "data"
        source = tmp_path / "in.csv"
        target = tmp_path / "out.csv"
        write_csv_rows(source, [
            ["Name", "Email", "Phone", "ZipCodes"],
            ["Smith, Jones & Co", "sj@x.com", "555-0199", "10009;10010"],
            ["short", "row"],
        ])
        
        assert main(["--data-dir", str(data_dir), "import-clients", str(source)]) == 0
        assert "1 rows skipped" in capsys.readouterr().out
        assert [c.name for c in SnapshotStore(data_dir).load().clients] == ["Smith, Jones & Co"]
        
        assert main(["--data-dir", str(data_dir), "export-clients", str(target)]) == 0
        rows = read_csv_rows(target)
        assert rows[1] == ["Smith, Jones & Co", "sj@x.com", "555-0199", "10009;10010", "Active"]
    
    def test_list_events_filters(self, tmp_path, capsys):
        """Test list-events search."""
        data_dir = tmp_path / "data"
        main(["--data-dir", str(data_dir), "seed"])
        capsys.readouterr()
        
        assert main(["--data-dir", str(data_dir), "list-events", "--search", "launch"]) == 0
        
        out = capsys.readouterr().out
        assert "Product Launch (Premier Productions)" in out
        assert "1 event(s)" in out
    
    def test_missing_import_file_fails(self, tmp_path):
        """Test an unreadable CSV gives exit code 1."""
        assert main(["--data-dir", str(tmp_path), "import-clients", str(tmp_path / "nope.csv")]) == 1


class TestCliMutations:
    """Tests for the add, edit, delete and toggle subcommands."""
    
    @pytest.fixture
    def data_dir(self, tmp_path):
        """Seeded data directory: clients 1-3, events 1 (10001) and 2 (10004)."""
        data_dir = tmp_path / "data"
        assert main(["--data-dir", str(data_dir), "seed"]) == 0
        return data_dir
    
    def _add_gala(self, data_dir, *extra):
        return main([
            "--data-dir", str(data_dir), "add-event",
            "--client", "1", "--name", "Spring Gala", "--zip", "10002",
            "--date", "2024-02-15", "--time", "18:30", *extra,
        ])
    
    def test_add_event_declined_keeps_data(self, data_dir):
        """Test answering no to the conflict prompt schedules nothing."""
        with patch("builtins.input", return_value="n") as prompt:
            assert self._add_gala(data_dir) == 1
        
        assert "conflicts with 2 existing event(s)" in prompt.call_args[0][0]
        assert len(SnapshotStore(data_dir).load().events) == 2
    
    def test_add_event_confirmed_is_saved(self, data_dir):
        """Test answering yes schedules the event."""
        with patch("builtins.input", return_value="y"):
            assert self._add_gala(data_dir) == 0
        
        events = SnapshotStore(data_dir).load().events
        assert [e.event_name for e in events][-1] == "Spring Gala"
    
    def test_add_event_yes_flag_skips_prompt(self, data_dir):
        """Test --yes commits without asking."""
        with patch("builtins.input") as prompt:
            assert self._add_gala(data_dir, "--yes") == 0
        
        prompt.assert_not_called()
        assert len(SnapshotStore(data_dir).load().events) == 3
    
    def test_add_event_without_conflicts_does_not_prompt(self, data_dir):
        """Test a conflict-free event never reaches the prompt."""
        with patch("builtins.input") as prompt:
            code = main([
                "--data-dir", str(data_dir), "add-event",
                "--client", "1", "--name", "Later", "--zip", "10003", "--date", "2024-03-01",
            ])
        
        assert code == 0
        prompt.assert_not_called()
    
    def test_add_event_in_foreign_territory_fails(self, data_dir):
        """Test a rights violation gives exit code 1 and changes nothing."""
        code = main([
            "--data-dir", str(data_dir), "add-event", "--yes",
            "--client", "3", "--name", "Intrusion", "--zip", "10001", "--date", "2024-02-15",
        ])
        
        assert code == 1
        assert len(SnapshotStore(data_dir).load().events) == 2
    
    def test_add_event_bad_zip_fails(self, data_dir):
        """Test a malformed ZIP gives exit code 1."""
        code = main([
            "--data-dir", str(data_dir), "add-event", "--yes",
            "--client", "1", "--name", "Typo", "--zip", "1000", "--date", "2024-02-15",
        ])
        
        assert code == 1
    
    def test_edit_event_keeps_unset_fields(self, data_dir):
        """Test edit-event moves the date and clears the conflict pair."""
        assert main(["--data-dir", str(data_dir), "edit-event", "1", "--date", "2024-02-16"]) == 0
        
        snapshot = SnapshotStore(data_dir).load()
        gala = snapshot.get_event("1")
        assert gala.event_date == "2024-02-16"
        assert gala.event_name == "Corporate Gala 2024"
        assert gala.event_time == "18:00"
    
    def test_add_and_edit_client(self, data_dir):
        """Test add-client parses ZIPs and edit-client keeps the rest."""
        assert main([
            "--data-dir", str(data_dir), "add-client",
            "--name", "Nova", "--email", "hi@nova.com", "--zips", "10008, bad,10009",
        ]) == 0
        nova = [c for c in SnapshotStore(data_dir).load().clients if c.name == "Nova"][0]
        assert nova.assigned_zip_codes == ("10008", "10009")
        
        assert main(["--data-dir", str(data_dir), "edit-client", nova.id, "--zips", "10010"]) == 0
        
        edited = SnapshotStore(data_dir).load().get_client(nova.id)
        assert edited.assigned_zip_codes == ("10010",)
        assert edited.contact_email == "hi@nova.com"
        assert edited.color == nova.color
    
    def test_delete_client_cascades(self, data_dir):
        """Test delete-client removes the client's events."""
        assert main(["--data-dir", str(data_dir), "delete-client", "1"]) == 0
        
        snapshot = SnapshotStore(data_dir).load()
        assert [c.id for c in snapshot.clients] == ["2", "3"]
        assert [e.id for e in snapshot.events] == ["2"]
    
    def test_delete_event(self, data_dir):
        """Test delete-event removes only that event."""
        assert main(["--data-dir", str(data_dir), "delete-event", "2"]) == 0
        
        assert [e.id for e in SnapshotStore(data_dir).load().events] == ["1"]
    
    def test_toggle_event(self, data_dir, capsys):
        """Test toggle flips an event to inactive."""
        assert main(["--data-dir", str(data_dir), "toggle", "event", "1"]) == 0
        
        assert "event 1 is now inactive" in capsys.readouterr().out
        assert SnapshotStore(data_dir).load().get_event("1").is_active is False
    
    @pytest.mark.parametrize("argv", [
        ["delete-event", "missing"],
        ["delete-client", "missing"],
        ["toggle", "client", "missing"],
        ["edit-event", "missing", "--name", "x"],
        ["edit-client", "missing", "--name", "x"],
    ])
    def test_unknown_ids_fail(self, data_dir, argv):
        """Test unknown ids give exit code 1 and leave data unchanged."""
        before = SnapshotStore(data_dir).load()
        
        assert main(["--data-dir", str(data_dir), *argv]) == 1
        assert SnapshotStore(data_dir).load() == before
