# File: territory/services/snapshot_store.py
"""
JSON persistence for the client and event collections.

Each collection lives in its own file:
    {"schema_version": 1, "saved_at": "<iso timestamp>", "records": [...]}
A bare JSON list (the unversioned browser-storage format) is accepted on load.
"""

import datetime
import json
import os
from pathlib import Path
from typing import Any, Callable, List, Optional, TypeVar

import pytz

from territory.core.config_manager import Config
from territory.models import Snapshot, client_from_dict, event_from_dict
from territory.utils.logger import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


class SnapshotStore:
    """Loads and saves snapshots under a data directory."""
    
    def __init__(self, data_dir: Optional[Path] = None, timezone: str = Config.TIMEZONE):
        """
        Initialize snapshot store.
        
        Args:
            data_dir: Directory holding clients.json and events.json
            timezone: Timezone name for saved_at stamps (e.g., 'Europe/Amsterdam')
        """
        self.data_dir = Path(data_dir) if data_dir is not None else Config.DATA_DIR
        self.timezone = pytz.timezone(timezone)
    
    @property
    def clients_path(self) -> Path:
        return self.data_dir / Config.CLIENTS_FILE
    
    @property
    def events_path(self) -> Path:
        return self.data_dir / Config.EVENTS_FILE
    
    def exists(self) -> bool:
        return self.clients_path.exists() or self.events_path.exists()
    
    def load(self) -> Snapshot:
        """
        Load both collections. Missing files load as empty collections.
        
        Derived event fields are recomputed by event_from_dict; the caller's
        engine recomputes conflicts.
        
        Raises:
            ValueError: if a file was written by a newer schema version
        """
        clients = self._load_records(self.clients_path, client_from_dict)
        events = self._load_records(self.events_path, event_from_dict)
        logger.info(f"Loaded {len(clients)} clients and {len(events)} events from {self.data_dir}")
        return Snapshot(clients=tuple(clients), events=tuple(events))
    
    def save(self, snapshot: Snapshot) -> bool:
        """
        Write both collections.
        
        Each file is replaced atomically on its own; the pair is not a single
        transaction, so a failure while writing the events file leaves the new
        clients file next to the previous events file.
        
        Returns:
            True if successful, False otherwise
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self._write_records(self.clients_path, [c.to_dict() for c in snapshot.clients])
            self._write_records(self.events_path, [e.to_dict() for e in snapshot.events])
            logger.info(f"Snapshot saved to {self.data_dir}")
            return True
        except OSError as e:
            logger.error(f"Could not save snapshot: {e}", exc_info=True)
            return False
    
    def _load_records(self, path: Path, factory: Callable[[dict], T]) -> List[T]:
        if not path.exists():
            logger.debug(f"No file at {path}; starting empty")
            return []
        
        with open(path, 'r', encoding='utf-8') as f:
            data: Any = json.load(f)
        
        if isinstance(data, list):
            records = data
        else:
            version = int(data.get('schema_version', 0))
            if version > Config.SCHEMA_VERSION:
                raise ValueError(
                    f"{path} has schema version {version}; "
                    f"this build reads up to {Config.SCHEMA_VERSION}"
                )
            records = data.get('records', [])
        
        return [factory(record) for record in records]
    
    def _write_records(self, path: Path, records: List[dict]) -> None:
        payload = {
            "schema_version": Config.SCHEMA_VERSION,
            "saved_at": datetime.datetime.now(self.timezone).isoformat(),
            "records": records,
        }
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
