# File: territory/core/config_manager.py
"""
Centralized configuration management for Territory Manager.
Loads settings from environment variables (and a local .env file).
"""

import os
import re
from pathlib import Path
from typing import List, Tuple

import pytz
from dotenv import load_dotenv

from territory.utils.logger import setup_logger

# Load environment variables
load_dotenv()

logger = setup_logger(__name__)


class Config:
    """Application configuration singleton."""
    
    # Data lives under the working directory unless overridden
    DATA_DIR = Path(os.getenv("TERRITORY_DATA_DIR", "data"))
    
    # Files
    CLIENTS_FILE = "clients.json"
    EVENTS_FILE = "events.json"
    EXPORT_FILE = "territory-clients.csv"
    SCHEMA_VERSION = 1
    
    # Timestamps written into saved snapshots
    TIMEZONE = os.getenv("TIMEZONE", "UTC")
    
    # Conflict policy: same calendar day (time of day ignored) and within this many miles
    CONFLICT_RADIUS_MILES = float(os.getenv("TERRITORY_CONFLICT_RADIUS_MILES", "15"))
    EARTH_RADIUS_MILES = 3959.0
    
    # Placeholder geocoding: offsets of 0.00-0.99 degrees from the origin on both axes
    GEOCODE_ORIGIN: Tuple[float, float] = (40.7128, -74.0060)
    GEOCODE_BUCKETS = 100
    GEOCODE_SPAN_DEGREES = 1.0
    
    # ZIP codes and CSV wire format
    ZIP_PATTERN = re.compile(r"^[0-9]{5}$")
    FORM_ZIP_DELIMITER = ","
    ZIP_LIST_DELIMITER = ";"
    CSV_DELIMITER = ","
    IMPORT_MIN_FIELDS = 4
    IMPORT_HEADER: List[str] = ["Name", "Email", "Phone", "ZipCodes"]
    EXPORT_HEADER: List[str] = ["Client Name", "Email", "Phone", "Zip Codes", "Status"]
    STATUS_ACTIVE = "Active"
    STATUS_INACTIVE = "Inactive"
    
    UNKNOWN_CLIENT_LABEL = "Unknown client"
    
    @classmethod
    def validate(cls) -> bool:
        """Validate that the configured policy values are usable."""
        errors = []
        
        if cls.CONFLICT_RADIUS_MILES <= 0:
            errors.append(f"Conflict radius must be positive (got {cls.CONFLICT_RADIUS_MILES})")
        
        if cls.TIMEZONE not in pytz.all_timezones_set:
            errors.append(f"Unknown timezone: {cls.TIMEZONE}")
        
        if errors:
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False
        
        return True
