# File: territory/services/csv_service.py
"""CSV file reading and writing for client import/export."""

import csv
from pathlib import Path
from typing import Iterable, List, Sequence

from territory.core.config_manager import Config
from territory.utils.logger import setup_logger

logger = setup_logger(__name__)


def read_csv_rows(path: Path) -> List[List[str]]:
    """Read every row of a CSV file as a list of cell strings (header included)."""
    with Path(path).open(newline="", encoding="utf-8-sig") as fh:
        rows = [row for row in csv.reader(fh, delimiter=Config.CSV_DELIMITER)]
    logger.info(f"Read {len(rows)} rows from {path}")
    return rows


def write_csv_rows(path: Path, rows: Iterable[Sequence[str]]) -> int:
    """Write rows to a CSV file, creating parent directories. Returns the row count."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, delimiter=Config.CSV_DELIMITER)
        for row in rows:
            writer.writerow(row)
            count += 1
    logger.info(f"Wrote {count} rows to {path}")
    return count
