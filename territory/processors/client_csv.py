# File: territory/processors/client_csv.py
"""
Client import/export rows.

Import rows: Name, Email, Phone, ZipCodes[, Status]
Export rows: Client Name, Email, Phone, Zip Codes, Status

ZipCodes is a ';'-separated list. Rows with fewer than four fields are
skipped and reported, never fatal. The optional fifth column is read back
so that an exported file re-imports with the same status.
"""

from typing import Callable, Iterable, List, Sequence, Tuple

from territory.core.config_manager import Config
from territory.models import Client, ImportRowSkipped, parse_zip_list
from territory.utils.logger import setup_logger

logger = setup_logger(__name__)


def _parse_status(raw: str) -> bool:
    return raw.strip().lower() != Config.STATUS_INACTIVE.lower()


def parse_client_rows(
    rows: Iterable[Sequence[str]],
    id_factory: Callable[[], str],
    color_factory: Callable[[], str],
    has_header: bool = True,
) -> Tuple[List[Client], List[ImportRowSkipped]]:
    """
    Convert parsed CSV rows into new Client records.
    
    Args:
        rows: Parsed rows (lists of cell strings), header first when has_header
        id_factory: Issues a fresh client id per imported row
        color_factory: Issues a display color per imported row
        has_header: Skip the first row
    
    Returns:
        (imported clients, skipped rows)
    """
    clients: List[Client] = []
    skipped: List[ImportRowSkipped] = []
    
    for index, row in enumerate(rows):
        if has_header and index == 0:
            continue
        cells = [str(cell) for cell in row]
        
        # Blank lines (e.g. a trailing newline) are not data
        if not any(cell.strip() for cell in cells):
            continue
        
        if len(cells) < Config.IMPORT_MIN_FIELDS:
            skipped.append(ImportRowSkipped(
                row_index=index,
                reason=f"expected at least {Config.IMPORT_MIN_FIELDS} fields, got {len(cells)}",
                raw=cells,
            ))
            continue
        
        is_active = _parse_status(cells[4]) if len(cells) > 4 else True
        clients.append(Client(
            id=id_factory(),
            name=cells[0].strip(),
            contact_email=cells[1].strip(),
            contact_phone=cells[2].strip(),
            assigned_zip_codes=tuple(parse_zip_list(cells[3], Config.ZIP_LIST_DELIMITER)),
            color=color_factory(),
            is_active=is_active,
        ))
    
    for skip in skipped:
        logger.warning(f"Skipped import row: {skip}")
    logger.info(f"Parsed {len(clients)} clients from import ({len(skipped)} rows skipped)")
    return clients, skipped


def client_rows(clients: Iterable[Client]) -> List[List[str]]:
    """Serialize clients to export rows, header first."""
    rows = [list(Config.EXPORT_HEADER)]
    for client in clients:
        rows.append([
            client.name,
            client.contact_email,
            client.contact_phone,
            Config.ZIP_LIST_DELIMITER.join(client.assigned_zip_codes),
            Config.STATUS_ACTIVE if client.is_active else Config.STATUS_INACTIVE,
        ])
    return rows
