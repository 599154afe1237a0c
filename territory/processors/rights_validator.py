# File: territory/processors/rights_validator.py
"""
Territory rights: who may schedule events in which ZIP code.

A ZIP is open to a client unless another *active* client lists it. When
another active client does list it, the client may still operate there if
it lists the ZIP itself (explicit co-assignment). Inactive clients never
block anyone, and an unknown client id is never eligible.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from territory.models import Client


def find_blocking_client(client_id: str, zip_code: str, clients: Iterable[Client]) -> Optional[Client]:
    """
    Return the first other active client whose territory includes the ZIP.
    
    Args:
        client_id: Client asking to operate in the ZIP
        zip_code: 5-digit ZIP code
        clients: All known clients
    
    Returns:
        The blocking client, or None if the ZIP is unclaimed by others
    """
    for other in clients:
        if other.id != client_id and other.is_active and other.holds_zip(zip_code):
            return other
    return None


def may_operate(client_id: str, zip_code: str, clients: Iterable[Client]) -> bool:
    """Check whether the client may schedule events in the ZIP."""
    clients = list(clients)
    client = next((c for c in clients if c.id == client_id), None)
    if client is None:
        return False
    
    if client.holds_zip(zip_code):
        return True
    return find_blocking_client(client_id, zip_code, clients) is None


def find_territory_overlaps(clients: Iterable[Client]) -> Dict[str, List[str]]:
    """Map each ZIP claimed by more than one active client to those client ids."""
    owners: Dict[str, List[str]] = defaultdict(list)
    for client in clients:
        if not client.is_active:
            continue
        for zip_code in dict.fromkeys(client.assigned_zip_codes):
            owners[zip_code].append(client.id)
    return {z: ids for z, ids in owners.items() if len(ids) > 1}
