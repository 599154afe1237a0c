# File: territory/models/client.py

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple, Union

from .common import parse_bool, parse_zip_list, pick


@dataclass(frozen=True)
class Client:
    """A client organization holding exclusive ZIP-code territories."""
    id: str
    name: str
    contact_email: str = ""
    contact_phone: str = ""
    assigned_zip_codes: Tuple[str, ...] = ()
    color: str = "#3b82f6"
    is_active: bool = True
    
    def __post_init__(self):
        """Store ZIPs as a tuple so snapshots cannot be mutated in place."""
        if isinstance(self.assigned_zip_codes, str):
            object.__setattr__(self, 'assigned_zip_codes', tuple(parse_zip_list(self.assigned_zip_codes)))
        elif not isinstance(self.assigned_zip_codes, tuple):
            object.__setattr__(self, 'assigned_zip_codes', tuple(self.assigned_zip_codes))
    
    def holds_zip(self, zip_code: str) -> bool:
        """Check if the ZIP is listed in this client's territory."""
        return zip_code in self.assigned_zip_codes
    
    @property
    def status_label(self) -> str:
        return "Active" if self.is_active else "Inactive"
    
    def to_dict(self) -> dict:
        """Convert to a plain record for persistence."""
        return {
            'id': self.id,
            'name': self.name,
            'contact_email': self.contact_email,
            'contact_phone': self.contact_phone,
            'assigned_zip_codes': list(self.assigned_zip_codes),
            'color': self.color,
            'is_active': self.is_active,
        }


@dataclass
class ClientForm:
    """Client fields as submitted by a caller, before the engine assigns id and color."""
    name: str
    contact_email: str = ""
    contact_phone: str = ""
    assigned_zip_codes: Union[str, Sequence[str]] = field(default_factory=list)
    is_active: bool = True
    
    def zip_codes(self) -> list:
        """Well-formed ZIP tokens only; the rest are dropped."""
        return parse_zip_list(self.assigned_zip_codes)


def client_from_dict(data: dict) -> Client:
    """
    Create Client from a stored record.
    
    Accepts snake_case keys and the camelCase keys of the browser-storage format.
    """
    raw_zips = pick(data, ['assigned_zip_codes', 'assignedZipCodes'], [])
    zips: Iterable[str] = parse_zip_list(raw_zips)
    
    return Client(
        id=str(data.get('id', '')),
        name=str(data.get('name', '')),
        contact_email=str(pick(data, ['contact_email', 'contactEmail'], '')),
        contact_phone=str(pick(data, ['contact_phone', 'contactPhone'], '')),
        assigned_zip_codes=tuple(zips),
        color=str(data.get('color') or '#3b82f6'),
        is_active=parse_bool(pick(data, ['is_active', 'isActive']), default=True),
    )
