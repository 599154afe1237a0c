# File: territory/models/common.py

from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Sequence, Union

from territory.core.config_manager import Config


def is_valid_zip(value: Any) -> bool:
    """True for exactly five ASCII digits."""
    return isinstance(value, str) and bool(Config.ZIP_PATTERN.fullmatch(value))


def parse_zip_list(raw: Union[str, Iterable[Any], None], delimiter: str = Config.FORM_ZIP_DELIMITER) -> List[str]:
    """
    Split a ZIP list and keep only well-formed 5-digit tokens.
    
    Malformed tokens are dropped silently; order is kept and duplicates are harmless.
    """
    if raw is None:
        return []
    tokens = raw.split(delimiter) if isinstance(raw, str) else list(raw)
    cleaned = [str(t).strip() for t in tokens if t is not None]
    return [t for t in cleaned if is_valid_zip(t)]


def parse_iso_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD string (a full ISO datetime is cut down to its date)."""
    if not date_str:
        return None
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        try:
            return datetime.fromisoformat(date_str.replace('Z', '+00:00')).date()
        except ValueError:
            return None


def parse_time_of_day(time_str: Optional[str]) -> Optional[str]:
    """Normalize 'H:MM' / 'HH:MM' / 'HH:MM:SS' to 'HH:MM'; None when malformed."""
    if not time_str:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(time_str.strip(), fmt).strftime("%H:%M")
        except ValueError:
            continue
    return None


def parse_bool(raw: Any, default: bool = True) -> bool:
    """Lenient boolean parsing for stored or imported flags."""
    if raw is None or raw == '':
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ['yes', 'true', '1', 'active', 'y', 't']


def pick(data: dict, keys: Sequence[str], default: Any = None) -> Any:
    """Return the first key present in data (snake_case first, legacy camelCase after)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default
