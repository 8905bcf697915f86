"""
Timestamp converter: Unix seconds or milliseconds, ISO 8601 and RFC 2822
dates to every common representation.
"""

import re
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Dict, Any, Optional

PARSE_ERROR = "Could not parse input. Try a Unix timestamp or ISO date."

# Largest unit first; months and years are approximations
RELATIVE_UNITS = [
    ('year', 365 * 24 * 3600),
    ('month', 30 * 24 * 3600),
    ('day', 24 * 3600),
    ('hour', 3600),
    ('minute', 60),
    ('second', 1),
]

UNIX_SECONDS = re.compile(r'-?\d{10}')
UNIX_MILLIS = re.compile(r'-?\d{13}')

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _parse_iso(text: str) -> Optional[datetime]:
    candidate = text
    if candidate.endswith(('Z', 'z')):
        candidate = candidate[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        # Naive dates are read in the server's local zone
        parsed = parsed.astimezone()
    return parsed


def _parse_rfc2822(text: str) -> Optional[datetime]:
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_timestamp(text: str) -> datetime:
    """
    Parse user input into an aware datetime.

    10 digits are Unix seconds, 13 digits are Unix milliseconds, anything
    else is tried as ISO 8601 and then RFC 2822.
    """
    text = (text or '').strip()
    if not text:
        raise ValueError(PARSE_ERROR)

    try:
        if UNIX_SECONDS.fullmatch(text):
            return datetime.fromtimestamp(int(text), tz=timezone.utc)
        if UNIX_MILLIS.fullmatch(text):
            return EPOCH + timedelta(milliseconds=int(text))
    except (OverflowError, OSError, ValueError):
        raise ValueError(PARSE_ERROR)

    parsed = _parse_iso(text) or _parse_rfc2822(text)
    if parsed is None:
        raise ValueError(PARSE_ERROR)
    return parsed


def relative_time(dt: datetime, now: Optional[datetime] = None) -> str:
    """Describe dt relative to now, e.g. '3 days ago' or 'in 2 hours'."""
    now = now or datetime.now(timezone.utc)
    diff = int((dt - now).total_seconds())
    seconds = abs(diff)

    for unit, size in RELATIVE_UNITS:
        if seconds >= size:
            value = seconds // size
            label = f"{value} {unit}{'s' if value != 1 else ''}"
            return f"in {label}" if diff > 0 else f"{label} ago"
    return 'just now'


def format_timestamp(dt: datetime, now: Optional[datetime] = None) -> Dict[str, Any]:
    utc = dt.astimezone(timezone.utc)
    local = dt.astimezone()
    unix_ms = (utc - EPOCH) // timedelta(milliseconds=1)
    return {
        'unix': unix_ms // 1000,
        'unix_ms': unix_ms,
        'iso': utc.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
        'utc': utc.strftime('%a, %d %b %Y %H:%M:%S GMT'),
        'local': local.strftime('%Y-%m-%d %H:%M:%S %Z'),
        'date': local.strftime('%Y-%m-%d'),
        'time': local.strftime('%H:%M:%S'),
        'relative': relative_time(dt, now),
    }


def convert_timestamp(text: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    return format_timestamp(parse_timestamp(text), now)


def current_timestamp(now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    return format_timestamp(now, now)
