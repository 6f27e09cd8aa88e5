"""Parsing of EXIF/QuickTime style date strings."""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

# "2023:05:01 12:00:00", optional ".123", optional "Z" / "+02:00" / "-0700"
_EXIF_DATETIME_RE = re.compile(
    r'^(\d{4})[:-](\d{2})[:-](\d{2})[ T](\d{2}):(\d{2}):(\d{2})'
    r'(?:\.(\d+))?'
    r'(Z|[+-]\d{2}:?\d{2})?$'
)


def parse_exif_datetime(value: object) -> Optional[datetime]:
    """
    Parse an EXIF or exiftool datetime string.

    Accepts "YYYY:MM:DD HH:MM:SS" with optional fractional seconds and an
    optional "Z" or "±HH:MM" offset. The offset makes the result timezone
    aware; without it the result is naive.

    Args:
        value: Raw tag value

    Returns:
        datetime, or None for missing, zeroed or malformed values

    Examples:
        >>> parse_exif_datetime("2023:05:01 12:00:00")
        datetime.datetime(2023, 5, 1, 12, 0)
        >>> parse_exif_datetime("0000:00:00 00:00:00") is None
        True
    """
    if not isinstance(value, str):
        return None

    match = _EXIF_DATETIME_RE.match(value.strip())
    if not match:
        return None

    year, month, day, hour, minute, second, fraction, offset = match.groups()

    microsecond = int(fraction[:6].ljust(6, '0')) if fraction else 0
    tzinfo = _parse_offset(offset) if offset else None

    try:
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second),
            microsecond, tzinfo=tzinfo,
        )
    except ValueError:
        return None


def _parse_offset(offset: str) -> timezone:
    if offset == 'Z':
        return timezone.utc
    sign = -1 if offset[0] == '-' else 1
    digits = offset[1:].replace(':', '')
    delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
    return timezone(sign * delta)
