"""
Conversion of log timestamps to epoch milliseconds.
"""

import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

_LOG_TIMESTAMP_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[ T](\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?"
    r"\s*(Z|[+-]\d{2}:?\d{2})?$",
    re.IGNORECASE,
)


def _parse_offset(value: str) -> tzinfo:
    if value.upper() == "Z":
        return timezone.utc
    sign = -1 if value[0] == "-" else 1
    digits = value[1:].replace(":", "")
    offset = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
    return timezone(sign * offset)


def parse_log_timestamp_ms(value: Optional[str], tz: Optional[tzinfo] = None) -> Optional[int]:
    """
    Convert a log timestamp to epoch milliseconds.
    
    Accepts 'YYYY-MM-DD HH:MM:SS[.fff]' (or with 'T'), optionally with an
    explicit offset. Timestamps without an offset are read in ``tz``, or
    in the server's local time when ``tz`` is None.
    
    Args:
        value: Timestamp text as extracted by the parser
        tz: Zone for naive timestamps
        
    Returns:
        Epoch milliseconds, or None if the value is missing or invalid
    """
    if not value:
        return None

    match = _LOG_TIMESTAMP_RE.match(value.strip())
    if not match:
        return None

    year, month, day, hour, minute, second, fraction, offset = match.groups()
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))

    try:
        moment = datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), microsecond,
        )
        if offset:
            moment = moment.replace(tzinfo=_parse_offset(offset))
        elif tz is not None:
            moment = moment.replace(tzinfo=tz)
        return int(moment.replace(microsecond=0).timestamp()) * 1000 + microsecond // 1000
    except (ValueError, OverflowError, OSError):
        return None
