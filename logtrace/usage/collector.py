"""
Flattens a usage statistics snapshot into usage details tagged with
their endpoint.

Snapshot layout (the outer "usage" wrapper is optional):

    {"usage": {"apis": {"POST /v1/chat/completions": {"models": {
        "gpt-4o": {"details": [
            {"timestamp": "2024-01-01T10:00:01.5Z", "source": "t:team",
             "auth_index": 3, "failed": false, "tokens": {...}}
        ]}
    }}}}}
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from logtrace.models.usage import UsageDetailWithEndpoint
from logtrace.parsers.patterns import HTTP_METHODS

logger = logging.getLogger(__name__)

_ENDPOINT_RE = re.compile(rf"^\s*({'|'.join(HTTP_METHODS)})\s+(\S+)", re.IGNORECASE)
_FRACTION_RE = re.compile(r"\.(\d+)")


def normalize_auth_index(value: Any) -> Optional[str]:
    """
    Normalize an auth index to its lookup key.
    
    Numbers become their decimal text, strings are trimmed; anything else
    (including empty strings and booleans) has no key.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        trimmed = value.strip()
        return trimmed or None
    return None


def parse_usage_timestamp_ms(value: Any) -> int:
    """
    Convert an RFC 3339 usage timestamp to epoch milliseconds.
    
    Returns:
        Epoch milliseconds, or 0 when the value cannot be parsed
    """
    if not isinstance(value, str) or not value.strip():
        return 0

    text = value.strip()
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    # fromisoformat only takes up to microseconds
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)

    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return 0
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.replace(microsecond=0).timestamp()) * 1000 + moment.microsecond // 1000


def split_endpoint(endpoint: str) -> Tuple[Optional[str], Optional[str]]:
    """Split 'POST /v1/messages' into method and path."""
    match = _ENDPOINT_RE.match(endpoint)
    if match:
        return match.group(1).upper(), match.group(2)
    stripped = endpoint.strip()
    if stripped.startswith("/"):
        return None, stripped.split()[0]
    return None, None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def collect_usage_details_with_endpoint(snapshot: Optional[Dict[str, Any]]) -> List[UsageDetailWithEndpoint]:
    """
    Flatten a usage snapshot into a list of usage details.
    
    Malformed branches are skipped rather than rejected.
    
    Args:
        snapshot: Usage statistics payload, with or without the "usage" wrapper
        
    Returns:
        Usage details in snapshot order
    """
    root = _as_dict(snapshot)
    if "usage" in root:
        root = _as_dict(root.get("usage"))

    details: List[UsageDetailWithEndpoint] = []
    skipped = 0

    for endpoint, api_entry in _as_dict(root.get("apis")).items():
        method, path = split_endpoint(str(endpoint))
        for model_name, model_entry in _as_dict(_as_dict(api_entry).get("models")).items():
            raw_details = _as_dict(model_entry).get("details")
            if not isinstance(raw_details, list):
                continue
            for raw in raw_details:
                if not isinstance(raw, dict):
                    skipped += 1
                    continue
                auth_index = raw.get("auth_index")
                if not isinstance(auth_index, (int, str)) or isinstance(auth_index, bool):
                    auth_index = None
                source = raw.get("source")
                timestamp = raw.get("timestamp")
                details.append(UsageDetailWithEndpoint(
                    timestamp=timestamp if isinstance(timestamp, str) else None,
                    timestamp_ms=parse_usage_timestamp_ms(timestamp),
                    endpoint_method=method,
                    endpoint_path=path,
                    model_name=str(model_name),
                    source=str(source) if source is not None else None,
                    auth_index=auth_index,
                    failed=raw.get("failed") is True,
                ))

    if skipped:
        logger.debug("Skipped %d malformed usage details", skipped)
    return details
