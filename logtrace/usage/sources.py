"""
Display helpers for usage sources and auth files.
"""

from typing import Any, Dict, Mapping, Optional

from logtrace.models.usage import CredentialInfo, SourceInfo
from logtrace.usage.collector import normalize_auth_index

TEMPORARY_SOURCE_PREFIX = "t:"


def build_credential_map(auth_files: Any) -> Dict[str, CredentialInfo]:
    """
    Index auth files by normalized auth index.
    
    Args:
        auth_files: List of auth file dicts, or a {"files": [...]} payload
        
    Returns:
        Mapping of auth index to display data
    """
    if isinstance(auth_files, dict):
        auth_files = auth_files.get("files")
    if not isinstance(auth_files, list):
        return {}

    credentials: Dict[str, CredentialInfo] = {}
    for item in auth_files:
        if not isinstance(item, dict):
            continue
        raw_index = item.get("auth_index")
        if raw_index is None:
            raw_index = item.get("authIndex")
        key = normalize_auth_index(raw_index)
        if not key:
            continue
        credentials[key] = CredentialInfo(
            name=item.get("name") or key,
            type=str(item.get("type") or item.get("provider") or ""),
        )
    return credentials


def resolve_source_display(
    source_raw: Optional[str],
    auth_index: Any,
    source_info_map: Optional[Mapping[str, SourceInfo]] = None,
    auth_file_map: Optional[Mapping[str, CredentialInfo]] = None,
) -> SourceInfo:
    """
    Pick a human readable name for a usage source.
    
    Order: configured source, then auth file by index, then the raw
    source itself.
    """
    source = (source_raw or "").strip()
    if source_info_map:
        matched = source_info_map.get(source)
        if matched:
            return matched

    key = normalize_auth_index(auth_index)
    if key and auth_file_map:
        credential = auth_file_map.get(key)
        if credential:
            return SourceInfo(display_name=credential.name or key, type=credential.type)

    if source.startswith(TEMPORARY_SOURCE_PREFIX):
        return SourceInfo(display_name=source[len(TEMPORARY_SOURCE_PREFIX):], type="")
    return SourceInfo(display_name=source or "-", type="")

