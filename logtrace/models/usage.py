"""
Usage detail models consumed by the trace resolver.
"""

from typing import Optional, Union
from pydantic import BaseModel, Field, ConfigDict


class UsageDetailWithEndpoint(BaseModel):
    """
    One billed upstream model call, tagged with the endpoint that served it.
    
    Produced by the usage statistics collector and never modified here.
    """
    
    timestamp: Optional[str] = Field(
        default=None,
        description="Timestamp as recorded by the collector"
    )
    timestamp_ms: int = Field(
        default=0,
        description="Event time in epoch milliseconds (0 when unknown)"
    )
    endpoint_method: Optional[str] = Field(
        default=None,
        description="HTTP method of the endpoint"
    )
    endpoint_path: Optional[str] = Field(
        default=None,
        description="Request path of the endpoint"
    )
    model_name: Optional[str] = Field(
        default=None,
        description="Upstream model name"
    )
    source: Optional[str] = Field(
        default=None,
        description="Source identifier (API key digest, prefix, ...)"
    )
    auth_index: Optional[Union[int, str]] = Field(
        default=None,
        description="Index of the auth file that served the call"
    )
    failed: bool = Field(
        default=False,
        description="Whether the upstream call failed"
    )

    model_config = ConfigDict(frozen=True)


class CredentialInfo(BaseModel):
    """Display data for an auth file."""
    name: str
    type: str = ""


class SourceInfo(BaseModel):
    """Human readable rendering of a usage source."""
    display_name: str
    type: str = ""
