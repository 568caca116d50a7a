"""
Pydantic models for API request/response validation.
"""
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, Field


class APIResponse(BaseModel):
    """Base API response model."""
    success: bool
    message: Optional[str] = None
    error: Optional[Dict[str, Any]] = None


class StatusParseRequest(BaseModel):
    """Raw `zpool status` report to parse."""
    report: str = Field(..., min_length=1, description="Output of zpool status for one or more pools")
    strict: bool = Field(default=True, description="Fail on the first malformed device line")


class ListParseRequest(BaseModel):
    """Raw `zpool list -H -p` output to parse."""
    output: str = Field(..., description="One pool per line, whitespace separated")
    strict: bool = Field(default=True, description="Fail on the first malformed row")


class PoolStatusResponse(APIResponse):
    """Single pool status."""
    pool: Optional[Dict[str, Any]] = None


class PoolStatusListResponse(APIResponse):
    """Several pool statuses."""
    pools: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0


class ListRowsResponse(APIResponse):
    """Decoded `zpool list` rows."""
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    errors: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0
