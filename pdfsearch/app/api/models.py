"""
API models for document search endpoints.

This module contains Pydantic models for API response validation.
"""
from typing import Optional

from pydantic import BaseModel


class StatusResponse(BaseModel):
    """Response model for status endpoint."""
    status: str
    timestamp: float
    api_version: str


class ProxyErrorResponse(BaseModel):
    """Response model for a failed PDF proxy request."""
    error: str
    error_id: Optional[str] = None
