"""
Status endpoint for monitoring the document search API.
"""

import os
import time

from fastapi import APIRouter

from pdfsearch.app.api.models import StatusResponse

# Instantiate the API router.
router = APIRouter()


@router.get("/status", response_model=StatusResponse)
async def status() -> StatusResponse:
    """
    Get a simple API status with current timestamp and version info.

    Returns:
        StatusResponse: Status, timestamp and API version.
    """
    return StatusResponse(
        status="success",
        timestamp=time.time(),
        api_version=os.environ.get("API_VERSION", "1.0.0"),
    )
