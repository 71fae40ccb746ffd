"""
PDF proxy endpoint.

Browsers cannot read most remote PDFs directly because of CORS, so the viewer loads its
document through this endpoint: the server downloads the PDF and returns it inline with a
PDF content type and a public cache header. Upstream failures keep the upstream status
code; network failures map to 502/504 and anything unexpected to 500.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from pdfsearch.app.api.models import ProxyErrorResponse
from pdfsearch.app.domain.interfaces import DocumentFetchError
from pdfsearch.app.services.document_fetch_service import DocumentFetchService
from pdfsearch.app.utils.constant.constant import APPLICATION_PDF, PROXY_CACHE_TTL
from pdfsearch.app.utils.logging.logger import log_warning
from pdfsearch.app.utils.system_utils.error_handling import SecurityAwareErrorHandler

# Instantiate the API router.
router = APIRouter()

# Shared download service for proxied documents.
fetch_service = DocumentFetchService()


@router.get("/pdf-proxy")
async def pdf_proxy(url: Optional[str] = None) -> Response:
    """
    Download a remote PDF and return it to the viewer.

    Parameters:
        url (Optional[str]): URL of the PDF to fetch.

    Returns:
        Response: The PDF bytes, or a JSON error payload.
    """
    if not url:
        return JSONResponse(
            content=ProxyErrorResponse(error="Missing 'url' query parameter").model_dump(exclude_none=True),
            status_code=400,
        )
    try:
        content = await fetch_service.fetch_pdf(url)
    except DocumentFetchError as e:
        log_warning(f"[WARNING] PDF proxy request failed with status {e.status_code}")
        return JSONResponse(
            content=ProxyErrorResponse(error=f"Failed to fetch PDF: {e}").model_dump(exclude_none=True),
            status_code=e.status_code,
        )
    except Exception as e:
        error_info = SecurityAwareErrorHandler.handle_safe_error(e, "api_pdf_proxy", endpoint="/api/pdf-proxy")
        return JSONResponse(
            content=ProxyErrorResponse(error="Failed to fetch PDF", error_id=error_info["error_id"]).model_dump(
                exclude_none=True
            ),
            status_code=500,
        )

    return Response(
        content=content,
        status_code=200,
        media_type=APPLICATION_PDF,
        headers={
            "Content-Disposition": 'inline; filename="document.pdf"',
            "Cache-Control": f"public, max-age={PROXY_CACHE_TTL}",
        },
    )
