"""
This module provides the DocumentFetchService class that downloads the source PDF of a
viewer session from a URL. It is used both by SearchSession.open_url and by the PDF proxy
endpoint. Network failures, non-OK upstream responses and oversized documents are reported
as DocumentFetchError carrying the HTTP status that best describes the failure.
"""

import asyncio
from typing import Optional

import aiohttp

from pdfsearch.app.configs.config_singleton import get_config
from pdfsearch.app.domain.interfaces import DocumentFetchError
from pdfsearch.app.utils.constant.constant import CHUNK_SIZE, FETCH_USER_AGENT
from pdfsearch.app.utils.logging.logger import log_info
from pdfsearch.app.utils.system_utils.error_handling import SecurityAwareErrorHandler


class DocumentFetchService:
    """
    Downloads PDF documents over HTTP(S) with a timeout and a size cap.
    """

    def __init__(
            self,
            timeout: Optional[float] = None,
            max_size_bytes: Optional[int] = None,
            user_agent: str = FETCH_USER_AGENT,
    ):
        self.timeout = timeout if timeout is not None else get_config("pdf_fetch_timeout", 30.0)
        self.max_size_bytes = max_size_bytes or get_config("max_pdf_size_bytes", 25 * 1024 * 1024)
        self.user_agent = user_agent

    async def fetch_pdf(self, url: Optional[str] = None) -> bytes:
        """
        Download a PDF document.

        Args:
            url: Document URL; the configured default document when omitted.

        Returns:
            bytes: The document content.

        Raises:
            DocumentFetchError: If the download fails, the upstream answers with a non-OK
                status or the document exceeds the size limit.
        """
        url = url or get_config("default_pdf_url")
        headers = {"User-Agent": self.user_agent}
        try:
            # Open an asynchronous HTTP session bounded by the configured timeout.
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
                async with session.get(url, headers=headers) as resp:
                    if resp.status < 200 or resp.status >= 300:
                        raise DocumentFetchError(
                            f"Failed to download PDF (status {resp.status})", status_code=resp.status
                        )
                    if resp.content_length is not None and resp.content_length > self.max_size_bytes:
                        raise DocumentFetchError("PDF exceeds the maximum allowed size", status_code=413)
                    # The cap also applies to bodies sent without Content-Length.
                    content = bytearray()
                    async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
                        content.extend(chunk)
                        if len(content) > self.max_size_bytes:
                            raise DocumentFetchError("PDF exceeds the maximum allowed size", status_code=413)
        except aiohttp.ClientError as e:
            SecurityAwareErrorHandler.log_processing_error(e, "pdf_fetch", url)
            raise DocumentFetchError("Failed to fetch PDF", status_code=502) from e
        except asyncio.TimeoutError as e:
            SecurityAwareErrorHandler.log_processing_error(e, "pdf_fetch", url)
            raise DocumentFetchError("Timed out downloading PDF", status_code=504) from e

        log_info(f"[OK] Downloaded PDF ({len(content)} bytes)")
        return bytes(content)
