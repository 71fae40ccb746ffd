"""
Services package for the document search application.
"""
from pdfsearch.app.services.document_fetch_service import DocumentFetchService
from pdfsearch.app.services.scan_scheduler import BackgroundScanScheduler, ScanState
from pdfsearch.app.services.search_session import SearchSession

__all__ = [
    "BackgroundScanScheduler",
    "DocumentFetchService",
    "ScanState",
    "SearchSession",
]
