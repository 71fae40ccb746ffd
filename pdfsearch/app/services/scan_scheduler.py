"""
Background Completion Scheduler

The foreground path only indexes the pages the viewer happens to decode. Once a phrase is
committed it must be checked against the whole document, so this service decodes and
indexes every page that is still missing from the PageTextIndex.

The scheduler is an explicit two-state machine (IDLE, SCANNING):

  * A scan starts only when the phrase is non-blank, a document is attached and no other
    scan is running. At most one scan exists at any time.
  * Missing pages are decoded in batches of ``scan_batch_size`` pages. The pages of one
    batch are decoded concurrently and the whole batch is awaited before the next one
    starts, so batches advance in ascending page order.
  * A page that fails to decode is logged and skipped; the scan continues.
  * Matches are not recomputed per page. When the scan ends, successfully or not, the
    state returns to IDLE and the completion callback runs one full recompute.

Requests are coalesced. The first request of a search starts a scan immediately; later live
edits wait for ``search_debounce_seconds`` of inactivity, each edit re-arming the wait. An
explicit submit bypasses the wait. A request that arrives while a scan is running is held
and reconsidered once that scan has returned to IDLE; a running scan is never cancelled by
an edit.
"""

import asyncio
import time
from enum import Enum
from typing import Any, Callable, List, Optional

from pdfsearch.app.configs.config_singleton import get_config
from pdfsearch.app.document_processing.page_text_index import PageTextIndex
from pdfsearch.app.domain.interfaces import DecodeError, DocumentDecoder
from pdfsearch.app.utils.logging.logger import log_info, log_warning
from pdfsearch.app.utils.system_utils.debounce import DebouncedCall
from pdfsearch.app.utils.system_utils.error_handling import SecurityAwareErrorHandler


class ScanState(Enum):
    IDLE = "idle"
    SCANNING = "scanning"


class BackgroundScanScheduler:
    """
    Drives full-document decoding and indexing for pages not yet indexed.

    Args:
        page_index: Index the decoded pages are stored in.
        decoder: Collaborator that decodes a page of the attached document.
        on_scan_complete: Called once after every scan over the current document, after
            the transition back to IDLE. Used to recompute matches and re-clamp.
        on_state_change: Optional hook receiving every state transition.
        batch_size: Pages decoded concurrently per batch (config "scan_batch_size").
        debounce_seconds: Inactivity window for live edits (config "search_debounce_seconds").
    """

    def __init__(
        self,
        page_index: PageTextIndex,
        decoder: DocumentDecoder,
        on_scan_complete: Callable[[], None],
        on_state_change: Optional[Callable[[ScanState], None]] = None,
        batch_size: Optional[int] = None,
        debounce_seconds: Optional[float] = None,
    ):
        self._page_index = page_index
        self._decoder = decoder
        self._on_scan_complete = on_scan_complete
        self._on_state_change = on_state_change
        self.batch_size = batch_size or get_config("scan_batch_size", 5)
        delay = debounce_seconds if debounce_seconds is not None else get_config("search_debounce_seconds", 0.3)
        self._debounce = DebouncedCall(self._on_debounce_elapsed, delay, name="background_scan_debounce")

        self.state = ScanState.IDLE
        self._document: Any = None
        self._page_count = 0
        # Incremented on every attach so a scan over a replaced document is discarded.
        self._generation = 0
        # Incremented on every reset; a scan only marks its own search as completed.
        self._search_epoch = 0
        self._scan_task: Optional[asyncio.Task] = None
        self._scan_completed = False
        self._deferred_phrase: Optional[str] = None

    @property
    def is_scanning(self) -> bool:
        return self.state is ScanState.SCANNING

    @property
    def has_completed_scan(self) -> bool:
        """True once a full scan has finished for the current search."""
        return self._scan_completed

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def debounce(self) -> DebouncedCall:
        return self._debounce

    def attach_document(self, document: Any, page_count: Optional[int] = None) -> None:
        """
        Switch to a new document.

        Pending requests are dropped. A scan still running over the previous document is
        left to finish but its results are discarded.
        """
        self._generation += 1
        self._document = document
        self._page_count = page_count if page_count is not None else self._decoder.page_count(document)
        self.reset_search()
        log_info(f"[OK] Attached document with {self._page_count} pages")

    def reset_search(self) -> None:
        """Forget pending requests and the completed-scan marker, e.g. when the phrase is cleared."""
        self._debounce.cancel()
        self._deferred_phrase = None
        self._scan_completed = False
        self._search_epoch += 1

    def request_scan(self, phrase: str, explicit: bool = False) -> bool:
        """
        Ask for a full scan for the committed phrase.

        Args:
            phrase (str): The committed phrase.
            explicit (bool): True for an explicit submit, False for live typing.

        Returns:
            bool: True if a scan was started by this call.
        """
        if not phrase.strip():
            self._debounce.cancel()
            self._deferred_phrase = None
            return False
        if self._document is None:
            return False
        if explicit:
            self._debounce.cancel()
            if self.is_scanning:
                self._deferred_phrase = phrase
                return False
            return self._start_scan(phrase)
        if self.is_scanning or self._scan_completed:
            self._debounce.schedule(phrase)
            return False
        return self._start_scan(phrase)

    async def wait_until_idle(self) -> None:
        """Wait for pending debounced requests and every resulting scan to finish."""
        while True:
            if self._debounce.is_pending:
                await self._debounce.wait()
                continue
            task = self._scan_task
            if task is not None and not task.done():
                await asyncio.gather(task, return_exceptions=True)
                continue
            return

    async def shutdown(self) -> None:
        """Drop pending requests and wait for a running scan to finish."""
        self._debounce.cancel()
        self._deferred_phrase = None
        task = self._scan_task
        if task is not None and not task.done():
            await asyncio.gather(task, return_exceptions=True)

    def _on_debounce_elapsed(self, phrase: str) -> None:
        if self._document is None or not phrase.strip():
            return
        if self.is_scanning:
            self._deferred_phrase = phrase
            return
        self._start_scan(phrase)

    def _set_state(self, state: ScanState) -> None:
        self.state = state
        if self._on_state_change is not None:
            self._on_state_change(state)

    def _start_scan(self, phrase: str) -> bool:
        if not phrase.strip() or self._document is None or self.is_scanning:
            return False
        self._set_state(ScanState.SCANNING)
        self._scan_task = asyncio.get_running_loop().create_task(
            self._run_scan(self._generation, self._search_epoch, self._document, self._page_count),
            name="background_scan",
        )
        return True

    async def _run_scan(self, generation: int, search_epoch: int, document: Any, page_count: int) -> None:
        start_time = time.time()
        decoded = 0
        failed = 0
        pending = [page for page in range(1, page_count + 1) if not self._page_index.has_page_text(page)]
        log_info(f"[SCAN] Starting background scan: {len(pending)} of {page_count} pages to index")
        try:
            for batch_start in range(0, len(pending), self.batch_size):
                if generation != self._generation:
                    log_info("[SCAN] Document replaced, abandoning background scan")
                    break
                # The foreground path may have indexed some of these pages meanwhile.
                batch = [
                    page for page in pending[batch_start:batch_start + self.batch_size]
                    if not self._page_index.has_page_text(page)
                ]
                results = await asyncio.gather(*(self._decode_page(document, page) for page in batch))
                if generation != self._generation:
                    log_info("[SCAN] Document replaced, discarding decoded batch")
                    break
                for page, fragments in zip(batch, results):
                    if fragments is None:
                        failed += 1
                    elif not self._page_index.has_page_text(page):
                        self._page_index.set_page_text(page, fragments)
                        decoded += 1
        except Exception as e:
            SecurityAwareErrorHandler.log_processing_error(e, "background_scan", f"pages_1_{page_count}")
        finally:
            self._set_state(ScanState.IDLE)

        if generation == self._generation:
            if search_epoch == self._search_epoch:
                self._scan_completed = True
            log_info(
                f"[SCAN] Background scan finished in {time.time() - start_time:.2f}s: "
                f"{decoded} pages indexed, {failed} failed"
            )
            self._on_scan_complete()

        deferred, self._deferred_phrase = self._deferred_phrase, None
        if deferred is not None:
            self._start_scan(deferred)

    async def _decode_page(self, document: Any, page_number: int) -> Optional[List[str]]:
        try:
            return await self._decoder.decode_page(document, page_number)
        except DecodeError as e:
            log_warning(f"[WARNING] Skipping page {page_number} in background scan: {e}")
            return None
        except Exception as e:
            SecurityAwareErrorHandler.log_processing_error(e, "background_page_decode", f"page_{page_number}")
            return None
