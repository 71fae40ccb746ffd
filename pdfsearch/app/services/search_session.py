"""
Search session service.

SearchSession ties the page text index, the match computer, the global match registry and
the background scan scheduler into one explicit update pipeline: every mutator applies its
change and then calls the recompute step directly. There is no reactive graph; reads
taken after a mutator returns always see the committed recompute.

All methods run on the event loop thread. Methods that can start a background scan
(load_document, submit_phrase, edit_phrase_draft) must be called while the
loop is running.
"""

from typing import Any, List, Optional, Sequence

from pdfsearch.app.document_processing.fragment_joiner import fragments_from_text_items
from pdfsearch.app.document_processing.match_computer import compute_matches
from pdfsearch.app.document_processing.match_registry import GlobalMatchRegistry
from pdfsearch.app.document_processing.overlap_resolver import resolve_overlaps
from pdfsearch.app.document_processing.page_text_index import PageTextIndex
from pdfsearch.app.document_processing.pdf_decoder import open_document
from pdfsearch.app.domain.interfaces import DocumentDecoder, DocumentFetchError
from pdfsearch.app.domain.models import (
    FragmentHighlight,
    NavigationState,
    SearchState,
    SearchStatus,
)
from pdfsearch.app.services.document_fetch_service import DocumentFetchService
from pdfsearch.app.services.scan_scheduler import BackgroundScanScheduler, ScanState
from pdfsearch.app.utils.logging.logger import log_info, log_error


class SearchSession:
    """
    Phrase search over one loaded document.

    Args:
        decoder: Document decoder used by the background scan.
        batch_size: Optional override of the scan batch size.
        debounce_seconds: Optional override of the live-edit debounce window.
    """

    def __init__(
        self,
        decoder: DocumentDecoder,
        batch_size: Optional[int] = None,
        debounce_seconds: Optional[float] = None,
    ):
        self.decoder = decoder
        self.page_index = PageTextIndex()
        self.registry = GlobalMatchRegistry()
        self.state = SearchState()
        self.navigation = NavigationState()
        self.document: Any = None
        self.page_count: Optional[int] = None
        self.error: Optional[str] = None
        self.scheduler = BackgroundScanScheduler(
            self.page_index,
            decoder,
            on_scan_complete=self.recompute,
            on_state_change=self._on_scan_state_change,
            batch_size=batch_size,
            debounce_seconds=debounce_seconds,
        )

    # Document lifecycle

    def load_document(self, document: Any, page_count: Optional[int] = None) -> None:
        """
        Start searching a freshly loaded document.

        All page texts, matches and the current match are dropped. The committed phrase is
        kept; if it is non-blank a background scan starts for the new document.
        """
        self.document = document
        self.page_index.clear()
        self.registry.clear()
        self.state.current_global_match = None
        self.navigation.current_page_number = 1
        self.error = None
        self.scheduler.attach_document(document, page_count)
        self.page_count = self.scheduler.page_count
        if self.state.committed_phrase.strip():
            self.scheduler.request_scan(self.state.committed_phrase, explicit=True)

    async def open_url(self, url: Optional[str] = None, fetch_service: Optional[DocumentFetchService] = None) -> bool:
        """
        Download, open and load a document from a URL.

        Failures are recorded in ``error`` instead of being raised.

        Returns:
            bool: True if the document was loaded.
        """
        fetch_service = fetch_service or DocumentFetchService()
        try:
            content = await fetch_service.fetch_pdf(url)
            document = open_document(content)
        except DocumentFetchError as e:
            self.set_error(str(e))
            return False
        except Exception as e:
            log_error(f"[ERROR] Unable to open downloaded document: {e}")
            self.set_error("Error loading PDF for display.")
            return False
        self.load_document(document)
        return True

    def set_error(self, message: Optional[str]) -> None:
        self.error = message

    def set_page_text(self, page_number: int, fragments: Sequence[str]) -> None:
        """
        Store the fragments of a page decoded by the viewer.

        Matches are recomputed immediately unless a background scan is running; a running
        scan recomputes once it finishes.
        """
        self.page_index.set_page_text(page_number, fragments)
        if self.state.committed_phrase.strip() and not self.scheduler.is_scanning:
            self.recompute()

    def handle_page_text_items(self, page_number: int, payload: Any) -> bool:
        """
        Store a page from a viewer text-item payload.

        Returns:
            bool: False if the payload had an unexpected shape and was ignored.
        """
        fragments = fragments_from_text_items(payload)
        if fragments is None:
            return False
        self.set_page_text(page_number, fragments)
        return True

    # Phrase input

    def edit_phrase_draft(self, value: str) -> None:
        """Live typing: the draft is committed immediately and searched as typed."""
        self.state.draft_phrase = value
        self.state.committed_phrase = value
        self.recompute()
        self.scheduler.request_scan(value, explicit=False)

    def submit_phrase(self) -> None:
        """Explicit submit of the current draft."""
        self.state.committed_phrase = self.state.draft_phrase
        self.recompute()
        self.scheduler.request_scan(self.state.committed_phrase, explicit=True)

    def clear_phrase(self) -> None:
        self.state.draft_phrase = ""
        self.state.committed_phrase = ""
        self.registry.clear()
        self.state.current_global_match = None
        self.scheduler.reset_search()

    def recompute(self) -> None:
        """Recompute all matches for the committed phrase, then re-clamp the current match."""
        self.registry.replace(compute_matches(self.state.committed_phrase, self.page_index.joined_texts()))
        self.registry.reclamp(self.state)

    # Navigation and progress

    def next_match(self) -> Optional[int]:
        return self.registry.next_match(self.state, self.navigation)

    def prev_match(self) -> Optional[int]:
        return self.registry.prev_match(self.state, self.navigation)

    def set_current_page(self, page_number: int) -> None:
        self.navigation.current_page_number = page_number

    @property
    def total_matches(self) -> int:
        return self.registry.total_matches()

    @property
    def current_global_match(self) -> Optional[int]:
        return self.state.current_global_match

    def match_count_before_page(self, page_number: int) -> int:
        return self.registry.match_count_before_page(page_number)

    def status(self) -> SearchStatus:
        return SearchStatus(
            committed_phrase=self.state.committed_phrase,
            total_matches=self.total_matches,
            current_global_match=self.state.current_global_match,
            current_page_number=self.navigation.current_page_number,
            page_count=self.page_count,
            indexed_pages=len(self.page_index),
            is_background_scanning=self.state.is_background_scanning,
            error=self.error,
            matches_by_page=self.registry.matches_by_page(),
        )

    # Rendering

    def fragment_highlights(self, page_number: int, fragment_index: int) -> List[FragmentHighlight]:
        """
        Highlighted sub-ranges of one fragment, flagged when they belong to the current match.

        Returns an empty list for a blank phrase, an unindexed page or an unknown fragment.
        """
        if not self.state.committed_phrase.strip():
            return []
        page_text = self.page_index.get_page_text(page_number)
        if page_text is None or not 0 <= fragment_index < len(page_text.fragment_spans):
            return []
        highlights = resolve_overlaps(
            self.registry.page_matches(page_number),
            page_text.fragment_spans[fragment_index],
            len(page_text.fragments[fragment_index]),
            self.registry.match_count_before_page(page_number),
        )
        current = self.state.current_global_match
        return [
            h.model_copy(update={"is_current": h.global_index == current})
            for h in highlights
        ]

    async def wait_until_idle(self) -> None:
        await self.scheduler.wait_until_idle()

    async def close(self) -> None:
        await self.scheduler.shutdown()
        log_info("[OK] Search session closed")

    def _on_scan_state_change(self, scan_state: ScanState) -> None:
        self.state.is_background_scanning = scan_state is ScanState.SCANNING
