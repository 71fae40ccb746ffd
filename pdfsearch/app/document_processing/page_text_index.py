"""
Per-page text store for the phrase search.

Each page number maps to a PageText record that is created or overwritten as a whole
whenever the page's text becomes available, independent of the order in which pages
are decoded. Nothing in this module knows about phrases or matches.
"""

from typing import Dict, Iterator, List, Optional, Sequence

from pdfsearch.app.document_processing.fragment_joiner import join_fragments
from pdfsearch.app.domain.models import PageText
from pdfsearch.app.utils.logging.logger import log_debug


class PageTextIndex:
    """
    Store of indexed page texts keyed by 1-based page number.

    Used by the foreground path (pages decoded because the viewer shows them) and by the
    background scan alike.
    """

    def __init__(self):
        self._pages: Dict[int, PageText] = {}

    def set_page_text(self, page_number: int, fragments: Sequence[str]) -> PageText:
        """
        Replace the full text record of a page.

        Re-indexing a page with identical fragments keeps the existing record.

        Args:
            page_number (int): 1-based page number.
            fragments (Sequence[str]): Fragment strings in document order.

        Returns:
            PageText: The record now stored for the page.
        """
        existing = self._pages.get(page_number)
        if existing is not None and existing.fragments == tuple(fragments):
            return existing
        page_text = join_fragments(fragments)
        self._pages[page_number] = page_text
        log_debug(f"[OK] Indexed page {page_number} ({len(page_text.fragments)} fragments)")
        return page_text

    def has_page_text(self, page_number: int) -> bool:
        return page_number in self._pages

    def get_page_text(self, page_number: int) -> Optional[PageText]:
        return self._pages.get(page_number)

    def page_numbers(self) -> List[int]:
        """Return the indexed page numbers in ascending order."""
        return sorted(self._pages)

    def joined_texts(self) -> Dict[int, str]:
        """Return a snapshot of page number to joined text."""
        return {page: record.joined_text for page, record in self._pages.items()}

    def clear(self) -> None:
        self._pages = {}

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, page_number: int) -> bool:
        return page_number in self._pages

    def __iter__(self) -> Iterator[int]:
        return iter(self.page_numbers())
