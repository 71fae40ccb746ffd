"""
Global Match Registry Module

Aggregates the per-page match sets into one document-wide ordering (page ascending, then
start offset ascending) and translates between global match indices and pages.

The registry owns the latest match sets only. The current match lives in SearchState and
the focused page in NavigationState; the navigation methods here update both after every
step. Counts before a page are summed with a linear walk over the lower-numbered pages
on every call.
"""

from typing import Dict, List, Mapping, Optional

from pdfsearch.app.domain.models import MatchSpan, NavigationState, SearchState


class GlobalMatchRegistry:
    """
    Document-wide ordering of phrase matches.

    Methods:
        replace(page_matches): Install a freshly computed set of page matches.
        total_matches(): Number of matches across all pages.
        page_for_global_index(idx): Page owning a global match index.
        match_count_before_page(page): Matches on pages numbered strictly lower.
        reclamp(state): Keep the current match inside the valid range.
        next_match(state, navigation) / prev_match(state, navigation): Wrap-around navigation.
    """

    def __init__(self):
        self._page_matches: Dict[int, List[MatchSpan]] = {}

    def replace(self, page_matches: Mapping[int, List[MatchSpan]]) -> None:
        self._page_matches = {page: list(spans) for page, spans in page_matches.items()}

    def clear(self) -> None:
        self._page_matches = {}

    def page_matches(self, page_number: int) -> List[MatchSpan]:
        return self._page_matches.get(page_number, [])

    def match_count(self, page_number: int) -> int:
        return len(self._page_matches.get(page_number, []))

    def matches_by_page(self) -> Dict[int, int]:
        return {page: len(spans) for page, spans in sorted(self._page_matches.items())}

    def total_matches(self) -> int:
        return sum(len(spans) for spans in self._page_matches.values())

    def match_count_before_page(self, page_number: int) -> int:
        """Sum the matches of every page numbered strictly below page_number."""
        return sum(len(spans) for page, spans in self._page_matches.items() if page < page_number)

    def page_for_global_index(self, index: int) -> Optional[int]:
        """
        Find the page that owns a global match index.

        Args:
            index (int): 0-based global match index.

        Returns:
            Optional[int]: The page number, or None when index is outside [0, total).
        """
        if index < 0:
            return None
        seen = 0
        for page in sorted(self._page_matches):
            count = len(self._page_matches[page])
            if index < seen + count:
                return page
            seen += count
        return None

    def reclamp(self, state: SearchState) -> Optional[int]:
        """
        Bring the current match back into range after a recompute.

        A blank committed phrase or an empty result clears the selection; a missing or
        out-of-range selection moves to the first match; anything else is kept so the
        user's position survives incremental updates.

        Args:
            state (SearchState): State whose current_global_match is adjusted in place.

        Returns:
            Optional[int]: The resulting current match.
        """
        total = self.total_matches()
        if not state.committed_phrase.strip() or total == 0:
            state.current_global_match = None
        elif state.current_global_match is None or not 0 <= state.current_global_match < total:
            state.current_global_match = 0
        return state.current_global_match

    def next_match(self, state: SearchState, navigation: NavigationState) -> Optional[int]:
        total = self.total_matches()
        if total == 0:
            return state.current_global_match
        if state.current_global_match is None:
            state.current_global_match = 0
        else:
            state.current_global_match = (state.current_global_match + 1) % total
        self._focus_current(state, navigation)
        return state.current_global_match

    def prev_match(self, state: SearchState, navigation: NavigationState) -> Optional[int]:
        total = self.total_matches()
        if total == 0:
            return state.current_global_match
        if state.current_global_match is None:
            state.current_global_match = total - 1
        else:
            state.current_global_match = (state.current_global_match - 1 + total) % total
        self._focus_current(state, navigation)
        return state.current_global_match

    def _focus_current(self, state: SearchState, navigation: NavigationState) -> None:
        page = self.page_for_global_index(state.current_global_match)
        if page is not None and page != navigation.current_page_number:
            navigation.current_page_number = page
