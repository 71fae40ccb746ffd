"""
Core records for page-text indexing and phrase search.

Spans are half-open character ranges into a page's joined text. PageText is replaced
wholesale whenever a page is (re)decoded; match spans are derived data and are always
recomputed from PageText and the committed phrase, never patched.

Classes:
    FragmentSpan: Character range of one fragment inside the joined page text.
    PageText: Fragments of one page, their joined text and the fragment span table.
    MatchSpan: Character range of one phrase occurrence inside the joined page text.
    FragmentHighlight: Part of a fragment covered by a match, for highlight rendering.
    SearchState: Draft/committed phrase, current match and background scan flag.
    NavigationState: Page the viewer is focused on.
    SearchStatus: Snapshot of the search for progress display.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class FragmentSpan(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int
    end: int


class MatchSpan(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int
    end: int


class PageText(BaseModel):
    """
    Indexed text of a single page.

    Attributes:
        fragments (Tuple[str, ...]): Fragment strings in document order.
        joined_text (str): The fragments joined with a single space.
        fragment_spans (Tuple[FragmentSpan, ...]): One span per fragment, in the same order.
    """
    model_config = ConfigDict(frozen=True)

    fragments: Tuple[str, ...]
    joined_text: str
    fragment_spans: Tuple[FragmentSpan, ...]


class FragmentHighlight(BaseModel):
    """
    Sub-range of a fragment's own text that lies inside a match.

    Attributes:
        local_start (int): Start offset into the fragment text.
        local_end (int): End offset into the fragment text.
        global_index (int): Position of the match in document order.
        is_current (bool): True for the selected match.
    """
    model_config = ConfigDict(frozen=True)

    local_start: int
    local_end: int
    global_index: int
    is_current: bool = False


class SearchState(BaseModel):
    draft_phrase: str = ""
    committed_phrase: str = ""
    current_global_match: Optional[int] = None
    is_background_scanning: bool = False


class NavigationState(BaseModel):
    current_page_number: int = 1


class SearchStatus(BaseModel):
    """Snapshot read by the toolbar for progress display."""
    committed_phrase: str
    total_matches: int
    current_global_match: Optional[int] = None
    current_page_number: int
    page_count: Optional[int] = None
    indexed_pages: int
    is_background_scanning: bool
    error: Optional[str] = None
    matches_by_page: Dict[int, int] = Field(default_factory=dict)
