"""
Domain records and collaborator interfaces for the document search system.
"""
from pdfsearch.app.domain.interfaces import DecodeError, DocumentDecoder, DocumentFetchError
from pdfsearch.app.domain.models import (
    FragmentHighlight,
    FragmentSpan,
    MatchSpan,
    NavigationState,
    PageText,
    SearchState,
    SearchStatus,
)

__all__ = [
    "DecodeError",
    "DocumentDecoder",
    "DocumentFetchError",
    "FragmentHighlight",
    "FragmentSpan",
    "MatchSpan",
    "NavigationState",
    "PageText",
    "SearchState",
    "SearchStatus",
]
