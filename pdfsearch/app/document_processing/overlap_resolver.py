"""
Overlap Resolver Module

Given one page's match spans and the span of one fragment on that page, returns the parts
of the fragment's own text that fall inside matches. A fragment may hold several matches
and a match may run over consecutive fragments; each fragment then reports its own partial
overlap. Offsets are clamped to the fragment text so the renderer can splice highlight
markers without touching unmatched characters.

The resolver takes the number of matches on lower-numbered pages instead of the page
number, so it stays independent of the match registry. SearchSession.fragment_highlights
looks that count up with GlobalMatchRegistry.match_count_before_page(page) and passes it in.
"""

from typing import List, Sequence

from pdfsearch.app.domain.models import FragmentHighlight, FragmentSpan, MatchSpan


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def resolve_overlaps(
    page_matches: Sequence[MatchSpan],
    fragment_span: FragmentSpan,
    fragment_text_length: int,
    matches_before_page: int,
) -> List[FragmentHighlight]:
    """
    Compute the highlighted sub-ranges of a fragment.

    Args:
        page_matches (Sequence[MatchSpan]): Match spans of the page, in scan order.
        fragment_span (FragmentSpan): Span of the fragment inside the joined page text.
        fragment_text_length (int): Length of the fragment text as rendered.
        matches_before_page (int): Number of matches on lower-numbered pages.

    Returns:
        List[FragmentHighlight]: Overlaps ordered by local_start.
    """
    highlights = []
    for ordinal, match in enumerate(page_matches):
        # Strict overlap: touching ranges do not count.
        if max(match.start, fragment_span.start) >= min(match.end, fragment_span.end):
            continue
        highlights.append(
            FragmentHighlight(
                local_start=_clamp(match.start - fragment_span.start, 0, fragment_text_length),
                local_end=_clamp(match.end - fragment_span.start, 0, fragment_text_length),
                global_index=matches_before_page + ordinal,
            )
        )
    highlights.sort(key=lambda highlight: highlight.local_start)
    return highlights
