"""
Match Computer Module

Finds every occurrence of a search phrase in the joined text of the indexed pages.

Matching is literal and case-insensitive. The trimmed phrase is split into terms on runs
of whitespace, every term is escaped on its own, and the escaped terms are joined with a
one-or-more-whitespace pattern. A multi-word phrase therefore matches across the space
inserted between fragments as well as across whitespace inside a fragment. Matches are
reported in regex scan order: non-overlapping and leftmost-first.

The computation is always total. Whenever the phrase or any page text changes the caller
recomputes every known page; results are never patched incrementally.
"""

import re
from typing import Dict, List, Mapping, Optional, Pattern

from pdfsearch.app.domain.models import MatchSpan


def build_phrase_pattern(phrase: str) -> Optional[Pattern]:
    """
    Compile the search pattern for a phrase.

    Args:
        phrase (str): The phrase as typed; may contain regex metacharacters.

    Returns:
        Optional[Pattern]: The compiled pattern, or None for a blank phrase.
    """
    terms = [term for term in re.split(r"\s+", phrase.strip()) if term]
    if not terms:
        return None
    return re.compile(r"\s+".join(re.escape(term) for term in terms), re.IGNORECASE)


def compute_page_matches(pattern: Pattern, joined_text: str) -> List[MatchSpan]:
    """
    Scan one page's joined text for all non-overlapping occurrences.

    Args:
        pattern (Pattern): Pattern from build_phrase_pattern.
        joined_text (str): Joined text of the page.

    Returns:
        List[MatchSpan]: Match spans ordered by start offset.
    """
    return [MatchSpan(start=m.start(), end=m.end()) for m in pattern.finditer(joined_text)]


def compute_matches(phrase: str, page_texts: Mapping[int, str]) -> Dict[int, List[MatchSpan]]:
    """
    Compute the match spans of a phrase on every page whose text is known.

    Args:
        phrase (str): The committed search phrase.
        page_texts (Mapping[int, str]): Page number to joined page text.

    Returns:
        Dict[int, List[MatchSpan]]: One entry per known page (possibly empty), or an
        empty mapping when the phrase is blank.
    """
    pattern = build_phrase_pattern(phrase)
    if pattern is None:
        return {}
    return {
        page_number: compute_page_matches(pattern, joined_text)
        for page_number, joined_text in page_texts.items()
    }
