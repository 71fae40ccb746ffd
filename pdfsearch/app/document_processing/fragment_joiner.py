"""
Fragment Joiner Module

Turns the ordered text fragments of one page into the single string that the phrase
search runs over, and records where each fragment lives inside that string.

Consecutive fragments are separated by exactly one space (none after the last one), so
a phrase broken across two fragments still matches, and every fragment span excludes the
separator. Empty fragments keep a zero-length span and still receive separators on both
sides, which keeps span positions aligned with fragment ordinals.

The module also normalizes the text-item payloads reported by viewers (plain strings,
``{"str": ...}`` items, or an ``{"items": [...]}`` wrapper) into a fragment list.
"""

from typing import Any, List, Optional, Sequence

from pdfsearch.app.domain.models import FragmentSpan, PageText
from pdfsearch.app.utils.constant.constant import FRAGMENT_SEPARATOR
from pdfsearch.app.utils.logging.logger import log_warning


def join_fragments(fragments: Sequence[str]) -> PageText:
    """
    Build the joined page text and the fragment span table.

    Args:
        fragments (Sequence[str]): Fragment strings in document order.

    Returns:
        PageText: The fragments, their space-joined text and one span per fragment.
    """
    # Initialize the span table.
    spans = []
    # Set current index to start at zero.
    current_index = 0
    for text in fragments:
        start_idx = current_index
        end_idx = start_idx + len(text)
        spans.append(FragmentSpan(start=start_idx, end=end_idx))
        # Skip over the separator that precedes the next fragment.
        current_index = end_idx + len(FRAGMENT_SEPARATOR)
    joined_text = FRAGMENT_SEPARATOR.join(fragments)
    return PageText(
        fragments=tuple(fragments),
        joined_text=joined_text,
        fragment_spans=tuple(spans),
    )


def fragments_from_text_items(payload: Any) -> Optional[List[str]]:
    """
    Normalize a viewer's text-item payload into a list of fragment strings.

    Accepted shapes are a list of strings, a list of mappings carrying the text under
    "str" or "text", or a mapping with such a list under "items". Items without text
    become empty fragments so ordinals stay aligned with the rendered items.

    Args:
        payload (Any): The payload reported for a decoded page.

    Returns:
        Optional[List[str]]: The fragments, or None when the payload has an unexpected shape.
    """
    items = payload.get("items") if isinstance(payload, dict) else payload
    if not isinstance(items, (list, tuple)):
        log_warning(f"[WARNING] Unexpected text item payload of type {type(payload).__name__}")
        return None

    fragments = []
    for item in items:
        if isinstance(item, str):
            fragments.append(item)
        elif isinstance(item, dict):
            text = item.get("str", item.get("text"))
            fragments.append(text if isinstance(text, str) else "")
        else:
            fragments.append("")
    return fragments
