from pdfsearch.app.document_processing.fragment_joiner import join_fragments
from pdfsearch.app.document_processing.match_computer import compute_matches
from pdfsearch.app.document_processing.overlap_resolver import resolve_overlaps
from pdfsearch.app.domain.models import FragmentHighlight, FragmentSpan, MatchSpan


class TestResolveOverlaps:

    # A match spanning two fragments yields one clamped entry per fragment
    def test_match_across_two_fragments(self):
        page_text = join_fragments(["say hello", "world now"])

        matches = compute_matches("hello world", {1: page_text.joined_text})[1]

        first = resolve_overlaps(matches, page_text.fragment_spans[0], len(page_text.fragments[0]), 0)

        second = resolve_overlaps(matches, page_text.fragment_spans[1], len(page_text.fragments[1]), 0)

        assert first == [FragmentHighlight(local_start=4, local_end=9, global_index=0)]

        assert second == [FragmentHighlight(local_start=0, local_end=5, global_index=0)]

        assert page_text.fragments[0][4:9] == "hello"

        assert page_text.fragments[1][0:5] == "world"

    # Several matches in one fragment are ordered and numbered globally
    def test_multiple_matches_in_fragment(self):
        matches = [MatchSpan(start=0, end=2), MatchSpan(start=5, end=7), MatchSpan(start=20, end=22)]

        result = resolve_overlaps(matches, FragmentSpan(start=0, end=10), 10, matches_before_page=7)

        assert result == [
            FragmentHighlight(local_start=0, local_end=2, global_index=7),
            FragmentHighlight(local_start=5, local_end=7, global_index=8),
        ]

    # Touching ranges are not overlaps
    def test_touching_is_not_overlap(self):
        matches = [MatchSpan(start=0, end=5), MatchSpan(start=11, end=14)]

        assert resolve_overlaps(matches, FragmentSpan(start=5, end=10), 5, 0) == []

    # A match covering the whole fragment is clamped to the fragment length
    def test_clamped_to_fragment(self):
        result = resolve_overlaps([MatchSpan(start=2, end=30)], FragmentSpan(start=6, end=11), 5, 3)

        assert result == [FragmentHighlight(local_start=0, local_end=5, global_index=3)]

    # Results are sorted by local start even if matches arrive unordered
    def test_sorted_by_local_start(self):
        matches = [MatchSpan(start=8, end=9), MatchSpan(start=1, end=3)]

        result = resolve_overlaps(matches, FragmentSpan(start=0, end=10), 10, 0)

        assert [h.local_start for h in result] == [1, 8]

        assert [h.global_index for h in result] == [1, 0]

    # Zero-length fragments never overlap anything
    def test_empty_fragment(self):
        assert resolve_overlaps([MatchSpan(start=0, end=10)], FragmentSpan(start=4, end=4), 0, 0) == []
