from pdfsearch.app.document_processing.page_text_index import PageTextIndex


class TestPageTextIndex:

    # Setting a page stores the joined text and span table
    def test_set_and_get_page_text(self):
        index = PageTextIndex()

        record = index.set_page_text(3, ["foo", "bar"])

        assert index.has_page_text(3)

        assert not index.has_page_text(1)

        assert index.get_page_text(3) is record

        assert record.joined_text == "foo bar"

    # Re-indexing with identical fragments keeps the existing record
    def test_identical_reindex_is_idempotent(self):
        index = PageTextIndex()

        first = index.set_page_text(1, ["foo", "bar"])

        second = index.set_page_text(1, ["foo", "bar"])

        assert first is second

    # Re-indexing with different fragments replaces the record wholesale
    def test_reindex_replaces(self):
        index = PageTextIndex()

        index.set_page_text(1, ["foo", "bar"])

        index.set_page_text(1, ["baz"])

        assert index.get_page_text(1).fragments == ("baz",)

        assert index.get_page_text(1).joined_text == "baz"

    # Pages can arrive in any order and are reported ascending
    def test_page_numbers_sorted(self):
        index = PageTextIndex()

        for page in (5, 2, 9, 1):
            index.set_page_text(page, [f"page {page}"])

        assert index.page_numbers() == [1, 2, 5, 9]

        assert list(index) == [1, 2, 5, 9]

        assert len(index) == 4

        assert index.joined_texts() == {1: "page 1", 2: "page 2", 5: "page 5", 9: "page 9"}

    # Clear drops every page
    def test_clear(self):
        index = PageTextIndex()

        index.set_page_text(1, ["x"])

        index.clear()

        assert len(index) == 0

        assert 1 not in index
