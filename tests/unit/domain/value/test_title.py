"""Unit tests for comment title summaries."""

from commentary.domain.value.title import DELETED_TITLE, summarize_title


class TestSummarizeTitle:
    """Tests for summarize_title."""

    def test_short_text_returned_unchanged(self):
        assert summarize_title("<p>Hello world</p>") == "Hello world"

    def test_tags_stripped_and_entities_decoded(self):
        html = '<p>It&#39;s <a href="/bob">@bob</a> &amp; <em>friends</em></p>'
        assert summarize_title(html) == "It's @bob & friends"

    def test_long_text_truncated_to_exact_length(self):
        html = "<p>" + "x" * 200 + "</p>"

        title = summarize_title(html, length=80)

        assert len(title) == 80
        assert title == "x" * 77 + "..."

    def test_text_exactly_at_length_not_truncated(self):
        assert summarize_title("<p>" + "y" * 80 + "</p>") == "y" * 80

    def test_tiny_length(self):
        assert summarize_title("<p>abcdef</p>", length=2) == ".."

    def test_deleted_comment(self):
        assert summarize_title("<p>anything</p>", deleted=True) == DELETED_TITLE
        assert DELETED_TITLE == "[deleted]"

    def test_empty_html(self):
        assert summarize_title("") == ""
