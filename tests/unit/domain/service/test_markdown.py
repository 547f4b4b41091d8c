"""Unit tests for markdown rendering and sanitization."""

from commentary.domain.service.markdown import (
    MarkdownRenderer,
    is_safe_url,
    sanitize_html,
)


class TestMarkdownRenderer:
    """Tests for MarkdownRenderer.render."""

    def test_renders_basic_markdown(self):
        html = MarkdownRenderer().render("**bold** and *em*")

        assert "<strong>bold</strong>" in html
        assert "<em>em</em>" in html
        assert html.startswith("<p>")

    def test_autolinks_bare_urls(self):
        html = MarkdownRenderer().render("see https://example.com/page")

        assert '<a href="https://example.com/page">https://example.com/page</a>' in html

    def test_script_blocks_removed_with_content(self):
        html = MarkdownRenderer().render("<script>alert(1)</script>\n\nhello")

        assert "script" not in html
        assert "alert" not in html
        assert "hello" in html

    def test_event_handlers_stripped(self):
        html = MarkdownRenderer().render(
            'click <a href="https://example.com" onclick="evil()">here</a>'
        )

        assert "onclick" not in html
        assert 'href="https://example.com"' in html

    def test_javascript_links_never_become_hrefs(self):
        html = MarkdownRenderer().render("[x](javascript:alert(1))")

        assert 'href="javascript' not in html

    def test_code_spans_kept_verbatim(self):
        html = MarkdownRenderer().render("use `@alice` here")

        assert "<code>@alice</code>" in html


class TestSanitizeHtml:
    """Tests for sanitize_html."""

    def test_disallowed_tags_unwrapped(self):
        assert sanitize_html("<div><b>x</b></div>") == "<b>x</b>"

    def test_disallowed_attributes_removed(self):
        assert sanitize_html('<span style="color:red">x</span>') == "<span>x</span>"

    def test_table_alignment_kept(self):
        html = '<table><tr><td style="text-align: center">x</td></tr></table>'

        assert 'style="text-align: center"' in sanitize_html(html)

    def test_unsafe_image_source_removed(self):
        html = sanitize_html('<img src="data:image/png;base64,AAAA" alt="pic">')

        assert "data:" not in html
        assert 'alt="pic"' in html

    def test_html_comments_removed(self):
        assert sanitize_html("<p>a<!-- hidden -->b</p>") == "<p>ab</p>"

    def test_iframe_removed(self):
        assert sanitize_html('<p>x</p><iframe src="https://e.com"></iframe>') == "<p>x</p>"


class TestIsSafeUrl:
    def test_safe_urls(self):
        assert is_safe_url("https://example.com")
        assert is_safe_url("/relative/path")
        assert is_safe_url("mailto:someone@example.com")

    def test_unsafe_urls(self):
        assert not is_safe_url("javascript:alert(1)")
        assert not is_safe_url("data:text/html,hi")
        assert not is_safe_url("vbscript:msgbox")
