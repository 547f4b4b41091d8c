"""Markdown to HTML rendering for comment bodies.

Comments are rendered with markdown-it (CommonMark plus tables,
strikethrough and bare-URL autolinking) and then reduced to a fixed
allow-list of tags and attributes.

=== SANITIZATION ===

- Tags outside ALLOWED_TAGS are unwrapped (their text is kept)
- Tags in DROPPED_TAGS are removed together with their content
- Attributes outside ALLOWED_ATTRIBUTES are removed (event handlers included)
- href/src must be relative, http(s) or mailto
"""

import re
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Comment as HtmlComment
from markdown_it import MarkdownIt

ALLOWED_TAGS = frozenset(
    {
        "a", "abbr", "b", "blockquote", "br", "code", "del", "em",
        "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "li",
        "ol", "p", "pre", "s", "span", "strong", "sub", "sup", "table",
        "tbody", "td", "th", "thead", "tr", "ul",
    }
)  # fmt: skip

DROPPED_TAGS = frozenset(
    {"script", "style", "iframe", "object", "embed", "form", "noscript", "svg"}
)

ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title", "rel", "class"}),
    "abbr": frozenset({"title"}),
    "code": frozenset({"class"}),
    "img": frozenset({"src", "alt", "title"}),
    "ol": frozenset({"start"}),
    "td": frozenset({"style"}),
    "th": frozenset({"style"}),
}

URL_ATTRIBUTES = frozenset({"href", "src"})
SAFE_SCHEMES = frozenset({"", "http", "https", "mailto"})
ALIGN_STYLE = re.compile(r"^text-align:\s*(left|right|center)$")


def is_safe_url(url: str) -> bool:
    """Check if a URL is safe to link to.

    Blocks javascript:, data:, and other dangerous protocols.
    """
    try:
        scheme = urlsplit(url.strip()).scheme.lower()
    except ValueError:
        return False
    return scheme in SAFE_SCHEMES


class MarkdownRenderer:
    """Renders comment markdown to sanitized HTML."""

    def __init__(self) -> None:
        self._parser = MarkdownIt(
            "commonmark", {"html": True, "linkify": True}
        ).enable(["linkify", "table", "strikethrough"])

    def render(self, markdown: str) -> str:
        """Render markdown to sanitized HTML.

        Args:
            markdown: Raw comment markdown

        Returns:
            HTML restricted to the allow-list
        """
        return sanitize_html(self._parser.render(markdown))


def sanitize_html(html: str) -> str:
    """Reduce arbitrary HTML to the comment allow-list."""
    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda s: isinstance(s, HtmlComment)):
        comment.extract()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        if tag.name in DROPPED_TAGS:
            tag.decompose()
            continue
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue

        allowed = ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
        for name in list(tag.attrs):
            value = tag.attrs[name]
            if name not in allowed:
                del tag.attrs[name]
            elif name in URL_ATTRIBUTES and not is_safe_url(value):
                del tag.attrs[name]
            elif name == "style" and not ALIGN_STYLE.match(value.strip()):
                del tag.attrs[name]

    return str(soup)
