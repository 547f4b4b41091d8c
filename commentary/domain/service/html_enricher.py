"""Post-processing of rendered comment HTML.

The enricher runs a fixed pipeline over the renderer's output. Order
matters: mention links are internal and must not pick up ``nofollow``,
and timestamps are only searched for in text that is not already linked.

1. ``rel="nofollow"`` on every external link
2. ``@username`` -> profile link, for known users only
3. Long visible URLs shortened with an ellipsis (href untouched)
4. ``H:MM:SS`` / ``MM:SS`` / ``:SS`` -> video seek link, video commentables only
"""

import re
from typing import Callable, Iterable, Mapping, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, NavigableString, Tag

from commentary.domain.model.commentable import Commentable

# Characters that may appear in the local part of an e-mail address. When one
# of them (or a word character) sits right before "@", the "@" belongs to an
# address like hello@alice.com and is not a mention.
EMAIL_LOCAL_PART_CHARS = r"\w!#$%&'*+/=?^`{|}~.@-"

MENTION_PATTERN = re.compile(rf"(?<![{EMAIL_LOCAL_PART_CHARS}])@(\w+)")

TIMESTAMP_PATTERN = re.compile(r"(?<![\w:])(?:(\d{1,2}):)?(\d{0,2}):(\d{2})(?![\w:])")

URL_TEXT_PATTERN = re.compile(r"^(?:https?://|www\.)\S+$", re.IGNORECASE)

ELLIPSIS = "..."
MENTION_CLASS = "comment-mentioned-user"
TIMESTAMP_CLASS = "video-timestamp"

# Text inside these tags is never rewritten into links
INERT_TAGS = ["a", "code", "pre"]


def mention_candidates(text: str) -> set[str]:
    """Lowercased usernames that appear as ``@username`` in ``text``."""
    return {match.group(1).lower() for match in MENTION_PATTERN.finditer(text)}


def timestamp_seconds(match: re.Match[str]) -> Optional[int]:
    """Offset in seconds for a timestamp match, None if it isn't a clock value."""
    hours, minutes, seconds = match.groups()
    if int(seconds) >= 60 or (hours is not None and int(minutes or 0) >= 60):
        return None
    return int(hours or 0) * 3600 + int(minutes or 0) * 60 + int(seconds)


class HtmlEnricher:
    """Adds links and link attributes to rendered comment HTML.

    Stateless apart from configuration, so one instance can serve
    concurrent comments.
    """

    def __init__(self, app_domain: str, url_display_limit: int = 60) -> None:
        """Initialize enricher.

        Args:
            app_domain: Host whose links count as internal
            url_display_limit: Visible URLs longer than this are shortened
        """
        self.app_domain = app_domain.lower()
        self.url_display_limit = url_display_limit

    def enrich(
        self,
        html: str,
        mention_paths: Mapping[str, str],
        commentable: Optional[Commentable] = None,
        linked_mentions: Optional[set[str]] = None,
    ) -> str:
        """Run the enrichment pipeline.

        Args:
            html: Rendered, sanitized comment HTML
            mention_paths: Lowercased username -> profile path of known users
            commentable: Thread root; timestamps are linked only if it has video
            linked_mentions: If given, receives the lowercased usernames this
                call turned into mention links

        Returns:
            Enriched HTML
        """
        soup = BeautifulSoup(html, "html.parser")

        self._nofollow_external_links(soup)
        self._link_mentions(soup, mention_paths, linked_mentions)
        self._shorten_urls(soup)
        if commentable is not None and commentable.has_video():
            self._link_timestamps(soup, commentable.video_seek_url)

        return str(soup)

    def is_internal(self, href: str) -> bool:
        """Whether a link target stays on this site."""
        try:
            parts = urlsplit(href.strip())
        except ValueError:
            return False
        if not parts.scheme and not parts.netloc:
            return True
        if parts.scheme not in ("http", "https", ""):
            return False
        return parts.netloc.lower() in (self.app_domain, f"www.{self.app_domain}")

    def _nofollow_external_links(self, soup: BeautifulSoup) -> None:
        for anchor in soup.find_all("a", href=True):
            if self.is_internal(anchor["href"]):
                continue
            rel = anchor.get("rel") or []
            if isinstance(rel, str):
                rel = rel.split()
            if "nofollow" not in rel:
                anchor["rel"] = [*rel, "nofollow"]

    def _link_mentions(
        self,
        soup: BeautifulSoup,
        mention_paths: Mapping[str, str],
        linked_mentions: Optional[set[str]] = None,
    ) -> None:
        if not mention_paths:
            return

        def make_link(match: re.Match[str]) -> Optional[Tag]:
            username = match.group(1).lower()
            path = mention_paths.get(username)
            if path is None:
                return None
            if linked_mentions is not None:
                linked_mentions.add(username)
            anchor = soup.new_tag("a", attrs={"class": MENTION_CLASS, "href": path})
            anchor.string = match.group(0)  # Keep the casing as typed
            return anchor

        _replace_in_text(soup, MENTION_PATTERN, make_link)

    def _shorten_urls(self, soup: BeautifulSoup) -> None:
        for anchor in soup.find_all("a"):
            if len(anchor.contents) != 1 or type(anchor.contents[0]) is not NavigableString:
                continue
            text = str(anchor.contents[0])
            if len(text) <= self.url_display_limit or not URL_TEXT_PATTERN.match(text):
                continue
            anchor.string = text[: self.url_display_limit] + ELLIPSIS

    def _link_timestamps(
        self, soup: BeautifulSoup, seek_url: Callable[[int], str]
    ) -> None:
        def make_link(match: re.Match[str]) -> Optional[Tag]:
            offset = timestamp_seconds(match)
            if offset is None:
                return None
            anchor = soup.new_tag(
                "a", attrs={"class": TIMESTAMP_CLASS, "href": seek_url(offset)}
            )
            anchor.string = match.group(0)
            return anchor

        _replace_in_text(soup, TIMESTAMP_PATTERN, make_link)


def _replace_in_text(
    soup: BeautifulSoup,
    pattern: re.Pattern[str],
    make_link: Callable[[re.Match[str]], Optional[Tag]],
) -> None:
    """Replace pattern matches in plain text nodes with generated links.

    Text inside INERT_TAGS is skipped. ``make_link`` returns None to leave
    a match as plain text.
    """
    for node in list(soup.find_all(string=pattern)):
        if type(node) is not NavigableString or node.find_parent(INERT_TAGS):
            continue

        text = str(node)
        pieces: list[str | Tag] = []
        cursor = 0
        for match in pattern.finditer(text):
            link = make_link(match)
            if link is None:
                continue
            pieces.append(text[cursor : match.start()])
            pieces.append(link)
            cursor = match.end()

        if not pieces:
            continue
        pieces.append(text[cursor:])
        node.replace_with(*_non_empty(pieces))


def _non_empty(pieces: Iterable[str | Tag]) -> list[str | Tag]:
    return [piece for piece in pieces if not isinstance(piece, str) or piece]
