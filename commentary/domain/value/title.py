"""Plain-text titles derived from processed comment HTML."""

from bs4 import BeautifulSoup

DELETED_TITLE = "[deleted]"
ELLIPSIS = "..."
DEFAULT_TITLE_LENGTH = 80


def summarize_title(
    processed_html: str, length: int = DEFAULT_TITLE_LENGTH, deleted: bool = False
) -> str:
    """Build a short plain-text excerpt of a comment.

    Tags are stripped and entities decoded, so ``&#39;`` renders as ``'``.
    When the text is longer than ``length`` it is cut and ``"..."`` is
    appended, keeping the result at exactly ``length`` characters.

    Args:
        processed_html: Enriched comment HTML
        length: Maximum length of the excerpt, ellipsis included
        deleted: Whether the comment is soft-deleted

    Returns:
        The excerpt, or ``"[deleted]"`` for deleted comments
    """
    if deleted:
        return DELETED_TITLE

    text = BeautifulSoup(processed_html or "", "html.parser").get_text().strip()
    if len(text) <= length:
        return text
    if length <= len(ELLIPSIS):
        return ELLIPSIS[:length]
    return text[: length - len(ELLIPSIS)] + ELLIPSIS
