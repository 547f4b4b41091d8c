"""Commentable content items.

A comment thread always hangs off one published content item. The set of
content types is closed: articles and podcast episodes. Both expose the
same small capability interface used while processing comments.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentableId, CommentableRef, CommentableType, UserId


def _with_offset(url: str, offset_seconds: int) -> str:
    """Return ``url`` with its ``t`` query parameter set to ``offset_seconds``."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query) if k != "t"]
    query.append(("t", str(offset_seconds)))
    return urlunsplit(parts._replace(query=urlencode(query)))


class Article(DomainModel):
    """Article that may embed a video."""

    type: Literal[CommentableType.ARTICLE] = CommentableType.ARTICLE
    id: CommentableId
    user_id: UserId
    title: str = Field(min_length=1, max_length=250)
    path: str
    published: bool = False
    video: Optional[str] = None  # Video source URL
    published_at: Optional[datetime] = None

    @property
    def ref(self) -> CommentableRef:
        return CommentableRef(type=self.type, id=self.id)

    def is_published(self) -> bool:
        return self.published

    def has_video(self) -> bool:
        return bool(self.video)

    def video_seek_url(self, offset_seconds: int) -> str:
        """URL of the video starting ``offset_seconds`` in.

        Raises:
            ValueError: If the article has no video
        """
        if not self.video:
            raise ValueError(f"Article {self.id} has no video")
        return _with_offset(self.video, offset_seconds)


class PodcastEpisode(DomainModel):
    """Podcast episode (audio only, never video-backed)."""

    type: Literal[CommentableType.PODCAST_EPISODE] = CommentableType.PODCAST_EPISODE
    id: CommentableId
    user_id: Optional[UserId] = None  # Podcast owner, if any
    title: str = Field(min_length=1)
    path: str
    published: bool = True
    media_url: Optional[str] = None

    @property
    def ref(self) -> CommentableRef:
        return CommentableRef(type=self.type, id=self.id)

    def is_published(self) -> bool:
        return self.published

    def has_video(self) -> bool:
        return False

    def video_seek_url(self, offset_seconds: int) -> str:
        raise ValueError(f"Podcast episode {self.id} has no video")


Commentable = Annotated[Union[Article, PodcastEpisode], Field(discriminator="type")]
