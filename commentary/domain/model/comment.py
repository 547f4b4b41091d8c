"""Comment entity.

Comments are threaded discussions on a commentable with unlimited depth.
Threading uses a materialized lineage: ``ancestry`` holds the ids of all
ancestors from the thread root down to the immediate parent.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import (
    CommentableRef,
    CommentId,
    UserId,
    Username,
    encode_short_id,
)
from commentary.domain.value.title import DEFAULT_TITLE_LENGTH, summarize_title

INDEX_KEY_PREFIX = "comments"
SEARCH_RECORD_NAME = "Comment"


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a commentable or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for a root comment)
    - ancestry: Lineage snapshot from the root to the parent, computed on insert
    """

    id: CommentId
    commentable: CommentableRef
    user_id: UserId
    author_username: Username  # Denormalized from users
    body_markdown: str = Field(min_length=1, max_length=25_000)
    processed_html: str = ""
    parent_id: Optional[CommentId] = None
    ancestry: tuple[CommentId, ...] = ()
    score: int = 0
    deleted: bool = False
    markdown_character_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def depth(self) -> int:
        """Nesting level (0 for a root comment)."""
        return len(self.ancestry)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def child_ancestry(self) -> tuple[CommentId, ...]:
        """Lineage a direct reply to this comment would get."""
        return (*self.ancestry, self.id)

    @property
    def id_code(self) -> str:
        """Short id used in comment paths (``1000 -> "1cc"``)."""
        return encode_short_id(self.id)

    @property
    def path(self) -> str:
        return f"/{self.author_username.root}/comment/{self.id_code}"

    @property
    def index_id(self) -> str:
        """Stable key of this comment in the search index."""
        return f"{INDEX_KEY_PREFIX}-{self.id}"

    def title(self, length: int = DEFAULT_TITLE_LENGTH) -> str:
        """Plain-text excerpt, ``"[deleted]"`` once soft-deleted."""
        return summarize_title(self.processed_html, length, deleted=self.deleted)

    def readable_publish_date(self, now: datetime | None = None) -> str:
        """Short creation date, with the year only when it is not the current one.

        Examples: ``"Mar 7"``, ``"Mar 7 '23"``.
        """
        now = now or datetime.now()
        day = f"{self.created_at:%b} {self.created_at.day}"
        if self.created_at.year == now.year:
            return day
        return f"{day} '{self.created_at:%y}"

    def descends_from(self, comment_id: CommentId) -> bool:
        return comment_id in self.ancestry
