"""In-memory comment repository for testing."""

from itertools import count
from typing import Optional

from commentary.domain.model.comment import Comment
from commentary.domain.repository.comment import CommentRepository
from commentary.domain.value import CommentableRef, CommentId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._ids = count(1)

    async def next_id(self) -> CommentId:
        """Reserve the next comment id."""
        next_id = next(self._ids)
        while next_id in self._comments:
            next_id = next(self._ids)
        return CommentId(next_id)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_commentable(self, commentable: CommentableRef) -> list[Comment]:
        """Find every comment of a thread, deleted ones included."""
        comments = [c for c in self._comments.values() if c.commentable == commentable]
        comments.sort(key=lambda c: c.id)
        return comments

    async def exists_duplicate(
        self,
        body_markdown: str,
        user_id: UserId,
        ancestry: tuple[CommentId, ...],
        commentable: CommentableRef,
        exclude_id: Optional[CommentId] = None,
    ) -> bool:
        """Check whether the same user already posted this text at this thread position."""
        return any(
            c.body_markdown == body_markdown
            and c.user_id == user_id
            and c.ancestry == ancestry
            and c.commentable == commentable
            and c.id != exclude_id
            for c in self._comments.values()
        )

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        self._comments.pop(comment_id, None)
