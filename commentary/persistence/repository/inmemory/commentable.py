"""In-memory commentable repository for testing."""

from typing import Optional

from commentary.domain.model.commentable import Commentable
from commentary.domain.repository.commentable import CommentableRepository
from commentary.domain.value import CommentableRef


class InMemoryCommentableRepository(CommentableRepository):
    """In-memory implementation of CommentableRepository for testing."""

    def __init__(self) -> None:
        self._items: dict[CommentableRef, Commentable] = {}

    async def find(self, ref: CommentableRef) -> Optional[Commentable]:
        """Find a commentable by type and id."""
        return self._items.get(ref)

    async def save(self, commentable: Commentable) -> Commentable:
        """Save or update an article or podcast episode."""
        self._items[commentable.ref] = commentable
        return commentable
