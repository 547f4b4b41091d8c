"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from commentary.domain.model.comment import Comment
from commentary.domain.value import CommentableRef, CommentId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def next_id(self) -> CommentId:
        """Reserve the next comment id.

        Ids are assigned monotonically so short ids stay compact.
        """
        pass

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_commentable(self, commentable: CommentableRef) -> List[Comment]:
        """Find every comment of a thread, deleted ones included.

        This is the flat snapshot the tree builder and cascade work on,
        fetched in a single query.

        Args:
            commentable: The thread's root content item

        Returns:
            List of comments ordered by id
        """
        pass

    @abstractmethod
    async def exists_duplicate(
        self,
        body_markdown: str,
        user_id: UserId,
        ancestry: tuple[CommentId, ...],
        commentable: CommentableRef,
        exclude_id: Optional[CommentId] = None,
    ) -> bool:
        """Check whether the same user already posted this text at this thread position.

        Args:
            body_markdown: Raw comment text
            user_id: Author
            ancestry: Lineage of the would-be comment
            commentable: Thread root
            exclude_id: Comment to ignore (the one being edited)

        Returns:
            True if an identical comment exists
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment row (hard delete).

        Args:
            comment_id: The comment ID to delete
        """
        pass
