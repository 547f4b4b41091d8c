"""Mention repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from commentary.domain.model.mention import Mention
from commentary.domain.value import CommentId, UserId


class MentionRepository(ABC):
    """Repository for Mention entity."""

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[Mention]:
        """Find mentions made in a comment."""
        pass

    @abstractmethod
    async def replace_for_comment(
        self, comment_id: CommentId, user_ids: Iterable[UserId]
    ) -> List[Mention]:
        """Make ``user_ids`` the exact set of users mentioned by a comment.

        Returns:
            The comment's mentions after replacement
        """
        pass

    @abstractmethod
    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's mentions. Returns the number deleted."""
        pass
