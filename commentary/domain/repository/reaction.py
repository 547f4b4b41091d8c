"""Reaction repository interface."""

from abc import ABC, abstractmethod
from typing import List

from commentary.domain.model.reaction import Reaction
from commentary.domain.value import CommentId


class ReactionRepository(ABC):
    """Repository for Reaction entity."""

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[Reaction]:
        """Find reactions to a comment."""
        pass

    @abstractmethod
    async def save(self, reaction: Reaction) -> Reaction:
        """Save a reaction."""
        pass

    @abstractmethod
    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's reactions. Returns the number deleted."""
        pass
