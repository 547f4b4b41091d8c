"""Commentable repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from commentary.domain.model.commentable import Commentable
from commentary.domain.value import CommentableRef


class CommentableRepository(ABC):
    """Lookup of the content items comment threads hang off."""

    @abstractmethod
    async def find(self, ref: CommentableRef) -> Optional[Commentable]:
        """Find a commentable by type and id.

        Args:
            ref: Commentable reference

        Returns:
            The article or podcast episode, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def save(self, commentable: Commentable) -> Commentable:
        """Save an article or podcast episode."""
        pass
