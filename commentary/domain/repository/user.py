"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from commentary.domain.model.user import User
from commentary.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entity."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def find_by_usernames(self, usernames: Iterable[str]) -> List[User]:
        """Find users whose username matches any candidate, case-insensitively.

        Args:
            usernames: Candidate usernames as typed (any casing)

        Returns:
            Matching users (unknown candidates are simply absent)
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass

    @abstractmethod
    async def touch_last_comment_at(self, user_id: UserId, at: datetime) -> None:
        """Record the time of the user's latest comment activity."""
        pass
