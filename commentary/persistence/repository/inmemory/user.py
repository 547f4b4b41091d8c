"""In-memory user repository for testing."""

from datetime import datetime
from typing import Iterable, Optional

from commentary.domain.model.user import User
from commentary.domain.repository.user import UserRepository
from commentary.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_usernames(self, usernames: Iterable[str]) -> list[User]:
        """Find users matching any candidate username, ignoring case."""
        candidates = {username.lower() for username in usernames}
        return [
            user
            for user in self._users.values()
            if user.username.root.lower() in candidates
        ]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def touch_last_comment_at(self, user_id: UserId, at: datetime) -> None:
        """Record the time of the user's latest comment activity."""
        user = self._users.get(user_id)
        if user:
            self._users[user_id] = user.model_copy(update={"last_comment_at": at})
