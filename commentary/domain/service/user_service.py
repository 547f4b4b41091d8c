"""User domain service."""

from datetime import datetime

import logfire

from commentary.domain.model.user import User
from commentary.domain.repository import UserRepository
from commentary.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for the user-facing parts of commenting."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Get a user by ID.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_by_id", user_id=user_id):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=user_id)
            return user

    async def resolve_mentions(self, candidates: set[str]) -> dict[str, User]:
        """Resolve ``@username`` candidates to users, case-insensitively.

        Args:
            candidates: Lowercased usernames

        Returns:
            Lowercased username -> user, for the candidates that exist
        """
        if not candidates:
            return {}
        with logfire.span("user_service.resolve_mentions", candidates=len(candidates)):
            users = await self.user_repository.find_by_usernames(candidates)
            resolved = {user.username.root.lower(): user for user in users}
            logfire.info(
                "Mentions resolved",
                candidates=len(candidates),
                resolved=len(resolved),
            )
            return resolved

    async def record_comment_activity(
        self, user_id: UserId, at: datetime | None = None
    ) -> None:
        """Touch the user's last comment time."""
        await self.user_repository.touch_last_comment_at(user_id, at or datetime.now())
        logfire.info("User comment activity recorded", user_id=user_id)
