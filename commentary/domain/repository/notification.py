"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager, Callable, List, Optional

from commentary.domain.model.notification import Notification
from commentary.domain.value import CommentId, NotificationId

PayloadMutator = Callable[[dict[str, Any]], dict[str, Any]]


class NotificationRepository(ABC):
    """Store of notification records and their JSON payloads."""

    @abstractmethod
    async def find_by_notifiable(self, comment_id: CommentId) -> List[Notification]:
        """Find notifications about a comment.

        Args:
            comment_id: The comment the notifications are about

        Returns:
            Notifications ordered by id
        """
        pass

    @abstractmethod
    async def update_payload(
        self, notification_id: NotificationId, mutator: PayloadMutator
    ) -> Optional[Notification]:
        """Rewrite a notification's payload.

        The read-mutate-write cycle is serialized per record, so concurrent
        writers never interleave on the same notification. ``mutator``
        receives a copy of the payload and returns the new one.

        Args:
            notification_id: Notification to update
            mutator: Function producing the new payload

        Returns:
            The updated notification, None if it no longer exists
        """
        pass

    @abstractmethod
    async def delete_by_notifiable(self, comment_id: CommentId) -> int:
        """Delete notifications about a comment without side effects.

        Returns:
            Number of deleted notifications
        """
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Save a notification (create or update)."""
        pass

    @abstractmethod
    def savepoint(self) -> AsyncContextManager[None]:
        """Scope a group of payload writes that can fail on their own.

        If the block raises, only the writes made inside it are undone and
        the exception propagates. Work done before the block is kept.

        Usage:
            async with notification_repository.savepoint():
                await notification_repository.update_payload(...)
        """
        pass
