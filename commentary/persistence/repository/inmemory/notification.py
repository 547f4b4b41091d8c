"""In-memory notification repository for testing."""

import asyncio
import copy
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from commentary.domain.model.notification import Notification
from commentary.domain.repository.notification import (
    NotificationRepository,
    PayloadMutator,
)
from commentary.domain.value import CommentId, NotificationId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing.

    A lock per notification stands in for the database row lock.
    """

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}
        self._locks: defaultdict[NotificationId, asyncio.Lock] = defaultdict(
            asyncio.Lock
        )
        self.payload_writes = 0

    async def find_by_notifiable(self, comment_id: CommentId) -> list[Notification]:
        """Find notifications about a comment."""
        notifications = [
            n
            for n in self._notifications.values()
            if n.notifiable_type == "Comment" and n.notifiable_id == comment_id
        ]
        notifications.sort(key=lambda n: n.id)
        return notifications

    async def update_payload(
        self, notification_id: NotificationId, mutator: PayloadMutator
    ) -> Optional[Notification]:
        """Rewrite a notification's payload, one writer at a time."""
        async with self._locks[notification_id]:
            current = self._notifications.get(notification_id)
            if current is None:
                return None
            payload = mutator(copy.deepcopy(current.json_data))
            updated = current.model_copy(update={"json_data": payload})
            self._notifications[notification_id] = updated
            self.payload_writes += 1
            return updated

    async def delete_by_notifiable(self, comment_id: CommentId) -> int:
        """Delete notifications about a comment."""
        doomed = [n.id for n in await self.find_by_notifiable(comment_id)]
        for notification_id in doomed:
            del self._notifications[notification_id]
            self._locks.pop(notification_id, None)
        return len(doomed)

    async def save(self, notification: Notification) -> Notification:
        """Save or update a notification."""
        self._notifications[notification.id] = notification
        return notification

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Restore the stored payloads if the block raises."""
        snapshot = dict(self._notifications)
        try:
            yield
        except Exception:
            self._notifications = snapshot
            raise
