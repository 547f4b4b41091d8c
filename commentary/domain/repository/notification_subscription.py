"""Notification subscription repository interface."""

from abc import ABC, abstractmethod
from typing import List

from commentary.domain.model.notification_subscription import (
    NotificationSubscription,
)
from commentary.domain.value import CommentId


class NotificationSubscriptionRepository(ABC):
    """Repository for NotificationSubscription entity."""

    @abstractmethod
    async def find_by_comment(
        self, comment_id: CommentId
    ) -> List[NotificationSubscription]:
        """Find subscriptions to a comment."""
        pass

    @abstractmethod
    async def save(
        self, subscription: NotificationSubscription
    ) -> NotificationSubscription:
        """Save a subscription."""
        pass

    @abstractmethod
    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's subscriptions. Returns the number deleted."""
        pass
