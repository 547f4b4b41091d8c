"""In-memory notification subscription repository for testing."""

from commentary.domain.model.notification_subscription import (
    NotificationSubscription,
)
from commentary.domain.repository.notification_subscription import (
    NotificationSubscriptionRepository,
)
from commentary.domain.value import CommentId, NotificationSubscriptionId


class InMemoryNotificationSubscriptionRepository(NotificationSubscriptionRepository):
    """In-memory implementation of NotificationSubscriptionRepository."""

    def __init__(self) -> None:
        self._subscriptions: dict[
            NotificationSubscriptionId, NotificationSubscription
        ] = {}

    async def find_by_comment(
        self, comment_id: CommentId
    ) -> list[NotificationSubscription]:
        """Find subscriptions to a comment."""
        return [
            s for s in self._subscriptions.values() if s.notifiable_id == comment_id
        ]

    async def save(
        self, subscription: NotificationSubscription
    ) -> NotificationSubscription:
        """Save a subscription."""
        self._subscriptions[subscription.id] = subscription
        return subscription

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's subscriptions."""
        doomed = [s.id for s in await self.find_by_comment(comment_id)]
        for subscription_id in doomed:
            del self._subscriptions[subscription_id]
        return len(doomed)
