"""PostgreSQL implementation of NotificationSubscription repository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import NotificationSubscription
from commentary.domain.repository import NotificationSubscriptionRepository
from commentary.domain.value import CommentId
from commentary.persistence.mappers import row_to_subscription, subscription_to_dict
from commentary.persistence.tables import notification_subscriptions_table

COMMENT_NOTIFIABLE = "Comment"


class PostgresNotificationSubscriptionRepository(NotificationSubscriptionRepository):
    """PostgreSQL implementation of NotificationSubscriptionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_comment(
        self, comment_id: CommentId
    ) -> List[NotificationSubscription]:
        """Find subscriptions to a comment."""
        table = notification_subscriptions_table
        stmt = (
            select(table)
            .where(table.c.notifiable_type == COMMENT_NOTIFIABLE)
            .where(table.c.notifiable_id == comment_id)
            .order_by(table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_subscription(dict(row)) for row in result.mappings().all()]

    async def save(
        self, subscription: NotificationSubscription
    ) -> NotificationSubscription:
        """Save a subscription."""
        stmt = notification_subscriptions_table.insert().values(
            **subscription_to_dict(subscription)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return subscription

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's subscriptions."""
        table = notification_subscriptions_table
        stmt = (
            table.delete()
            .where(table.c.notifiable_type == COMMENT_NOTIFIABLE)
            .where(table.c.notifiable_id == comment_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
