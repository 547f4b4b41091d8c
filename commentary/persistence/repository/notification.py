"""PostgreSQL implementation of Notification repository."""

import copy
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import Notification
from commentary.domain.repository import NotificationRepository, PayloadMutator
from commentary.domain.value import CommentId, NotificationId
from commentary.persistence.mappers import notification_to_dict, row_to_notification
from commentary.persistence.tables import notifications_table

COMMENT_NOTIFIABLE = "Comment"


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository.

    Payload rewrites take a row lock (``SELECT ... FOR UPDATE``) so
    concurrent writers to the same notification queue up instead of
    overwriting each other.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_notifiable(self, comment_id: CommentId) -> List[Notification]:
        """Find notifications about a comment."""
        stmt = (
            select(notifications_table)
            .where(notifications_table.c.notifiable_type == COMMENT_NOTIFIABLE)
            .where(notifications_table.c.notifiable_id == comment_id)
            .order_by(notifications_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def update_payload(
        self, notification_id: NotificationId, mutator: PayloadMutator
    ) -> Optional[Notification]:
        """Rewrite a notification's payload under a row lock."""
        stmt = (
            select(notifications_table)
            .where(notifications_table.c.id == notification_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            return None

        current = row_to_notification(dict(row))
        payload = mutator(copy.deepcopy(current.json_data))

        update_stmt = (
            notifications_table.update()
            .where(notifications_table.c.id == notification_id)
            .values(json_data=payload)
        )
        await self.session.execute(update_stmt)
        await self.session.flush()
        return current.model_copy(update={"json_data": payload})

    async def delete_by_notifiable(self, comment_id: CommentId) -> int:
        """Delete notifications about a comment."""
        stmt = (
            notifications_table.delete()
            .where(notifications_table.c.notifiable_type == COMMENT_NOTIFIABLE)
            .where(notifications_table.c.notifiable_id == comment_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def save(self, notification: Notification) -> Notification:
        """Save a notification (create or update)."""
        stmt = select(notifications_table.c.id).where(
            notifications_table.c.id == notification.id
        )
        exists = (await self.session.execute(stmt)).first() is not None

        values = notification_to_dict(notification)
        if exists:
            write = (
                notifications_table.update()
                .where(notifications_table.c.id == notification.id)
                .values(**values)
            )
        else:
            write = notifications_table.insert().values(**values)

        await self.session.execute(write)
        await self.session.flush()
        return notification

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Run the block in a SAVEPOINT; a failure rolls back only the block."""
        async with self.session.begin_nested():
            yield
