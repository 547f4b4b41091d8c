"""PostgreSQL implementation of Mention repository."""

from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import Mention
from commentary.domain.repository import MentionRepository
from commentary.domain.value import CommentId, UserId
from commentary.persistence.mappers import row_to_mention
from commentary.persistence.tables import mentions_table

COMMENT_MENTIONABLE = "Comment"


class PostgresMentionRepository(MentionRepository):
    """PostgreSQL implementation of MentionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_comment(self, comment_id: CommentId) -> List[Mention]:
        """Find mentions made in a comment."""
        stmt = (
            select(mentions_table)
            .where(mentions_table.c.mentionable_type == COMMENT_MENTIONABLE)
            .where(mentions_table.c.mentionable_id == comment_id)
            .order_by(mentions_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_mention(dict(row)) for row in result.mappings().all()]

    async def replace_for_comment(
        self, comment_id: CommentId, user_ids: Iterable[UserId]
    ) -> List[Mention]:
        """Make ``user_ids`` the exact set of users mentioned by a comment.

        Existing mentions of users still mentioned are kept as they are.
        """
        wanted = set(user_ids)
        current = await self.find_by_comment(comment_id)
        current_users = {mention.user_id for mention in current}

        stale = [m.id for m in current if m.user_id not in wanted]
        if stale:
            await self.session.execute(
                mentions_table.delete().where(mentions_table.c.id.in_(stale))
            )

        added = sorted(wanted - current_users)
        if added:
            await self.session.execute(
                mentions_table.insert(),
                [
                    {
                        "user_id": user_id,
                        "mentionable_id": comment_id,
                        "mentionable_type": COMMENT_MENTIONABLE,
                    }
                    for user_id in added
                ],
            )

        await self.session.flush()
        return await self.find_by_comment(comment_id)

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's mentions."""
        stmt = (
            mentions_table.delete()
            .where(mentions_table.c.mentionable_type == COMMENT_MENTIONABLE)
            .where(mentions_table.c.mentionable_id == comment_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
