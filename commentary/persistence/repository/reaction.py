"""PostgreSQL implementation of Reaction repository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import Reaction
from commentary.domain.repository import ReactionRepository
from commentary.domain.value import CommentId
from commentary.persistence.mappers import reaction_to_dict, row_to_reaction
from commentary.persistence.tables import reactions_table


class PostgresReactionRepository(ReactionRepository):
    """PostgreSQL implementation of ReactionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_comment(self, comment_id: CommentId) -> List[Reaction]:
        """Find reactions to a comment."""
        stmt = (
            select(reactions_table)
            .where(reactions_table.c.reactable_id == comment_id)
            .order_by(reactions_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_reaction(dict(row)) for row in result.mappings().all()]

    async def save(self, reaction: Reaction) -> Reaction:
        """Save a reaction."""
        stmt = reactions_table.insert().values(**reaction_to_dict(reaction))
        await self.session.execute(stmt)
        await self.session.flush()
        return reaction

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's reactions."""
        stmt = reactions_table.delete().where(
            reactions_table.c.reactable_id == comment_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
