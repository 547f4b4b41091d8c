"""PostgreSQL implementation of Commentable repository.

Articles and podcast episodes live in separate tables; the commentable
reference's type picks the table.
"""

from typing import Optional

from sqlalchemy import Table, select
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import Article, Commentable, PodcastEpisode
from commentary.domain.repository import CommentableRepository
from commentary.domain.value import CommentableRef, CommentableType
from commentary.persistence.mappers import (
    commentable_to_dict,
    row_to_article,
    row_to_podcast_episode,
)
from commentary.persistence.tables import articles_table, podcast_episodes_table

_TABLES: dict[CommentableType, Table] = {
    CommentableType.ARTICLE: articles_table,
    CommentableType.PODCAST_EPISODE: podcast_episodes_table,
}


class PostgresCommentableRepository(CommentableRepository):
    """PostgreSQL implementation of CommentableRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, ref: CommentableRef) -> Optional[Commentable]:
        """Find a commentable by type and id."""
        table = _TABLES[ref.type]
        stmt = select(table).where(table.c.id == ref.id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            return None
        if ref.type is CommentableType.ARTICLE:
            return row_to_article(dict(row))
        return row_to_podcast_episode(dict(row))

    async def save(self, commentable: Article | PodcastEpisode) -> Commentable:
        """Save an article or podcast episode (create or update)."""
        table = _TABLES[commentable.type]
        values = commentable_to_dict(commentable)

        if await self.find(commentable.ref):
            stmt = table.update().where(table.c.id == commentable.id).values(**values)
        else:
            stmt = table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return commentable
