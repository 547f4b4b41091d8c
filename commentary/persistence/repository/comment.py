"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError as SqlIntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.error import ValidationError
from commentary.domain.model import Comment
from commentary.domain.repository import CommentRepository
from commentary.domain.value import CommentableRef, CommentId, UserId
from commentary.persistence.mappers import (
    comment_to_dict,
    encode_ancestry,
    row_to_comment,
)
from commentary.persistence.tables import (
    COMMENT_UNIQUENESS_INDEX,
    comments_id_seq,
    comments_table,
)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def next_id(self) -> CommentId:
        """Reserve the next comment id from the sequence."""
        result = await self.session.execute(select(comments_id_seq.next_value()))
        return CommentId(result.scalar_one())

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_commentable(self, commentable: CommentableRef) -> List[Comment]:
        """Find every comment of a thread, deleted ones included."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.commentable_type == commentable.type.value)
            .where(comments_table.c.commentable_id == commentable.id)
            .order_by(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def exists_duplicate(
        self,
        body_markdown: str,
        user_id: UserId,
        ancestry: tuple[CommentId, ...],
        commentable: CommentableRef,
        exclude_id: Optional[CommentId] = None,
    ) -> bool:
        """Check whether the same user already posted this text at this thread position."""
        encoded = encode_ancestry(ancestry)
        stmt = (
            select(comments_table.c.id)
            .where(comments_table.c.body_markdown == body_markdown)
            .where(comments_table.c.user_id == user_id)
            .where(comments_table.c.commentable_type == commentable.type.value)
            .where(comments_table.c.commentable_id == commentable.id)
        )
        if encoded is None:
            stmt = stmt.where(comments_table.c.ancestry.is_(None))
        else:
            stmt = stmt.where(comments_table.c.ancestry == encoded)
        if exclude_id is not None:
            stmt = stmt.where(comments_table.c.id != exclude_id)

        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Raises:
            ValidationError: If the uniqueness index rejects the row
        """
        existing = await self.find_by_id(comment.id)
        comment_dict = comment_to_dict(comment)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except SqlIntegrityError as e:
            if COMMENT_UNIQUENESS_INDEX in str(e.orig):
                raise ValidationError("body_markdown", "has already been taken") from e
            raise
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete)."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()
