"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import User
from commentary.domain.repository import UserRepository
from commentary.domain.value import UserId
from commentary.persistence.mappers import row_to_user, user_to_dict
from commentary.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_usernames(self, usernames: Iterable[str]) -> List[User]:
        """Find users matching any candidate username, ignoring case."""
        candidates = {username.lower() for username in usernames}
        if not candidates:
            return []

        stmt = select(users_table).where(
            func.lower(users_table.c.username).in_(candidates)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def touch_last_comment_at(self, user_id: UserId, at: datetime) -> None:
        """Record the time of the user's latest comment activity."""
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(last_comment_at=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()
