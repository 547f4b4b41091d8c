"""In-memory mention repository for testing."""

from itertools import count
from typing import Iterable

from commentary.domain.model.mention import Mention
from commentary.domain.repository.mention import MentionRepository
from commentary.domain.value import CommentId, MentionId, UserId


class InMemoryMentionRepository(MentionRepository):
    """In-memory implementation of MentionRepository for testing."""

    def __init__(self) -> None:
        self._mentions: dict[MentionId, Mention] = {}
        self._ids = count(1)

    async def find_by_comment(self, comment_id: CommentId) -> list[Mention]:
        """Find mentions made in a comment."""
        mentions = [
            m for m in self._mentions.values() if m.mentionable_id == comment_id
        ]
        mentions.sort(key=lambda m: m.id)
        return mentions

    async def replace_for_comment(
        self, comment_id: CommentId, user_ids: Iterable[UserId]
    ) -> list[Mention]:
        """Make ``user_ids`` the exact set of users mentioned by a comment."""
        wanted = set(user_ids)
        current = await self.find_by_comment(comment_id)
        for mention in current:
            if mention.user_id not in wanted:
                del self._mentions[mention.id]

        existing = {m.user_id for m in current}
        for user_id in sorted(wanted - existing):
            mention = Mention(
                id=MentionId(next(self._ids)),
                user_id=user_id,
                mentionable_id=comment_id,
            )
            self._mentions[mention.id] = mention

        return await self.find_by_comment(comment_id)

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's mentions."""
        doomed = [m.id for m in await self.find_by_comment(comment_id)]
        for mention_id in doomed:
            del self._mentions[mention_id]
        return len(doomed)
