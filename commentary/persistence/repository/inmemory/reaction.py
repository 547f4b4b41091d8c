"""In-memory reaction repository for testing."""

from commentary.domain.model.reaction import Reaction
from commentary.domain.repository.reaction import ReactionRepository
from commentary.domain.value import CommentId, ReactionId


class InMemoryReactionRepository(ReactionRepository):
    """In-memory implementation of ReactionRepository for testing."""

    def __init__(self) -> None:
        self._reactions: dict[ReactionId, Reaction] = {}

    async def find_by_comment(self, comment_id: CommentId) -> list[Reaction]:
        """Find reactions to a comment."""
        return [r for r in self._reactions.values() if r.reactable_id == comment_id]

    async def save(self, reaction: Reaction) -> Reaction:
        """Save a reaction."""
        self._reactions[reaction.id] = reaction
        return reaction

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete a comment's reactions."""
        doomed = [r.id for r in await self.find_by_comment(comment_id)]
        for reaction_id in doomed:
            del self._reactions[reaction_id]
        return len(doomed)
