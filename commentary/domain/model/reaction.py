"""Reaction entity. Counting lives elsewhere; comments only own the rows."""

from datetime import datetime

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, ReactionId, UserId


class Reaction(DomainModel):
    """A user's reaction to a comment."""

    id: ReactionId
    user_id: UserId
    reactable_id: CommentId
    category: str = "like"
    created_at: datetime = Field(default_factory=datetime.now)
