"""Mention entity: a user linked from a comment via ``@username``."""

from datetime import datetime

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, MentionId, UserId


class Mention(DomainModel):
    """Record of a user mentioned in a comment."""

    id: MentionId
    user_id: UserId
    mentionable_id: CommentId
    mentionable_type: str = "Comment"
    created_at: datetime = Field(default_factory=datetime.now)
