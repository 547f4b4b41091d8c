"""Notification subscription entity."""

from datetime import datetime

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, NotificationSubscriptionId, UserId


class NotificationSubscription(DomainModel):
    """A user's subscription to replies on a comment."""

    id: NotificationSubscriptionId
    user_id: UserId
    notifiable_id: CommentId
    notifiable_type: str = "Comment"
    config: str = "all_comments"
    created_at: datetime = Field(default_factory=datetime.now)
