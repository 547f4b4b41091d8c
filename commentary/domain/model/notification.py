"""Notification entity.

Notifications carry a denormalized JSON snapshot of the comment they are
about, including the titles of the comment's ancestors. Those snapshots are
what the cascade keeps consistent when an ancestor is deleted.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, NotificationId, UserId


class Notification(DomainModel):
    """Notification about a comment, owned by the notified user."""

    id: NotificationId
    user_id: UserId
    notifiable_id: CommentId
    notifiable_type: str = "Comment"
    action: Optional[str] = None
    json_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)
