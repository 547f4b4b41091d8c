"""PostgreSQL repository implementations."""

from commentary.persistence.repository.comment import PostgresCommentRepository
from commentary.persistence.repository.commentable import (
    PostgresCommentableRepository,
)
from commentary.persistence.repository.mention import PostgresMentionRepository
from commentary.persistence.repository.notification import (
    PostgresNotificationRepository,
)
from commentary.persistence.repository.notification_subscription import (
    PostgresNotificationSubscriptionRepository,
)
from commentary.persistence.repository.reaction import PostgresReactionRepository
from commentary.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresCommentableRepository",
    "PostgresMentionRepository",
    "PostgresNotificationRepository",
    "PostgresNotificationSubscriptionRepository",
    "PostgresReactionRepository",
    "PostgresUserRepository",
]
