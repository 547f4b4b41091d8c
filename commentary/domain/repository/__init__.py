"""Repository interfaces for the comment domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from commentary.domain.repository.comment import CommentRepository
from commentary.domain.repository.commentable import CommentableRepository
from commentary.domain.repository.mention import MentionRepository
from commentary.domain.repository.notification import (
    NotificationRepository,
    PayloadMutator,
)
from commentary.domain.repository.notification_subscription import (
    NotificationSubscriptionRepository,
)
from commentary.domain.repository.reaction import ReactionRepository
from commentary.domain.repository.user import UserRepository

__all__ = [
    "CommentRepository",
    "CommentableRepository",
    "MentionRepository",
    "NotificationRepository",
    "NotificationSubscriptionRepository",
    "PayloadMutator",
    "ReactionRepository",
    "UserRepository",
]
