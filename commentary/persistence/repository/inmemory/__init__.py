"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .commentable import InMemoryCommentableRepository
from .mention import InMemoryMentionRepository
from .notification import InMemoryNotificationRepository
from .notification_subscription import InMemoryNotificationSubscriptionRepository
from .reaction import InMemoryReactionRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommentableRepository",
    "InMemoryMentionRepository",
    "InMemoryNotificationRepository",
    "InMemoryNotificationSubscriptionRepository",
    "InMemoryReactionRepository",
    "InMemoryUserRepository",
]
