"""Domain model entities."""

from commentary.domain.model.comment import Comment
from commentary.domain.model.commentable import Article, Commentable, PodcastEpisode
from commentary.domain.model.mention import Mention
from commentary.domain.model.notification import Notification
from commentary.domain.model.notification_subscription import NotificationSubscription
from commentary.domain.model.reaction import Reaction
from commentary.domain.model.user import User

__all__ = [
    "Article",
    "Comment",
    "Commentable",
    "Mention",
    "Notification",
    "NotificationSubscription",
    "PodcastEpisode",
    "Reaction",
    "User",
]
