"""Domain value objects."""

from commentary.domain.value.identifiers import (
    CommentableId,
    CommentId,
    MentionId,
    NotificationId,
    NotificationSubscriptionId,
    ReactionId,
    UserId,
)
from commentary.domain.value.short_id import decode_short_id, encode_short_id
from commentary.domain.value.types import (
    CommentableRef,
    CommentableType,
    IndexAction,
    IndexSignal,
    Username,
)

__all__ = [
    # Identifiers
    "CommentId",
    "CommentableId",
    "MentionId",
    "NotificationId",
    "NotificationSubscriptionId",
    "ReactionId",
    "UserId",
    # Types
    "CommentableRef",
    "CommentableType",
    "IndexAction",
    "IndexSignal",
    "Username",
    # Short ids
    "decode_short_id",
    "encode_short_id",
]
