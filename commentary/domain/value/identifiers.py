"""Strongly typed identifiers for domain entities.

Identifiers are integers assigned monotonically by storage, so that a
comment's short id can be derived from its numeric id.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
UserId = NewType("UserId", int)
CommentableId = NewType("CommentableId", int)
NotificationId = NewType("NotificationId", int)
MentionId = NewType("MentionId", int)
ReactionId = NewType("ReactionId", int)
NotificationSubscriptionId = NewType("NotificationSubscriptionId", int)
