"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional

from commentary.domain.model import (
    Article,
    Comment,
    Mention,
    Notification,
    NotificationSubscription,
    PodcastEpisode,
    Reaction,
    User,
)
from commentary.domain.value import (
    CommentableId,
    CommentableRef,
    CommentableType,
    CommentId,
    MentionId,
    NotificationId,
    NotificationSubscriptionId,
    ReactionId,
    UserId,
    Username,
)

ANCESTRY_SEPARATOR = "/"


def encode_ancestry(ancestry: tuple[CommentId, ...]) -> Optional[str]:
    """Store a lineage as ``"1/5/9"`` (NULL for root comments)."""
    if not ancestry:
        return None
    return ANCESTRY_SEPARATOR.join(str(comment_id) for comment_id in ancestry)


def decode_ancestry(value: Optional[str]) -> tuple[CommentId, ...]:
    """Parse a stored lineage back into comment ids."""
    if not value:
        return ()
    return tuple(CommentId(int(part)) for part in value.split(ANCESTRY_SEPARATOR))


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        username=Username(row["username"]),
        name=row.get("name") or "",
        last_comment_at=row.get("last_comment_at"),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "username": user.username.root,
        "name": user.name,
        "last_comment_at": user.last_comment_at,
    }


def row_to_article(row: Dict[str, Any]) -> Article:
    """Convert database row to Article domain model."""
    return Article(
        id=CommentableId(row["id"]),
        user_id=UserId(row["user_id"]),
        title=row["title"],
        path=row["path"],
        published=row["published"],
        video=row.get("video"),
        published_at=row.get("published_at"),
    )


def row_to_podcast_episode(row: Dict[str, Any]) -> PodcastEpisode:
    """Convert database row to PodcastEpisode domain model."""
    return PodcastEpisode(
        id=CommentableId(row["id"]),
        user_id=UserId(row["user_id"]) if row.get("user_id") is not None else None,
        title=row["title"],
        path=row["path"],
        published=row["published"],
        media_url=row.get("media_url"),
    )


def commentable_to_dict(commentable: Article | PodcastEpisode) -> Dict[str, Any]:
    """Convert a commentable to its table's column dict (type is implied by the table)."""
    return commentable.model_dump(exclude={"type"})


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        commentable=CommentableRef(
            type=CommentableType(row["commentable_type"]),
            id=CommentableId(row["commentable_id"]),
        ),
        user_id=UserId(row["user_id"]),
        author_username=Username(row["author_username"]),
        body_markdown=row["body_markdown"],
        processed_html=row.get("processed_html") or "",
        parent_id=CommentId(row["parent_id"]) if row.get("parent_id") else None,
        ancestry=decode_ancestry(row.get("ancestry")),
        score=row["score"],
        deleted=row["deleted"],
        markdown_character_count=row["markdown_character_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": comment.id,
        "commentable_type": comment.commentable.type.value,
        "commentable_id": comment.commentable.id,
        "user_id": comment.user_id,
        "author_username": comment.author_username.root,
        "body_markdown": comment.body_markdown,
        "processed_html": comment.processed_html,
        "parent_id": comment.parent_id,
        "ancestry": encode_ancestry(comment.ancestry),
        "score": comment.score,
        "deleted": comment.deleted,
        "markdown_character_count": comment.markdown_character_count,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(row["id"]),
        user_id=UserId(row["user_id"]),
        notifiable_id=CommentId(row["notifiable_id"]),
        notifiable_type=row["notifiable_type"],
        action=row.get("action"),
        json_data=row.get("json_data") or {},
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    return notification.model_dump()


def row_to_mention(row: Dict[str, Any]) -> Mention:
    """Convert database row to Mention domain model."""
    return Mention(
        id=MentionId(row["id"]),
        user_id=UserId(row["user_id"]),
        mentionable_id=CommentId(row["mentionable_id"]),
        mentionable_type=row["mentionable_type"],
        created_at=row["created_at"],
    )


def row_to_reaction(row: Dict[str, Any]) -> Reaction:
    """Convert database row to Reaction domain model."""
    return Reaction(
        id=ReactionId(row["id"]),
        user_id=UserId(row["user_id"]),
        reactable_id=CommentId(row["reactable_id"]),
        category=row["category"],
        created_at=row["created_at"],
    )


def reaction_to_dict(reaction: Reaction) -> Dict[str, Any]:
    """Convert Reaction domain model to database dict."""
    return reaction.model_dump()


def row_to_subscription(row: Dict[str, Any]) -> NotificationSubscription:
    """Convert database row to NotificationSubscription domain model."""
    return NotificationSubscription(
        id=NotificationSubscriptionId(row["id"]),
        user_id=UserId(row["user_id"]),
        notifiable_id=CommentId(row["notifiable_id"]),
        notifiable_type=row["notifiable_type"],
        config=row["config"],
        created_at=row["created_at"],
    )


def subscription_to_dict(subscription: NotificationSubscription) -> Dict[str, Any]:
    """Convert NotificationSubscription domain model to database dict."""
    return subscription.model_dump()
