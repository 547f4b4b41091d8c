"""Test configuration and helpers."""

from datetime import datetime, timedelta

from commentary.domain.model import Article, Comment, Notification, PodcastEpisode, User
from commentary.domain.service.notification_payload import comment_payload
from commentary.domain.value import (
    CommentableId,
    CommentableRef,
    CommentableType,
    CommentId,
    NotificationId,
    UserId,
    Username,
)

BASE_TIME = datetime(2024, 3, 7, 12, 0, 0)

ARTICLE_REF = CommentableRef(type=CommentableType.ARTICLE, id=CommentableId(1))


def make_user(user_id: int, username: str) -> User:
    """Helper for building test users."""
    return User(id=UserId(user_id), username=Username(username))


def make_article(
    article_id: int = 1,
    user_id: int = 100,
    published: bool = True,
    video: str | None = None,
) -> Article:
    """Helper for building test articles."""
    return Article(
        id=CommentableId(article_id),
        user_id=UserId(user_id),
        title="Test Article",
        path=f"/author/test-article-{article_id}",
        published=published,
        video=video,
    )


def make_episode(episode_id: int = 1, user_id: int | None = 100) -> PodcastEpisode:
    """Helper for building test podcast episodes."""
    return PodcastEpisode(
        id=CommentableId(episode_id),
        user_id=UserId(user_id) if user_id is not None else None,
        title="Test Episode",
        path=f"/podcast/episode-{episode_id}",
    )


def make_comment(
    comment_id: int,
    parent: Comment | None = None,
    score: int = 0,
    minutes: int = 0,
    deleted: bool = False,
    html: str | None = None,
    user_id: int = 1,
    username: str = "alice",
    commentable: CommentableRef = ARTICLE_REF,
) -> Comment:
    """Helper for building comments directly, bypassing the service.

    ``minutes`` offsets the creation time from BASE_TIME.
    """
    created = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=CommentId(comment_id),
        commentable=parent.commentable if parent else commentable,
        user_id=UserId(user_id),
        author_username=Username(username),
        body_markdown=f"Comment {comment_id}",
        processed_html=html if html is not None else f"<p>Comment {comment_id}</p>",
        parent_id=parent.id if parent else None,
        ancestry=parent.child_ancestry if parent else (),
        score=score,
        deleted=deleted,
        created_at=created,
        updated_at=created,
    )


def make_notification(
    notification_id: int, comment: Comment, ancestors: list[Comment], user_id: int = 2
) -> Notification:
    """Helper for building a notification about ``comment``."""
    return Notification(
        id=NotificationId(notification_id),
        user_id=UserId(user_id),
        notifiable_id=comment.id,
        action="Reply",
        json_data=comment_payload(comment, ancestors),
    )
