"""Shared request parsing and response models for comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from commentary.domain.error import ValidationError
from commentary.domain.model import Comment
from commentary.domain.value import CommentableId, CommentableRef, CommentableType


class CommentItem(BaseModel):
    """Comment as returned to callers."""

    comment_id: int
    id_code: str
    commentable_type: str
    commentable_id: int
    user_id: int
    username: str
    parent_id: int | None
    depth: int
    path: str
    title: str
    body_markdown: str
    processed_html: str
    score: int
    deleted: bool
    markdown_character_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=comment.id,
            id_code=comment.id_code,
            commentable_type=comment.commentable.type.value,
            commentable_id=comment.commentable.id,
            user_id=comment.user_id,
            username=comment.author_username.root,
            parent_id=comment.parent_id,
            depth=comment.depth,
            path=comment.path,
            title=comment.title(),
            body_markdown=comment.body_markdown,
            processed_html=comment.processed_html,
            score=comment.score,
            deleted=comment.deleted,
            markdown_character_count=comment.markdown_character_count,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


def parse_commentable(commentable_type: str, commentable_id: int) -> CommentableRef:
    """Build a commentable reference from raw request fields.

    Raises:
        ValidationError: If the type is not a commentable type
    """
    try:
        kind = CommentableType(commentable_type)
    except ValueError:
        raise ValidationError(
            "commentable_type", "is not included in the list"
        ) from None
    return CommentableRef(type=kind, id=CommentableId(commentable_id))
