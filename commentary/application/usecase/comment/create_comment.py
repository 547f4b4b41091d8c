"""Create comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.comment.common import (
    CommentItem,
    parse_commentable,
)
from commentary.domain.service import CommentService
from commentary.domain.value import CommentId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    commentable_type: str
    commentable_id: int
    user_id: int  # Authenticated author
    body_markdown: str
    parent_id: int | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase:
    """Use case for commenting on a commentable or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment with its processed HTML

        Raises:
            ValidationError: If the commentable, parent or body is invalid
        """
        comment = await self.comment_service.create_comment(
            commentable=parse_commentable(
                request.commentable_type, request.commentable_id
            ),
            user_id=UserId(request.user_id),
            body_markdown=request.body_markdown,
            parent_id=CommentId(request.parent_id) if request.parent_id else None,
        )
        return CreateCommentResponse(comment=CommentItem.from_comment(comment))
