"""Update comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.comment.common import CommentItem
from commentary.domain.error import ContentDeletedException, NotAuthorizedError
from commentary.domain.service import CommentService
from commentary.domain.value import CommentId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: int
    user_id: int  # Current user ID (must be author)
    body_markdown: str  # New text content


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase:
    """Use case for editing a comment's text."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request with comment ID, user ID, and new text

        Returns:
            Updated comment details

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If user doesn't own the comment
            ContentDeletedException: If the comment is deleted
            ValidationError: If the new text is invalid
        """
        comment_id = CommentId(request.comment_id)
        comment = await self.comment_service.get_comment(comment_id)

        if comment.user_id != request.user_id:
            raise NotAuthorizedError(
                "comment", str(request.comment_id), str(request.user_id)
            )

        if comment.deleted:
            raise ContentDeletedException("comment", str(request.comment_id))

        updated = await self.comment_service.update_body(
            comment_id, request.body_markdown
        )
        return UpdateCommentResponse(comment=CommentItem.from_comment(updated))
