"""Hard delete comment use case (moderation)."""

from pydantic import BaseModel

from commentary.application.usecase.comment.delete_comment import (
    DeleteCommentResponse,
)
from commentary.domain.service import CommentService
from commentary.domain.value import CommentId


class DestroyCommentRequest(BaseModel):
    """Hard delete request."""

    comment_id: int


class DestroyCommentUseCase:
    """Use case for permanently removing a comment.

    Authorization is the caller's concern; this is a moderation path.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DestroyCommentRequest) -> DeleteCommentResponse:
        """Execute destroy flow.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        outcome = await self.comment_service.destroy(CommentId(request.comment_id))
        return DeleteCommentResponse.from_outcome(outcome)
