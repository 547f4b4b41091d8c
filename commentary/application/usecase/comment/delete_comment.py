"""Soft delete comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.comment.common import CommentItem
from commentary.domain.error import NotAuthorizedError
from commentary.domain.service import CommentService, DeletionOutcome
from commentary.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Soft delete request."""

    comment_id: int
    user_id: int  # Current user ID (must be author)


class DeleteCommentResponse(BaseModel):
    """Soft delete response.

    ``cascade_completed`` is False when descendant notifications could not
    be brought up to date; deleting the same comment again retries them.
    """

    comment: CommentItem
    cascade_completed: bool
    descendants: int
    notifications_updated: int

    @classmethod
    def from_outcome(cls, outcome: DeletionOutcome) -> "DeleteCommentResponse":
        cascade = outcome.cascade
        return cls(
            comment=CommentItem.from_comment(outcome.comment),
            cascade_completed=cascade is not None,
            descendants=cascade.descendants if cascade else 0,
            notifications_updated=cascade.notifications_updated if cascade else 0,
        )


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment.

    The comment stays in its thread with ``"[deleted]"`` as its title.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute soft delete flow.

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If user doesn't own the comment
        """
        comment_id = CommentId(request.comment_id)
        comment = await self.comment_service.get_comment(comment_id)

        if comment.user_id != request.user_id:
            raise NotAuthorizedError(
                "comment", str(request.comment_id), str(request.user_id)
            )

        outcome = await self.comment_service.soft_delete(comment_id)
        return DeleteCommentResponse.from_outcome(outcome)
