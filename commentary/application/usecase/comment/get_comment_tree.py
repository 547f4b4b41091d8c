"""Get comment tree use case."""

from __future__ import annotations

import math

from pydantic import BaseModel

from commentary.application.usecase.comment.common import parse_commentable
from commentary.domain.service import CommentService, CommentTree
from commentary.domain.value.title import DEFAULT_TITLE_LENGTH


class CommentNode(BaseModel):
    """Comment in a rendered thread with its ordered replies."""

    comment_id: int
    username: str
    path: str
    title: str
    processed_html: str
    score: int
    deleted: bool
    children: list[CommentNode]


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    commentable_type: str
    commentable_id: int
    min_score: float | None = None  # Roots below this are hidden


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    commentable_type: str
    commentable_id: int
    comments: list[CommentNode]
    total: int


class GetCommentTreeUseCase:
    """Use case for reading a thread as a score-ordered tree."""

    def __init__(
        self,
        comment_service: CommentService,
        title_length: int = DEFAULT_TITLE_LENGTH,
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
            title_length: Maximum length of node titles
        """
        self.comment_service = comment_service
        self.title_length = title_length

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Raises:
            ValidationError: If the commentable type is unknown
            IntegrityError: If the thread's ancestry is corrupt
        """
        commentable = parse_commentable(
            request.commentable_type, request.commentable_id
        )
        min_score = -math.inf if request.min_score is None else request.min_score
        tree = await self.comment_service.tree_for(commentable, min_score)

        nodes = self._to_nodes(tree)
        return GetCommentTreeResponse(
            commentable_type=commentable.type.value,
            commentable_id=commentable.id,
            comments=nodes,
            total=self._count(nodes),
        )

    def _to_nodes(self, tree: CommentTree) -> list[CommentNode]:
        return [
            CommentNode(
                comment_id=comment.id,
                username=comment.author_username.root,
                path=comment.path,
                title=comment.title(self.title_length),
                processed_html=comment.processed_html,
                score=comment.score,
                deleted=comment.deleted,
                children=self._to_nodes(subtree),
            )
            for comment, subtree in tree.items()
        ]

    def _count(self, nodes: list[CommentNode]) -> int:
        return sum(1 + self._count(node.children) for node in nodes)
