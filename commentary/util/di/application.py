"""Application layer DI providers."""

from dishka import Scope, provide

from commentary.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    DestroyCommentUseCase,
    GetCommentTreeUseCase,
    UpdateCommentUseCase,
)
from commentary.config import Settings
from commentary.domain.service import CommentService
from commentary.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide soft delete use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_destroy_comment_use_case(
        self, comment_service: CommentService
    ) -> DestroyCommentUseCase:
        """Provide hard delete use case."""
        return DestroyCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_tree_use_case(
        self, comment_service: CommentService, settings: Settings
    ) -> GetCommentTreeUseCase:
        """Provide comment tree use case."""
        return GetCommentTreeUseCase(
            comment_service=comment_service,
            title_length=settings.rendering.title_length,
        )
