"""Domain layer DI providers."""

from dishka import Scope, provide

from commentary.config import RenderingSettings, Settings
from commentary.domain.repository import (
    CommentableRepository,
    CommentRepository,
    MentionRepository,
    NotificationRepository,
    NotificationSubscriptionRepository,
    ReactionRepository,
    UserRepository,
)
from commentary.domain.service import (
    CascadePropagator,
    CommentProcessor,
    CommentService,
    HtmlEnricher,
    MarkdownRenderer,
    SearchIndexer,
    UserService,
)
from commentary.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services that touch repositories are REQUEST-scoped to align with the
    repository/session lifecycle. The pure HTML pipeline is shared.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_markdown_renderer(self) -> MarkdownRenderer:
        """Provide markdown renderer."""
        return MarkdownRenderer()

    @provide(scope=Scope.APP)
    def get_html_enricher(self, rendering: RenderingSettings) -> HtmlEnricher:
        """Provide HTML enricher configured for this deployment's domain."""
        return HtmlEnricher(
            app_domain=rendering.app_domain,
            url_display_limit=rendering.url_display_limit,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_comment_processor(
        self,
        renderer: MarkdownRenderer,
        enricher: HtmlEnricher,
        user_service: UserService,
    ) -> CommentProcessor:
        """Provide comment processing pipeline."""
        return CommentProcessor(
            renderer=renderer, enricher=enricher, user_service=user_service
        )

    @provide
    def get_cascade_propagator(
        self,
        comment_repository: CommentRepository,
        notification_repository: NotificationRepository,
        settings: Settings,
    ) -> CascadePropagator:
        """Provide deletion cascade propagator."""
        return CascadePropagator(
            comment_repository=comment_repository,
            notification_repository=notification_repository,
            max_depth=settings.threads.max_depth,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        commentable_repository: CommentableRepository,
        notification_repository: NotificationRepository,
        mention_repository: MentionRepository,
        reaction_repository: ReactionRepository,
        subscription_repository: NotificationSubscriptionRepository,
        user_service: UserService,
        processor: CommentProcessor,
        cascade: CascadePropagator,
        search_indexer: SearchIndexer,
        settings: Settings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            commentable_repository=commentable_repository,
            notification_repository=notification_repository,
            mention_repository=mention_repository,
            reaction_repository=reaction_repository,
            subscription_repository=subscription_repository,
            user_service=user_service,
            processor=processor,
            cascade=cascade,
            search_indexer=search_indexer,
            settings=settings,
        )
