"""Comment body processing: markdown in, enriched HTML out."""

from dataclasses import dataclass, field

import logfire

from commentary.domain.model.commentable import Commentable
from commentary.domain.model.user import User
from commentary.domain.service.html_enricher import HtmlEnricher, mention_candidates
from commentary.domain.service.markdown import MarkdownRenderer
from commentary.domain.service.user_service import UserService


@dataclass(frozen=True)
class ProcessedBody:
    """Result of processing one comment body."""

    html: str
    mentioned_users: list[User] = field(default_factory=list)


class CommentProcessor:
    """Renders and enriches a comment body.

    The output depends only on the markdown, the set of existing users
    mentioned in it, and whether the commentable has video.
    """

    def __init__(
        self,
        renderer: MarkdownRenderer,
        enricher: HtmlEnricher,
        user_service: UserService,
    ) -> None:
        self.renderer = renderer
        self.enricher = enricher
        self.user_service = user_service

    async def process(self, markdown: str, commentable: Commentable) -> ProcessedBody:
        """Turn raw markdown into enriched HTML.

        Args:
            markdown: Raw comment body
            commentable: Thread root (decides timestamp linking)

        Returns:
            Enriched HTML and the users whose mentions were linked
        """
        with logfire.span(
            "comment_processor.process",
            markdown_length=len(markdown),
            has_video=commentable.has_video(),
        ):
            html = self.renderer.render(markdown)
            users = await self.user_service.resolve_mentions(mention_candidates(html))
            linked_names: set[str] = set()
            enriched = self.enricher.enrich(
                html,
                mention_paths={name: user.profile_path for name, user in users.items()},
                commentable=commentable,
                linked_mentions=linked_names,
            )
            linked = [user for name, user in users.items() if name in linked_names]
            return ProcessedBody(html=enriched, mentioned_users=linked)
