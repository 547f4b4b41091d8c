"""Comment domain service."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import logfire

from commentary.config import Settings
from commentary.domain.error import (
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from commentary.domain.model.comment import SEARCH_RECORD_NAME, Comment
from commentary.domain.model.commentable import Commentable
from commentary.domain.repository import (
    CommentableRepository,
    CommentRepository,
    MentionRepository,
    NotificationRepository,
    NotificationSubscriptionRepository,
    ReactionRepository,
)
from commentary.domain.service.cascade import CascadePropagator, CascadeResult
from commentary.domain.service.comment_processor import CommentProcessor
from commentary.domain.service.comment_tree import CommentTree, build_comment_tree
from commentary.domain.service.search_index import SearchIndexer
from commentary.domain.service.user_service import UserService
from commentary.domain.value import CommentableRef, CommentId, UserId

from .base import Service


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of a soft delete or destroy."""

    comment: Comment
    cascade: Optional[CascadeResult]


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
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
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            commentable_repository: Article/podcast episode lookup
            notification_repository: Notification store
            mention_repository: Mention repository
            reaction_repository: Reaction repository
            subscription_repository: Notification subscription repository
            user_service: User domain service
            processor: Markdown processing pipeline
            cascade: Descendant notification propagator
            search_indexer: Outbound search index channel
            settings: Application settings
        """
        self.comment_repository = comment_repository
        self.commentable_repository = commentable_repository
        self.notification_repository = notification_repository
        self.mention_repository = mention_repository
        self.reaction_repository = reaction_repository
        self.subscription_repository = subscription_repository
        self.user_service = user_service
        self.processor = processor
        self.cascade = cascade
        self.search_indexer = search_indexer
        self.settings = settings

    async def create_comment(
        self,
        commentable: CommentableRef,
        user_id: UserId,
        body_markdown: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a commentable or reply to another comment.

        Args:
            commentable: Thread root
            user_id: Author user ID
            body_markdown: Raw comment text
            parent_id: Parent comment ID for replies (None for a root comment)

        Returns:
            Created comment with processed HTML

        Raises:
            ValidationError: If any comment invariant is violated
        """
        with logfire.span(
            "comment_service.create_comment",
            commentable=str(commentable),
            user_id=user_id,
            parent_id=parent_id,
        ):
            self._validate_body(body_markdown)
            item = await self._published_commentable(commentable)

            author = await self.user_service.get_by_id(user_id)
            if author is None:
                raise ValidationError("user", "must exist")

            ancestry: tuple[CommentId, ...] = ()
            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None:
                    logfire.error("Parent comment not found", parent_id=parent_id)
                    raise ValidationError("parent_id", "must exist")
                if parent.commentable != commentable:
                    logfire.error(
                        "Parent comment does not belong to commentable",
                        parent_id=parent_id,
                        parent_commentable=str(parent.commentable),
                        target_commentable=str(commentable),
                    )
                    raise ValidationError("parent_id", "must belong to the same thread")
                ancestry = parent.child_ancestry
                if len(ancestry) > self.settings.threads.max_depth:
                    raise ValidationError("parent_id", "is nested too deeply")

            if await self.comment_repository.exists_duplicate(
                body_markdown, user_id, ancestry, commentable
            ):
                raise ValidationError("body_markdown", "has already been taken")

            processed = await self.processor.process(body_markdown, item)

            now = datetime.now()
            comment = Comment(
                id=await self.comment_repository.next_id(),
                commentable=commentable,
                user_id=user_id,
                author_username=author.username,
                body_markdown=body_markdown,
                processed_html=processed.html,
                parent_id=parent_id,
                ancestry=ancestry,
                markdown_character_count=len(body_markdown),
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.save(comment)

            await self.mention_repository.replace_for_comment(
                saved.id, [user.id for user in processed.mentioned_users]
            )
            await self.user_service.record_comment_activity(user_id, now)
            self.search_indexer.index(SEARCH_RECORD_NAME, saved.index_id)

            logfire.info(
                "Comment created",
                comment_id=saved.id,
                commentable=str(commentable),
                depth=saved.depth,
                mentions=len(processed.mentioned_users),
            )
            return saved

    async def update_body(self, comment_id: CommentId, body_markdown: str) -> Comment:
        """Replace a comment's markdown and recompute everything derived from it.

        Args:
            comment_id: Comment ID
            body_markdown: New raw text

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment doesn't exist
            ValidationError: If the new text violates an invariant
        """
        with logfire.span(
            "comment_service.update_body",
            comment_id=comment_id,
            text_length=len(body_markdown),
        ):
            comment = await self.get_comment(comment_id)
            self._validate_body(body_markdown)
            item = await self._published_commentable(comment.commentable)

            if await self.comment_repository.exists_duplicate(
                body_markdown,
                comment.user_id,
                comment.ancestry,
                comment.commentable,
                exclude_id=comment.id,
            ):
                raise ValidationError("body_markdown", "has already been taken")

            processed = await self.processor.process(body_markdown, item)
            now = datetime.now()
            updated = await self.comment_repository.save(
                comment.model_copy(
                    update={
                        "body_markdown": body_markdown,
                        "processed_html": processed.html,
                        "markdown_character_count": len(body_markdown),
                        "updated_at": now,
                    }
                )
            )

            await self.mention_repository.replace_for_comment(
                updated.id, [user.id for user in processed.mentioned_users]
            )
            await self.user_service.record_comment_activity(updated.user_id, now)
            if not updated.deleted:
                self.search_indexer.index(SEARCH_RECORD_NAME, updated.index_id)

            logfire.info(
                "Comment text updated",
                comment_id=comment_id,
                text_length=updated.markdown_character_count,
            )
            return updated

    async def update_score(self, comment_id: CommentId, score: int) -> Comment:
        """Set a comment's relevance score."""
        with logfire.span(
            "comment_service.update_score", comment_id=comment_id, score=score
        ):
            comment = await self.get_comment(comment_id)
            return await self.comment_repository.save(
                comment.model_copy(update={"score": score})
            )

    async def soft_delete(self, comment_id: CommentId) -> DeletionOutcome:
        """Mark a comment deleted and fix up its descendants' notifications.

        The comment keeps its place in the thread. Its own notifications are
        removed, the search index is told to drop it, and descendants'
        notifications get ``"[deleted]"`` as this comment's title. Deleting
        an already deleted comment only reruns the cascade, which repairs
        descendants a failed earlier run left behind; nothing is signalled.

        Args:
            comment_id: Comment ID

        Returns:
            The deleted comment and the cascade result (None if the cascade failed)

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span("comment_service.soft_delete", comment_id=comment_id):
            comment = await self.get_comment(comment_id)
            if comment.deleted:
                logfire.info("Comment already deleted", comment_id=comment_id)
                return DeletionOutcome(
                    comment=comment, cascade=await self._run_cascade(comment)
                )

            deleted = await self.comment_repository.save(
                comment.model_copy(update={"deleted": True, "updated_at": datetime.now()})
            )
            removed = await self.notification_repository.delete_by_notifiable(deleted.id)
            self.search_indexer.remove(self.settings.search.index_name, deleted.index_id)

            logfire.info(
                "Comment soft-deleted",
                comment_id=comment_id,
                notifications_removed=removed,
            )
            return DeletionOutcome(
                comment=deleted, cascade=await self._run_cascade(deleted)
            )

    async def destroy(self, comment_id: CommentId) -> DeletionOutcome:
        """Permanently remove a comment.

        Reactions, mentions and subscriptions are destroyed, notifications
        are deleted without side effects, and descendants' notifications show
        ``"[deleted]"`` for this comment. Replies are kept. No index signal
        is emitted.

        Args:
            comment_id: Comment ID

        Returns:
            The removed comment and the cascade result (None if the cascade failed)

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span("comment_service.destroy", comment_id=comment_id):
            comment = await self.get_comment(comment_id)

            cascade = await self._run_cascade(comment.model_copy(update={"deleted": True}))

            reactions = await self.reaction_repository.delete_by_comment(comment.id)
            mentions = await self.mention_repository.delete_by_comment(comment.id)
            subscriptions = await self.subscription_repository.delete_by_comment(
                comment.id
            )
            notifications = await self.notification_repository.delete_by_notifiable(
                comment.id
            )
            await self.comment_repository.delete(comment.id)
            await self.user_service.record_comment_activity(comment.user_id)

            logfire.info(
                "Comment destroyed",
                comment_id=comment_id,
                reactions=reactions,
                mentions=mentions,
                subscriptions=subscriptions,
                notifications=notifications,
            )
            return DeletionOutcome(comment=comment, cascade=cascade)

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=comment_id)
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def tree_for(
        self, commentable: CommentableRef, min_score: float = -math.inf
    ) -> CommentTree:
        """Nested reply tree of a thread.

        Args:
            commentable: Thread root
            min_score: Roots scoring below this are dropped with their subtrees

        Returns:
            ``{comment: {reply: {...}}}`` ordered by score, then age

        Raises:
            IntegrityError: If the thread's ancestry is corrupt
        """
        with logfire.span(
            "comment_service.tree_for",
            commentable=str(commentable),
            min_score=min_score,
        ):
            comments = await self.comment_repository.find_by_commentable(commentable)
            tree = build_comment_tree(
                comments, min_score, max_depth=self.settings.threads.max_depth
            )
            logfire.info(
                "Comment tree built",
                commentable=str(commentable),
                comments=len(comments),
                roots=len(tree),
            )
            return tree

    async def parent_or_root(self, comment: Comment) -> Comment | Commentable:
        """The parent comment, or the commentable for a root comment.

        Raises:
            NotFoundError: If the parent or commentable no longer exists
        """
        if comment.parent_id is not None:
            return await self.get_comment(comment.parent_id)
        item = await self.commentable_repository.find(comment.commentable)
        if item is None:
            raise NotFoundError(comment.commentable.type.value, str(comment.commentable.id))
        return item

    async def parent_user(self, comment: Comment) -> UserId | None:
        """Author of the parent comment, or of the commentable for a root comment."""
        return (await self.parent_or_root(comment)).user_id

    def _validate_body(self, body_markdown: str | None) -> None:
        rendering = self.settings.rendering
        if not body_markdown:
            raise ValidationError("body_markdown", "can't be blank")
        if len(body_markdown) < rendering.min_markdown_length:
            raise ValidationError(
                "body_markdown",
                f"is too short (minimum is {rendering.min_markdown_length} characters)",
            )
        if len(body_markdown) > rendering.max_markdown_length:
            raise ValidationError(
                "body_markdown",
                f"is too long (maximum is {rendering.max_markdown_length} characters)",
            )

    async def _published_commentable(self, ref: CommentableRef) -> Commentable:
        item = await self.commentable_repository.find(ref)
        if item is None:
            raise ValidationError("commentable", "must exist")
        if not item.is_published():
            raise ValidationError("commentable", "must be published")
        return item

    async def _run_cascade(self, comment: Comment) -> Optional[CascadeResult]:
        """Run the cascade without letting its failure undo the mutation.

        Payload writes happen inside a savepoint, so a failure discards only
        them. The cascade is idempotent; deleting the comment again reruns it.
        """
        try:
            async with self.notification_repository.savepoint():
                return await self.cascade.propagate(comment)
        except IntegrityError as e:
            logfire.error(
                "Cascade aborted on corrupt ancestry",
                comment_id=comment.id,
                error=str(e),
            )
        except Exception as e:
            logfire.error(
                "Cascade failed, will heal on next run",
                comment_id=comment.id,
                error=str(e),
            )
        return None
