"""Propagation of a comment's new title into its descendants' notifications.

Notifications about a reply embed the titles of the reply's ancestors.
When an ancestor is soft-deleted (or destroyed) those embedded titles must
read ``"[deleted]"``. This is a silent fix-up: payloads are rewritten in
place, no notification is sent.
"""

from dataclasses import dataclass
from functools import partial

import logfire

from commentary.domain.model.comment import Comment
from commentary.domain.repository import CommentRepository, NotificationRepository
from commentary.domain.service.base import Service
from commentary.domain.service.comment_tree import DEFAULT_MAX_DEPTH, ThreadIndex
from commentary.domain.service.notification_payload import (
    needs_title_update,
    with_ancestor_title,
)


@dataclass(frozen=True)
class CascadeResult:
    """Outcome of one cascade run."""

    descendants: int
    notifications_updated: int


class CascadePropagator(Service):
    """Rewrites ancestor snapshots in the notifications of a comment's subtree."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        notification_repository: NotificationRepository,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize cascade propagator.

        Args:
            comment_repository: Comment repository
            notification_repository: Notification store
            max_depth: Maximum subtree depth walked before aborting
        """
        self.comment_repository = comment_repository
        self.notification_repository = notification_repository
        self.max_depth = max_depth

    async def propagate(self, comment: Comment) -> CascadeResult:
        """Push ``comment``'s current title into every descendant's notifications.

        Idempotent: payloads already showing the title are not written again,
        so a retry after a partial failure only touches what is left.

        Args:
            comment: The ancestor whose title changed (in its new state)

        Returns:
            How many descendants were visited and notifications rewritten

        Raises:
            IntegrityError: If the subtree contains an ancestry cycle
        """
        with logfire.span(
            "cascade.propagate",
            comment_id=comment.id,
            deleted=comment.deleted,
        ):
            thread = await self.comment_repository.find_by_commentable(
                comment.commentable
            )
            index = ThreadIndex(thread)
            descendants = index.descendants(comment.id, self.max_depth)
            title = comment.title()

            updated = 0
            for descendant in descendants:
                notifications = await self.notification_repository.find_by_notifiable(
                    descendant.id
                )
                for notification in notifications:
                    if not needs_title_update(notification.json_data, comment.id, title):
                        continue
                    result = await self.notification_repository.update_payload(
                        notification.id,
                        partial(with_ancestor_title, ancestor_id=comment.id, title=title),
                    )
                    if result is not None:
                        updated += 1

            logfire.info(
                "Cascade propagated",
                comment_id=comment.id,
                descendants=len(descendants),
                notifications_updated=updated,
            )
            return CascadeResult(
                descendants=len(descendants), notifications_updated=updated
            )
