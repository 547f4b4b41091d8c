"""Thread hierarchy reconstruction.

Works on one pre-fetched flat snapshot of a thread: parent links are
resolved through an id-keyed map, never by querying storage per node.
"""

import math
from collections import defaultdict
from typing import Iterable, Iterator

from commentary.domain.error import IntegrityError
from commentary.domain.model.comment import Comment
from commentary.domain.value import CommentId

CommentTree = dict[Comment, "CommentTree"]

DEFAULT_MAX_DEPTH = 256


def relevance_key(comment: Comment) -> tuple[int, object, int]:
    """Sort key: highest score first, then oldest first."""
    return (-comment.score, comment.created_at, comment.id)


class ThreadIndex:
    """Parent/child lookup over a flat thread snapshot."""

    def __init__(self, comments: Iterable[Comment]) -> None:
        self.by_id: dict[CommentId, Comment] = {}
        self.children: dict[CommentId, list[Comment]] = defaultdict(list)
        self.roots: list[Comment] = []

        snapshot = list(comments)
        for comment in snapshot:
            if comment.parent_id == comment.id or comment.descends_from(comment.id):
                raise IntegrityError(f"Comment {comment.id} is its own ancestor")
            self.by_id[comment.id] = comment

        for comment in snapshot:
            # A parent outside the snapshot makes the comment a root here
            if comment.parent_id is not None and comment.parent_id in self.by_id:
                self.children[comment.parent_id].append(comment)
            else:
                self.roots.append(comment)

        for siblings in self.children.values():
            siblings.sort(key=relevance_key)
        self.roots.sort(key=relevance_key)

    def walk(
        self, start: Comment, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> Iterator[tuple[Comment, int]]:
        """Yield every descendant of ``start`` with its depth below it.

        Raises:
            IntegrityError: If the walk loops back or exceeds ``max_depth``
        """
        seen = {start.id}
        stack = [(child, 1) for child in reversed(self.children.get(start.id, []))]
        while stack:
            comment, depth = stack.pop()
            if comment.id in seen:
                raise IntegrityError(f"Ancestry cycle detected at comment {comment.id}")
            if depth > max_depth:
                raise IntegrityError(
                    f"Comment {comment.id} is nested deeper than {max_depth} levels"
                )
            seen.add(comment.id)
            yield comment, depth
            stack.extend(
                (child, depth + 1)
                for child in reversed(self.children.get(comment.id, []))
            )

    def descendants(
        self, comment_id: CommentId, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> list[Comment]:
        """All descendants of a comment, depth-first in relevance order."""
        start = self.by_id.get(comment_id)
        if start is None:
            return []
        return [comment for comment, _ in self.walk(start, max_depth)]


def build_comment_tree(
    comments: Iterable[Comment],
    min_score: float = -math.inf,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> CommentTree:
    """Nest a thread's comments into ``{comment: {reply: {...}}}``.

    Roots below ``min_score`` are dropped together with their whole
    subtree; replies under a kept root are kept regardless of their own
    score. Siblings are ordered by score (descending), then creation time.

    Args:
        comments: Flat snapshot of one thread
        min_score: Minimum score for a root to be included
        max_depth: Maximum nesting depth before the data is considered corrupt

    Returns:
        Ordered nested mapping

    Raises:
        IntegrityError: On ancestry cycles or runaway depth
    """
    index = ThreadIndex(comments)

    # Every comment must hang off a root; anything left over sits on a cycle
    reachable = len(index.roots)
    for root in index.roots:
        reachable += sum(1 for _ in index.walk(root, max_depth))
    if reachable != len(index.by_id):
        raise IntegrityError("Ancestry cycle detected: some comments have no root")

    def build_subtree(comment: Comment) -> CommentTree:
        return {
            child: build_subtree(child) for child in index.children.get(comment.id, [])
        }

    return {
        root: build_subtree(root) for root in index.roots if root.score >= min_score
    }
