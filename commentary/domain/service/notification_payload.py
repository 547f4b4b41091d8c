"""JSON snapshots embedded in comment notifications.

A notification about comment D stores::

    {
        "comment": {
            "id": ..., "class": {"name": "Comment"}, "path": ..., "title": ...,
            "processed_html": ..., "created_at": ..., "updated_at": ...,
            "ancestors": [{"id": ..., "title": ..., "path": ..., "depth": ...,
                           "user": {"username": ...}}, ...],
        },
    }

``ancestors`` runs from the thread root down to D's parent.
"""

import copy
from typing import Any, Iterable

from commentary.domain.model.comment import Comment
from commentary.domain.value import CommentId


def ancestor_entry(comment: Comment) -> dict[str, Any]:
    """Snapshot of one ancestor inside a notification payload."""
    return {
        "id": comment.id,
        "title": comment.title(),
        "path": comment.path,
        "depth": comment.depth,
        "user": {"username": comment.author_username.root},
    }


def comment_payload(comment: Comment, ancestors: Iterable[Comment]) -> dict[str, Any]:
    """Full notification payload for a comment and its lineage."""
    return {
        "comment": {
            "id": comment.id,
            "class": {"name": "Comment"},
            "path": comment.path,
            "title": comment.title(),
            "processed_html": comment.processed_html,
            "created_at": comment.created_at.isoformat(),
            "updated_at": comment.updated_at.isoformat(),
            "ancestors": [ancestor_entry(ancestor) for ancestor in ancestors],
        }
    }


def ancestor_entries(payload: dict[str, Any]) -> list[dict[str, Any]]:
    comment = payload.get("comment")
    if not isinstance(comment, dict):
        return []
    ancestors = comment.get("ancestors")
    return ancestors if isinstance(ancestors, list) else []


def needs_title_update(
    payload: dict[str, Any], ancestor_id: CommentId, title: str
) -> bool:
    """Whether the payload embeds ``ancestor_id`` with a different title."""
    return any(
        isinstance(entry, dict)
        and entry.get("id") == ancestor_id
        and entry.get("title") != title
        for entry in ancestor_entries(payload)
    )


def with_ancestor_title(
    payload: dict[str, Any], ancestor_id: CommentId, title: str
) -> dict[str, Any]:
    """Copy of ``payload`` with the title of one ancestor entry replaced.

    All other fields and all other ancestors are left as they were.
    """
    updated = copy.deepcopy(payload)
    for entry in ancestor_entries(updated):
        if isinstance(entry, dict) and entry.get("id") == ancestor_id:
            entry["title"] = title
    return updated
