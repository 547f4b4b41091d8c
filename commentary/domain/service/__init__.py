"""Domain services."""

from .base import Service
from .cascade import CascadePropagator, CascadeResult
from .comment_processor import CommentProcessor, ProcessedBody
from .comment_service import CommentService, DeletionOutcome
from .comment_tree import CommentTree, ThreadIndex, build_comment_tree
from .html_enricher import HtmlEnricher
from .markdown import MarkdownRenderer
from .search_index import SearchIndexer
from .user_service import UserService

__all__ = [
    "CascadePropagator",
    "CascadeResult",
    "CommentProcessor",
    "CommentService",
    "CommentTree",
    "DeletionOutcome",
    "HtmlEnricher",
    "MarkdownRenderer",
    "ProcessedBody",
    "SearchIndexer",
    "Service",
    "ThreadIndex",
    "UserService",
    "build_comment_tree",
]
