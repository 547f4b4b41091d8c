"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from commentary.domain.value.common import RootValueObject, ValueObject
from commentary.domain.value.identifiers import CommentableId

USERNAME_PATTERN = re.compile(r"^\w{1,30}$")


class CommentableType(str, Enum):
    """Closed set of content types a comment thread can hang off."""

    ARTICLE = "Article"
    PODCAST_EPISODE = "PodcastEpisode"


class Username(RootValueObject[str]):
    """Username of a registered user.

    Word characters only (letters, digits, underscore), 1-30 characters.
    Usernames compare case-insensitively when resolving mentions.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Username must be 1-30 word characters")
        return v

    @property
    def profile_path(self) -> str:
        """Canonical profile path for this user."""
        return f"/{self.root}"


class CommentableRef(ValueObject):
    """Reference to the root content item of a thread (type + id)."""

    type: CommentableType
    id: CommentableId

    def __str__(self) -> str:
        return f"{self.type.value}#{self.id}"


class IndexAction(str, Enum):
    """Kind of signal sent to the search indexing collaborator."""

    INDEX = "index"
    REMOVE = "remove"


class IndexSignal(ValueObject):
    """Fire-and-forget message for the search indexing collaborator.

    Both actions carry the same stable key (``"comments-{id}"``). For
    ``INDEX`` the target is the record type (``"Comment"``); for ``REMOVE``
    it is the index name.
    """

    action: IndexAction
    target: str
    key: str
