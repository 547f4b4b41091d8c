"""User entity.

Users author comments and are the targets of @mentions.
"""

from datetime import datetime
from typing import Optional

from commentary.domain.model.common import DomainModel
from commentary.domain.value import UserId, Username


class User(DomainModel):
    """Registered user."""

    id: UserId
    username: Username
    name: str = ""
    last_comment_at: Optional[datetime] = None

    @property
    def profile_path(self) -> str:
        """Canonical profile path (``/{username}``)."""
        return self.username.profile_path
