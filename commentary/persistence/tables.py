"""SQLAlchemy table definitions.

Rows are mapped to immutable domain models by hand (see mappers.py).
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Sequence,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

comments_id_seq = Sequence("comments_id_seq", metadata=metadata)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("username", String(30), nullable=False, unique=True),
    Column("name", String(100), nullable=False, server_default=""),
    Column("last_comment_at", TIMESTAMP(timezone=True), nullable=True),
)

# ============================================================================
# COMMENTABLE TABLES
# ============================================================================
articles_table = Table(
    "articles",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(250), nullable=False),
    Column("path", Text, nullable=False),
    Column("published", Boolean, nullable=False, server_default="false"),
    Column("video", Text, nullable=True),  # Video source URL
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
)

podcast_episodes_table = Table(
    "podcast_episodes",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("title", Text, nullable=False),
    Column("path", Text, nullable=False),
    Column("published", Boolean, nullable=False, server_default="true"),
    Column("media_url", Text, nullable=True),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, comments_id_seq, primary_key=True),
    Column("commentable_type", String(32), nullable=False),
    Column("commentable_id", BigInteger, nullable=False),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("author_username", String(30), nullable=False),  # Denormalized from users
    Column("body_markdown", Text, nullable=False),
    Column("processed_html", Text, nullable=False, server_default=""),
    # No FK: replies outlive a destroyed parent
    Column("parent_id", BigInteger, nullable=True),
    Column("ancestry", Text, nullable=True),  # "root_id/.../parent_id"
    Column("score", Integer, nullable=False, server_default="0"),
    Column("deleted", Boolean, nullable=False, server_default="false"),
    Column("markdown_character_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "commentable_type IN ('Article', 'PodcastEpisode')",
        name="commentable_type_allowed",
    ),
    CheckConstraint(
        "char_length(body_markdown) BETWEEN 1 AND 25000",
        name="body_markdown_length",
    ),
)

Index(
    "idx_comments_commentable",
    comments_table.c.commentable_type,
    comments_table.c.commentable_id,
)
Index("idx_comments_ancestry", comments_table.c.ancestry)
Index("idx_comments_user_id", comments_table.c.user_id)

# Same text by the same author at the same thread position. The body is hashed
# to fit a btree entry; roots (NULL ancestry) must collide with each other too.
COMMENT_UNIQUENESS_INDEX = "uq_comments_body_position"
Index(
    COMMENT_UNIQUENESS_INDEX,
    func.md5(comments_table.c.body_markdown),
    comments_table.c.user_id,
    func.coalesce(comments_table.c.ancestry, ""),
    comments_table.c.commentable_id,
    comments_table.c.commentable_type,
    unique=True,
)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("notifiable_id", BigInteger, nullable=False),
    Column("notifiable_type", String(32), nullable=False),
    Column("action", String(50), nullable=True),
    Column("json_data", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_notifiable",
    notifications_table.c.notifiable_type,
    notifications_table.c.notifiable_id,
)

# ============================================================================
# COMMENT-OWNED TABLES
# ============================================================================
mentions_table = Table(
    "mentions",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("mentionable_id", BigInteger, nullable=False),
    Column("mentionable_type", String(32), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_mentions_mentionable",
    mentions_table.c.mentionable_type,
    mentions_table.c.mentionable_id,
)

reactions_table = Table(
    "reactions",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("reactable_id", BigInteger, nullable=False),
    Column("category", String(30), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_reactions_reactable_id", reactions_table.c.reactable_id)

notification_subscriptions_table = Table(
    "notification_subscriptions",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("notifiable_id", BigInteger, nullable=False),
    Column("notifiable_type", String(32), nullable=False),
    Column("config", String(30), nullable=False, server_default="all_comments"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notification_subscriptions_notifiable",
    notification_subscriptions_table.c.notifiable_type,
    notification_subscriptions_table.c.notifiable_id,
)
