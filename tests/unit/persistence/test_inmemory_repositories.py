"""Unit tests for the in-memory repositories used by the unit suite."""

import pytest

from commentary.domain.value import CommentId, UserId
from commentary.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryMentionRepository,
    InMemoryUserRepository,
)
from tests.conftest import ARTICLE_REF, make_comment, make_user


class TestInMemoryCommentRepository:
    @pytest.mark.asyncio
    async def test_next_id_skips_saved_ids(self):
        repo = InMemoryCommentRepository()
        await repo.save(make_comment(1))

        assert await repo.next_id() == CommentId(2)

    @pytest.mark.asyncio
    async def test_find_by_commentable_includes_deleted(self):
        repo = InMemoryCommentRepository()
        await repo.save(make_comment(2, deleted=True))
        await repo.save(make_comment(1))

        comments = await repo.find_by_commentable(ARTICLE_REF)

        assert [c.id for c in comments] == [1, 2]

    @pytest.mark.asyncio
    async def test_exists_duplicate_ignores_excluded_comment(self):
        repo = InMemoryCommentRepository()
        comment = await repo.save(make_comment(1))

        args = (comment.body_markdown, comment.user_id, (), ARTICLE_REF)
        assert await repo.exists_duplicate(*args)
        assert not await repo.exists_duplicate(*args, exclude_id=comment.id)


class TestInMemoryMentionRepository:
    @pytest.mark.asyncio
    async def test_replace_keeps_existing_and_drops_stale(self):
        repo = InMemoryMentionRepository()
        first = await repo.replace_for_comment(CommentId(1), [UserId(1), UserId(2)])

        second = await repo.replace_for_comment(CommentId(1), [UserId(2), UserId(3)])

        kept = next(m for m in first if m.user_id == UserId(2))
        assert kept in second
        assert sorted(m.user_id for m in second) == [2, 3]


class TestInMemoryUserRepository:
    @pytest.mark.asyncio
    async def test_find_by_usernames_case_insensitive(self):
        repo = InMemoryUserRepository()
        await repo.save(make_user(1, "Alice"))

        found = await repo.find_by_usernames(["ALICE", "nobody"])

        assert [u.id for u in found] == [1]
