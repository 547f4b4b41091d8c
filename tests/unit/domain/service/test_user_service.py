"""Unit tests for UserService."""

from datetime import datetime

import pytest

from commentary.domain.repository import UserRepository
from commentary.domain.service import UserService
from commentary.domain.value import UserId
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestUserService:
    @pytest.mark.asyncio
    async def test_resolve_mentions_is_case_insensitive(self, unit_env):
        users = await unit_env.get(UserRepository)
        service = await unit_env.get(UserService)
        await users.save(make_user(1, "Alice"))
        await users.save(make_user(2, "bob"))

        resolved = await service.resolve_mentions({"alice", "ghost"})

        assert set(resolved) == {"alice"}
        assert resolved["alice"].id == UserId(1)

    @pytest.mark.asyncio
    async def test_resolve_no_candidates(self, unit_env):
        service = await unit_env.get(UserService)

        assert await service.resolve_mentions(set()) == {}

    @pytest.mark.asyncio
    async def test_get_missing_user(self, unit_env):
        service = await unit_env.get(UserService)

        assert await service.get_by_id(UserId(42)) is None

    @pytest.mark.asyncio
    async def test_record_comment_activity(self, unit_env):
        users = await unit_env.get(UserRepository)
        service = await unit_env.get(UserService)
        await users.save(make_user(1, "alice"))
        at = datetime(2024, 5, 1, 9, 30)

        await service.record_comment_activity(UserId(1), at)

        assert (await users.find_by_id(UserId(1))).last_comment_at == at
