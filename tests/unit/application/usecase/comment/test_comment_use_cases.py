"""Unit tests for comment use cases."""

import pytest

from commentary.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    DestroyCommentRequest,
    DestroyCommentUseCase,
    GetCommentTreeRequest,
    GetCommentTreeUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from commentary.domain.error import (
    ContentDeletedException,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from commentary.domain.repository import CommentableRepository, UserRepository
from tests.conftest import make_article, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def seed(env) -> None:
    users = await env.get(UserRepository)
    await users.save(make_user(1, "alice"))
    await users.save(make_user(2, "bob"))
    commentables = await env.get(CommentableRepository)
    await commentables.save(make_article())


async def create(env, user_id: int, text: str, parent_id: int | None = None):
    use_case = await env.get(CreateCommentUseCase)
    response = await use_case.execute(
        CreateCommentRequest(
            commentable_type="Article",
            commentable_id=1,
            user_id=user_id,
            body_markdown=text,
            parent_id=parent_id,
        )
    )
    return response.comment


class TestCreateCommentUseCase:
    @pytest.mark.asyncio
    async def test_create_returns_comment_item(self, unit_env):
        await seed(unit_env)

        item = await create(unit_env, 1, "Hello *there*")

        assert item.username == "alice"
        assert item.title == "Hello there"
        assert item.path == f"/alice/comment/{item.id_code}"
        assert item.commentable_type == "Article"
        assert item.depth == 0
        assert not item.deleted

    @pytest.mark.asyncio
    async def test_unknown_commentable_type(self, unit_env):
        await seed(unit_env)
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                CreateCommentRequest(
                    commentable_type="User",
                    commentable_id=1,
                    user_id=1,
                    body_markdown="hi",
                )
            )

        assert exc_info.value.field == "commentable_type"


class TestUpdateCommentUseCase:
    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        await seed(unit_env)
        item = await create(unit_env, 1, "before")
        use_case = await unit_env.get(UpdateCommentUseCase)

        response = await use_case.execute(
            UpdateCommentRequest(comment_id=item.comment_id, user_id=1, body_markdown="after")
        )

        assert response.comment.title == "after"
        assert response.comment.body_markdown == "after"

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        await seed(unit_env)
        item = await create(unit_env, 1, "mine")
        use_case = await unit_env.get(UpdateCommentUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=item.comment_id, user_id=2, body_markdown="yours"
                )
            )

    @pytest.mark.asyncio
    async def test_deleted_comment_cannot_be_edited(self, unit_env):
        await seed(unit_env)
        item = await create(unit_env, 1, "soon gone")
        delete = await unit_env.get(DeleteCommentUseCase)
        await delete.execute(DeleteCommentRequest(comment_id=item.comment_id, user_id=1))
        use_case = await unit_env.get(UpdateCommentUseCase)

        with pytest.raises(ContentDeletedException):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=item.comment_id, user_id=1, body_markdown="revived"
                )
            )

    @pytest.mark.asyncio
    async def test_missing_comment(self, unit_env):
        await seed(unit_env)
        use_case = await unit_env.get(UpdateCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                UpdateCommentRequest(comment_id=404, user_id=1, body_markdown="x")
            )


class TestDeleteCommentUseCases:
    @pytest.mark.asyncio
    async def test_soft_delete_reports_cascade(self, unit_env):
        await seed(unit_env)
        root = await create(unit_env, 1, "root")
        await create(unit_env, 2, "reply", root.comment_id)
        use_case = await unit_env.get(DeleteCommentUseCase)

        response = await use_case.execute(
            DeleteCommentRequest(comment_id=root.comment_id, user_id=1)
        )

        assert response.comment.deleted
        assert response.comment.title == "[deleted]"
        assert response.cascade_completed
        assert response.descendants == 1

    @pytest.mark.asyncio
    async def test_only_author_can_soft_delete(self, unit_env):
        await seed(unit_env)
        item = await create(unit_env, 1, "mine")
        use_case = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteCommentRequest(comment_id=item.comment_id, user_id=2)
            )

    @pytest.mark.asyncio
    async def test_destroy(self, unit_env):
        await seed(unit_env)
        item = await create(unit_env, 1, "moderated")
        use_case = await unit_env.get(DestroyCommentUseCase)

        response = await use_case.execute(
            DestroyCommentRequest(comment_id=item.comment_id)
        )

        assert response.comment.comment_id == item.comment_id
        assert response.descendants == 0
        with pytest.raises(NotFoundError):
            await use_case.execute(DestroyCommentRequest(comment_id=item.comment_id))


class TestGetCommentTreeUseCase:
    @pytest.mark.asyncio
    async def test_nested_nodes(self, unit_env):
        await seed(unit_env)
        a = await create(unit_env, 1, "A")
        await create(unit_env, 2, "B", a.comment_id)
        await create(unit_env, 2, "C")
        use_case = await unit_env.get(GetCommentTreeUseCase)

        response = await use_case.execute(
            GetCommentTreeRequest(commentable_type="Article", commentable_id=1)
        )

        assert response.total == 3
        assert [node.title for node in response.comments] == ["A", "C"]
        assert [node.title for node in response.comments[0].children] == ["B"]
        assert response.comments[1].children == []

    @pytest.mark.asyncio
    async def test_min_score_filters_roots(self, unit_env):
        await seed(unit_env)
        await create(unit_env, 1, "A")
        use_case = await unit_env.get(GetCommentTreeUseCase)

        response = await use_case.execute(
            GetCommentTreeRequest(
                commentable_type="Article", commentable_id=1, min_score=1
            )
        )

        assert response.comments == []
        assert response.total == 0
