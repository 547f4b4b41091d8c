"""Unit tests for the deletion cascade into notification payloads."""

import asyncio

import pytest

from commentary.domain.repository import CommentRepository, NotificationRepository
from commentary.domain.service import CascadePropagator
from commentary.domain.service.notification_payload import (
    needs_title_update,
    with_ancestor_title,
)
from commentary.domain.value import NotificationId
from tests.conftest import make_comment, make_notification
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed_thread(comment_repo, notification_repo):
    """A -> B -> C plus sibling S of A, with one notification per reply."""
    a = make_comment(1, html="<p>First post</p>")
    b = make_comment(2, parent=a, html="<p>Reply to A</p>")
    c = make_comment(3, parent=b, html="<p>Reply to B</p>")
    s = make_comment(4, html="<p>Sibling</p>")
    for comment in (a, b, c, s):
        await comment_repo.save(comment)

    await notification_repo.save(make_notification(10, b, [a]))
    await notification_repo.save(make_notification(11, c, [a, b]))
    await notification_repo.save(make_notification(12, s, []))
    return a, b, c, s


class TestCascadePropagator:
    """Tests for CascadePropagator.propagate."""

    @pytest.mark.asyncio
    async def test_deleted_title_reaches_all_descendants(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        cascade = await unit_env.get(CascadePropagator)
        a, b, c, s = await seed_thread(comment_repo, notification_repo)

        result = await cascade.propagate(a.model_copy(update={"deleted": True}))

        assert result.descendants == 2
        assert result.notifications_updated == 2

        (b_note,) = await notification_repo.find_by_notifiable(b.id)
        (c_note,) = await notification_repo.find_by_notifiable(c.id)
        assert b_note.json_data["comment"]["ancestors"][0]["title"] == "[deleted]"
        assert c_note.json_data["comment"]["ancestors"][0]["title"] == "[deleted]"
        # Other ancestors and fields untouched
        assert c_note.json_data["comment"]["ancestors"][1]["title"] == "Reply to A"
        assert c_note.json_data["comment"]["title"] == "Reply to B"

    @pytest.mark.asyncio
    async def test_only_deleted_comments_entry_changes(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        cascade = await unit_env.get(CascadePropagator)
        a, b, c, s = await seed_thread(comment_repo, notification_repo)

        await cascade.propagate(b.model_copy(update={"deleted": True}))

        (b_note,) = await notification_repo.find_by_notifiable(b.id)
        (c_note,) = await notification_repo.find_by_notifiable(c.id)
        assert b_note.json_data["comment"]["ancestors"][0]["title"] == "First post"
        assert [e["title"] for e in c_note.json_data["comment"]["ancestors"]] == [
            "First post",
            "[deleted]",
        ]

    @pytest.mark.asyncio
    async def test_siblings_untouched(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        cascade = await unit_env.get(CascadePropagator)
        a, b, c, s = await seed_thread(comment_repo, notification_repo)
        before = await notification_repo.find_by_notifiable(s.id)

        await cascade.propagate(a.model_copy(update={"deleted": True}))

        assert await notification_repo.find_by_notifiable(s.id) == before

    @pytest.mark.asyncio
    async def test_rerun_is_a_no_op(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        cascade = await unit_env.get(CascadePropagator)
        a, *_ = await seed_thread(comment_repo, notification_repo)
        deleted = a.model_copy(update={"deleted": True})

        await cascade.propagate(deleted)
        writes = notification_repo.payload_writes
        second = await cascade.propagate(deleted)

        assert second.notifications_updated == 0
        assert notification_repo.payload_writes == writes

    @pytest.mark.asyncio
    async def test_leaf_has_nothing_to_cascade(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        cascade = await unit_env.get(CascadePropagator)
        _, _, c, _ = await seed_thread(comment_repo, notification_repo)

        result = await cascade.propagate(c.model_copy(update={"deleted": True}))

        assert result.descendants == 0
        assert result.notifications_updated == 0

    @pytest.mark.asyncio
    async def test_overlapping_cascades_both_land(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        cascade = await unit_env.get(CascadePropagator)
        a, b, c, _ = await seed_thread(comment_repo, notification_repo)

        await asyncio.gather(
            cascade.propagate(a.model_copy(update={"deleted": True})),
            cascade.propagate(b.model_copy(update={"deleted": True})),
        )

        (b_note,) = await notification_repo.find_by_notifiable(b.id)
        (c_note,) = await notification_repo.find_by_notifiable(c.id)
        assert b_note.json_data["comment"]["ancestors"][0]["title"] == "[deleted]"
        assert [e["title"] for e in c_note.json_data["comment"]["ancestors"]] == [
            "[deleted]",
            "[deleted]",
        ]


class TestPayloadHelpers:
    def test_with_ancestor_title_returns_copy(self):
        a = make_comment(1)
        b = make_comment(2, parent=a)
        payload = make_notification(1, b, [a]).json_data

        updated = with_ancestor_title(payload, a.id, "[deleted]")

        assert updated["comment"]["ancestors"][0]["title"] == "[deleted]"
        assert payload["comment"]["ancestors"][0]["title"] == "Comment 1"

    def test_needs_title_update(self):
        a = make_comment(1)
        b = make_comment(2, parent=a)
        payload = make_notification(1, b, [a]).json_data

        assert needs_title_update(payload, a.id, "[deleted]")
        assert not needs_title_update(payload, a.id, "Comment 1")
        assert not needs_title_update(payload, b.id, "[deleted]")

    def test_malformed_payloads_ignored(self):
        assert not needs_title_update({}, 1, "[deleted]")
        assert not needs_title_update({"comment": {"ancestors": "x"}}, 1, "t")
        assert with_ancestor_title({"other": 1}, 1, "t") == {"other": 1}


class TestNotificationRepositoryLocking:
    @pytest.mark.asyncio
    async def test_update_payload_on_missing_notification(self, unit_env):
        notification_repo = await unit_env.get(NotificationRepository)

        assert (
            await notification_repo.update_payload(NotificationId(404), lambda p: p)
            is None
        )

    @pytest.mark.asyncio
    async def test_concurrent_writers_to_one_record_both_apply(self, unit_env):
        notification_repo = await unit_env.get(NotificationRepository)
        a = make_comment(1)
        b = make_comment(2, parent=a)
        c = make_comment(3, parent=b)
        note = make_notification(11, c, [a, b])
        await notification_repo.save(note)

        await asyncio.gather(
            notification_repo.update_payload(
                note.id, lambda p: with_ancestor_title(p, a.id, "[deleted]")
            ),
            notification_repo.update_payload(
                note.id, lambda p: with_ancestor_title(p, b.id, "[deleted]")
            ),
        )

        (stored,) = await notification_repo.find_by_notifiable(c.id)
        assert [e["title"] for e in stored.json_data["comment"]["ancestors"]] == [
            "[deleted]",
            "[deleted]",
        ]
        assert notification_repo.payload_writes == 2

    @pytest.mark.asyncio
    async def test_savepoint_discards_writes_on_failure(self, unit_env):
        notification_repo = await unit_env.get(NotificationRepository)
        a = make_comment(1)
        b = make_comment(2, parent=a)
        note = make_notification(10, b, [a])
        await notification_repo.save(note)

        with pytest.raises(RuntimeError):
            async with notification_repo.savepoint():
                await notification_repo.update_payload(
                    note.id, lambda p: with_ancestor_title(p, a.id, "[deleted]")
                )
                raise RuntimeError("store went away")

        (stored,) = await notification_repo.find_by_notifiable(b.id)
        assert stored.json_data["comment"]["ancestors"][0]["title"] == "Comment 1"

    @pytest.mark.asyncio
    async def test_savepoint_keeps_writes_on_success(self, unit_env):
        notification_repo = await unit_env.get(NotificationRepository)
        a = make_comment(1)
        b = make_comment(2, parent=a)
        note = make_notification(10, b, [a])
        await notification_repo.save(note)

        async with notification_repo.savepoint():
            await notification_repo.update_payload(
                note.id, lambda p: with_ancestor_title(p, a.id, "[deleted]")
            )

        (stored,) = await notification_repo.find_by_notifiable(b.id)
        assert stored.json_data["comment"]["ancestors"][0]["title"] == "[deleted]"

    @pytest.mark.asyncio
    async def test_deleting_notifications_releases_their_locks(self, unit_env):
        notification_repo = await unit_env.get(NotificationRepository)
        a = make_comment(1)
        b = make_comment(2, parent=a)
        note = make_notification(10, b, [a])
        await notification_repo.save(note)
        await notification_repo.update_payload(note.id, lambda p: p)

        assert await notification_repo.delete_by_notifiable(b.id) == 1
        assert note.id not in notification_repo._locks
