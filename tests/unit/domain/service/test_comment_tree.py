"""Unit tests for thread tree building."""

import pytest

from commentary.domain.error import IntegrityError
from commentary.domain.service.comment_tree import ThreadIndex, build_comment_tree
from commentary.domain.value import CommentId
from tests.conftest import make_comment


def shape(tree) -> dict:
    """Tree as nested ids, for readable assertions."""
    return {comment.id: shape(children) for comment, children in tree.items()}


class TestBuildCommentTree:
    """Tests for build_comment_tree."""

    def test_nests_replies_under_parents(self):
        a = make_comment(1, score=5)
        b = make_comment(2, parent=a)
        c = make_comment(3, score=1)

        tree = build_comment_tree([b, c, a])

        assert shape(tree) == {1: {2: {}}, 3: {}}
        assert list(tree) == [a, c]

    def test_orders_siblings_by_score_then_age(self):
        root = make_comment(1)
        older = make_comment(2, parent=root, score=3, minutes=1)
        newer = make_comment(3, parent=root, score=3, minutes=2)
        best = make_comment(4, parent=root, score=9, minutes=3)

        tree = build_comment_tree([root, newer, older, best])

        assert [c.id for c in tree[root]] == [4, 2, 3]

    def test_score_threshold_applies_to_roots(self):
        root = make_comment(1, score=2)
        low_reply = make_comment(2, parent=root, score=0)
        hidden_root = make_comment(3, score=0)
        hidden_reply = make_comment(4, parent=hidden_root, score=10)

        tree = build_comment_tree([root, low_reply, hidden_root, hidden_reply], 1)

        assert shape(tree) == {1: {2: {}}}

    def test_deleted_comments_keep_their_place(self):
        root = make_comment(1, deleted=True)
        reply = make_comment(2, parent=root)

        assert shape(build_comment_tree([root, reply])) == {1: {2: {}}}

    def test_orphans_surface_as_roots(self):
        gone = make_comment(1)
        orphan = make_comment(2, parent=gone)

        assert shape(build_comment_tree([orphan])) == {2: {}}

    def test_empty_thread(self):
        assert build_comment_tree([]) == {}

    def test_cycle_raises_integrity_error(self):
        a = make_comment(1)
        b = make_comment(2, parent=a)
        looped_a = a.model_copy(update={"parent_id": CommentId(2), "ancestry": (2,)})

        with pytest.raises(IntegrityError):
            build_comment_tree([looped_a, b])

    def test_self_parent_raises_integrity_error(self):
        a = make_comment(1)
        broken = a.model_copy(update={"parent_id": CommentId(1), "ancestry": (1,)})

        with pytest.raises(IntegrityError):
            build_comment_tree([broken])

    def test_runaway_depth_raises_integrity_error(self):
        chain = [make_comment(1)]
        for comment_id in range(2, 7):
            chain.append(make_comment(comment_id, parent=chain[-1]))

        with pytest.raises(IntegrityError):
            build_comment_tree(chain, max_depth=3)


class TestThreadIndex:
    def test_descendants_depth_first(self):
        root = make_comment(1)
        child = make_comment(2, parent=root, score=5)
        grandchild = make_comment(3, parent=child)
        other_child = make_comment(4, parent=root)
        unrelated = make_comment(5)

        index = ThreadIndex([root, child, grandchild, other_child, unrelated])

        assert [c.id for c in index.descendants(CommentId(1))] == [2, 3, 4]
        assert index.descendants(CommentId(5)) == []
        assert index.descendants(CommentId(99)) == []
