"""
Tests for post status transitions.
Run: pytest test_post_status.py
"""

import pytest

from blogcms.core.exceptions import InvalidStatusTransitionError
from blogcms.core.post_status import ALLOWED_TRANSITIONS, can_transition, ensure_transition
from blogcms.crud import crud_post
from blogcms.crud.post import CRUDPost
from blogcms.models.post import Post, PostStatus
from blogcms.schemas import PostUpdate

DRAFT = PostStatus.DRAFT
PUBLISHED = PostStatus.PUBLISHED
UNPUBLISHED = PostStatus.UNPUBLISHED
CORRECTED = PostStatus.CORRECTED


@pytest.mark.parametrize("current, target", [
    (DRAFT, PUBLISHED),
    (PUBLISHED, UNPUBLISHED),
    (PUBLISHED, CORRECTED),
    (UNPUBLISHED, PUBLISHED),
    (UNPUBLISHED, DRAFT),
    (CORRECTED, UNPUBLISHED),
    (CORRECTED, PUBLISHED),
])
def test_allowed_transitions(current, target):
    assert can_transition(current, target)
    ensure_transition(current, target)


@pytest.mark.parametrize("current, target", [
    (DRAFT, UNPUBLISHED),
    (DRAFT, CORRECTED),
    (PUBLISHED, DRAFT),
    (CORRECTED, DRAFT),
    (UNPUBLISHED, CORRECTED),
])
def test_rejected_transitions(current, target):
    assert not can_transition(current, target)
    with pytest.raises(InvalidStatusTransitionError):
        ensure_transition(current, target)


def test_same_state_always_allowed():
    for status in PostStatus:
        assert can_transition(status, status)


def test_every_status_has_a_row():
    assert set(ALLOWED_TRANSITIONS) == set(PostStatus)


def test_update_post_enforces_table(make_post, db):
    post = make_post("Draft post", status=DRAFT)

    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        crud_post.update_post(db, post_id=post.id, post_in=PostUpdate(status=CORRECTED))
    assert exc_info.value.status_code == 400

    view = crud_post.update_post(db, post_id=post.id, post_in=PostUpdate(status=PUBLISHED))
    assert view.status == PUBLISHED


def test_permissive_mode_allows_any_change(make_post, db):
    permissive = CRUDPost(Post, enforce_status_transitions=False)
    post = make_post("Anything goes", status=DRAFT)

    view = permissive.update_post(db, post_id=post.id, post_in=PostUpdate(status=CORRECTED))

    assert view.status == CORRECTED
