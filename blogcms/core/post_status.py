"""Transition table for post status changes."""

from typing import Dict, FrozenSet

from blogcms.core.exceptions import InvalidStatusTransitionError
from blogcms.models.post import PostStatus


ALLOWED_TRANSITIONS: Dict[PostStatus, FrozenSet[PostStatus]] = {
    PostStatus.DRAFT: frozenset({PostStatus.PUBLISHED}),
    PostStatus.PUBLISHED: frozenset({PostStatus.UNPUBLISHED, PostStatus.CORRECTED}),
    PostStatus.UNPUBLISHED: frozenset({PostStatus.PUBLISHED, PostStatus.DRAFT}),
    PostStatus.CORRECTED: frozenset({PostStatus.UNPUBLISHED, PostStatus.PUBLISHED}),
}


def can_transition(current: PostStatus, target: PostStatus) -> bool:
    """Same-state updates are always allowed."""
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: PostStatus, target: PostStatus) -> None:
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(
            f"Cannot change post status from {current.value} to {target.value}"
        )
