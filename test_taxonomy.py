"""
Tests for authors, categories, tags and comments.
Run: pytest test_taxonomy.py
"""

import pytest

from blogcms.core.exceptions import (
    BlogError,
    ForeignKeyViolation,
    NotFoundError,
    ResourceInUseError,
    UniqueConstraintViolation,
)
from blogcms.crud import crud_author, crud_category, crud_comment, crud_tag
from blogcms.models.post import PostStatus
from blogcms.schemas import CategoryCreate, CommentCreate, TagCreate


def test_category_slug_derived_from_name(make_category):
    category = make_category("Tips & Tricks")
    assert category.slug == "tips-tricks"


def test_duplicate_category_slug(make_category, db):
    make_category("News")
    with pytest.raises(UniqueConstraintViolation) as exc_info:
        crud_category.create_category(db, category_in=CategoryCreate(name="Other", slug="news"))
    assert exc_info.value.detail == "A category with this slug already exists"
    # Session is usable after the rollback
    assert crud_category.get_by_slug(db, "news") is not None


def test_duplicate_tag_slug(make_tag, db):
    make_tag("Python")
    with pytest.raises(UniqueConstraintViolation):
        crud_tag.create_tag(db, tag_in=TagCreate(name="python"))


def test_name_without_slug_characters_rejected(db):
    with pytest.raises(BlogError):
        crud_tag.create_tag(db, tag_in=TagCreate(name="!!!"))


def test_post_counts(make_post, make_tag, make_category, db):
    python = make_tag("Python")
    make_tag("Unused")
    make_post("One", tag_ids=[python.id])
    make_post("Two", tag_ids=[python.id])

    tag_counts = {t.name: t.post_count for t in crud_tag.get_all_with_post_count(db)}
    assert tag_counts == {"Python": 2, "Unused": 0}

    category_counts = {c.slug: c.post_count for c in crud_category.get_all_with_post_count(db)}
    assert category_counts == {"news": 2}

    author_counts = [a.post_count for a in crud_author.get_all_with_post_count(db)]
    assert author_counts == [2]


def test_category_in_use_cannot_be_deleted(make_post, make_category, db):
    category = make_category("Busy")
    make_post("Uses it", category_id=category.id)

    with pytest.raises(ResourceInUseError):
        crud_category.delete_category(db, category_id=category.id)


def test_unused_tag_can_be_deleted(make_tag, db):
    tag = make_tag("Temp")
    crud_tag.delete_tag(db, tag_id=tag.id)
    with pytest.raises(NotFoundError):
        crud_tag.get_by_slug_or_raise(db, "temp")


def test_tag_in_use_cannot_be_deleted(make_post, make_tag, db):
    tag = make_tag("Kept")
    make_post("Tagged", tag_ids=[tag.id])
    with pytest.raises(ResourceInUseError):
        crud_tag.delete_tag(db, tag_id=tag.id)


def test_author_with_published_posts_cannot_be_deleted(make_post, make_author, db):
    author = make_author("Prolific")
    make_post("Live", author_id=author.id, status=PostStatus.PUBLISHED)

    with pytest.raises(ResourceInUseError):
        crud_author.delete_author(db, author_id=author.id)


def test_author_with_corrected_posts_cannot_be_deleted(make_post, make_author, db):
    author = make_author("Corrector")
    make_post("Fixed", author_id=author.id, status=PostStatus.CORRECTED)

    with pytest.raises(ResourceInUseError) as excinfo:
        crud_author.delete_author(db, author_id=author.id)
    assert "1 published posts" in excinfo.value.detail
    assert crud_author.get(db, author.id) is not None


def test_author_with_only_drafts_hits_foreign_key(make_post, make_author, db):
    author = make_author("Drafty")
    make_post("Draft", author_id=author.id, status=PostStatus.DRAFT)

    with pytest.raises(ForeignKeyViolation):
        crud_author.delete_author(db, author_id=author.id)
    assert crud_author.get(db, author.id) is not None


def test_author_without_posts_deleted(make_author, db):
    author = make_author("Quiet")
    crud_author.delete_author(db, author_id=author.id)
    assert crud_author.get(db, author.id) is None


def test_post_with_unknown_category_rejected(make_post):
    with pytest.raises(ForeignKeyViolation):
        make_post("Broken", category_id=9999)


def test_comment_moderation(make_post, db):
    post = make_post("Discussed")
    comment = crud_comment.create_comment(db, post_id=post.id, comment_in=CommentCreate(
        content="First!", author_name="Ann", author_email="ann@example.com",
    ))
    assert comment.approved is False
    assert crud_comment.get_by_post(db, post_id=post.id) == []

    crud_comment.approve(db, comment_id=comment.id)

    approved = crud_comment.get_by_post(db, post_id=post.id)
    assert [c.id for c in approved] == [comment.id]
    assert len(crud_comment.get_all(db, approved=False)) == 0


def test_comment_on_missing_post(db):
    with pytest.raises(NotFoundError):
        crud_comment.create_comment(db, post_id=1, comment_in=CommentCreate(
            content="Hi", author_name="Bob", author_email="bob@example.com",
        ))
