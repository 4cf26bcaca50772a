"""Batched loading of post relations.

Posts store only ``author_id`` / ``category_id`` and reach their tags through
the ``post_tags`` junction table. ``PostRelationLoader`` fetches the related
rows for a whole page of posts with one query per entity type and groups
them in memory, so single-post and list views share the same code path.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from blogcms.models.author import Author
from blogcms.models.category import Category
from blogcms.models.post import Post
from blogcms.models.post_tag import PostTag
from blogcms.models.tag import Tag
from blogcms.schemas.author import AuthorResponse
from blogcms.schemas.category import CategoryResponse
from blogcms.schemas.post import PostWithRelations
from blogcms.schemas.tag import TagResponse
from blogcms.utils.text import calculate_read_time

logger = logging.getLogger(__name__)


def _distinct(values: Iterable[int]) -> List[int]:
    return list({v for v in values if v is not None})


class PostRelationLoader:
    """Load authors, categories and tags for many posts at once."""

    def __init__(self, db: Session):
        self.db = db

    def load_authors(self, author_ids: Iterable[int]) -> Dict[int, Author]:
        ids = _distinct(author_ids)
        if not ids:
            return {}
        rows = self.db.scalars(select(Author).where(Author.id.in_(ids))).all()
        return {author.id: author for author in rows}

    def load_categories(self, category_ids: Iterable[int]) -> Dict[int, Category]:
        ids = _distinct(category_ids)
        if not ids:
            return {}
        rows = self.db.scalars(select(Category).where(Category.id.in_(ids))).all()
        return {category.id: category for category in rows}

    def load_tags(self, post_ids: Iterable[int]) -> Dict[int, List[Tag]]:
        """Tags per post id, sorted by name.

        The inner join drops junction rows whose tag no longer resolves.
        """
        ids = _distinct(post_ids)
        if not ids:
            return {}
        stmt = (
            select(PostTag.post_id, Tag)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(PostTag.post_id.in_(ids))
            .order_by(Tag.name, Tag.id)
        )
        grouped: Dict[int, List[Tag]] = defaultdict(list)
        for post_id, tag in self.db.execute(stmt):
            grouped[post_id].append(tag)
        return grouped

    def assemble(self, posts: Sequence[Post]) -> List[PostWithRelations]:
        """Build ``PostWithRelations`` views, keeping the order of ``posts``.

        A missing author or category becomes ``None``.
        """
        if not posts:
            return []

        authors = self.load_authors(post.author_id for post in posts)
        categories = self.load_categories(post.category_id for post in posts)
        tags_by_post = self.load_tags(post.id for post in posts)

        views = []
        for post in posts:
            author = authors.get(post.author_id)
            category = categories.get(post.category_id)
            if author is None or category is None:
                logger.warning(
                    f"[POST] Post id={post.id} has dangling reference "
                    f"(author_id={post.author_id}, category_id={post.category_id})"
                )
            views.append(
                PostWithRelations.model_validate(post).model_copy(update={
                    "author": AuthorResponse.model_validate(author) if author else None,
                    "category": CategoryResponse.model_validate(category) if category else None,
                    "tags": [TagResponse.model_validate(tag) for tag in tags_by_post.get(post.id, [])],
                    "read_time": calculate_read_time(post.content or ""),
                })
            )
        return views
