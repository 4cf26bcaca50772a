"""Post endpoints: public site and admin dashboard."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blogcms.api.deps import get_db, require_admin
from blogcms.crud import crud_comment, crud_post
from blogcms.models.post import VISIBLE_STATUSES
from blogcms.schemas.comment import CommentCreate, CommentListResponse, CommentResponse
from blogcms.schemas.post import (
    PostAdminListResponse,
    PostCreate,
    PostListResponse,
    PostTagsUpdate,
    PostUpdate,
    PostWithRelations,
)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)

admin_router = APIRouter(
    prefix="/admin/posts",
    tags=["Admin Posts"],
    dependencies=[Depends(require_admin)],
)


# ----- Public -----

@router.get(
    "",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="List published posts",
    description="""
    Published posts, newest first, with author, category and tags.

    **Filters:** `category`, `tag` (slugs), `author_id`, `featured`
    """,
)
def list_posts(
    skip: int = Query(0, ge=0, description="Number of posts to skip"),
    limit: int = Query(20, ge=1, le=100, description="Maximum number of posts to return"),
    category: Optional[str] = Query(None, description="Category slug"),
    tag: Optional[str] = Query(None, description="Tag slug"),
    author_id: Optional[int] = Query(None, gt=0),
    featured: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
) -> PostListResponse:
    filters = dict(
        statuses=VISIBLE_STATUSES,
        category_slug=category,
        tag_slug=tag,
        author_id=author_id,
        featured=featured,
    )
    posts = crud_post.find_all(db, skip=skip, limit=limit, **filters)
    total = crud_post.count_filtered(db, **filters)
    return PostListResponse(
        posts=posts,
        total=total,
        has_more=(skip + len(posts) < total),
    )


@router.get(
    "/search",
    response_model=List[PostWithRelations],
    summary="Search published posts",
)
def search_posts(
    q: str = Query("", max_length=200, description="Search text"),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
) -> List[PostWithRelations]:
    return crud_post.search(db, query=q, limit=limit)


@router.get(
    "/recent",
    response_model=List[PostWithRelations],
    summary="Most recent published posts",
)
def recent_posts(
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
) -> List[PostWithRelations]:
    return crud_post.get_recent(db, limit=limit)


@router.get(
    "/{slug}",
    response_model=PostWithRelations,
    summary="Get published post by slug",
    description="Returns the post with its relations and counts one view.",
)
def get_post(slug: str, db: Session = Depends(get_db)) -> PostWithRelations:
    post = crud_post.get_by_slug_with_relations(db, slug=slug, visible_only=True)
    views = crud_post.increment_views(db, post_id=post.id)
    return post.model_copy(update={"views": views})


@router.get(
    "/{slug}/comments",
    response_model=CommentListResponse,
    summary="Approved comments of a post",
)
def list_post_comments(slug: str, db: Session = Depends(get_db)) -> CommentListResponse:
    post = crud_post.get_by_slug_with_relations(db, slug=slug, visible_only=True)
    comments = crud_comment.get_by_post(db, post_id=post.id, approved_only=True)
    return CommentListResponse(
        comments=[CommentResponse.model_validate(c) for c in comments],
        total=len(comments),
    )


@router.post(
    "/{slug}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a comment",
    description="Comments are stored unapproved and appear after moderation.",
)
def create_post_comment(
    slug: str,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
) -> CommentResponse:
    post = crud_post.get_by_slug_with_relations(db, slug=slug, visible_only=True)
    comment = crud_comment.create_comment(db, post_id=post.id, comment_in=comment_in)
    return CommentResponse.model_validate(comment)


# ----- Admin -----

@admin_router.get(
    "",
    response_model=PostAdminListResponse,
    summary="List all posts (admin)",
)
def admin_list_posts(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
) -> PostAdminListResponse:
    posts = crud_post.find_all_for_admin(db, skip=skip, limit=limit)
    return PostAdminListResponse(posts=posts, total=crud_post.count(db))


@admin_router.get("/{post_id}", response_model=PostWithRelations, summary="Get post by ID (admin)")
def admin_get_post(post_id: int, db: Session = Depends(get_db)) -> PostWithRelations:
    return crud_post.get_with_relations(db, post_id=post_id)


@admin_router.post(
    "",
    response_model=PostWithRelations,
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
)
def admin_create_post(post_in: PostCreate, db: Session = Depends(get_db)) -> PostWithRelations:
    return crud_post.create_post(db, post_in=post_in)


@admin_router.put(
    "/{post_id}",
    response_model=PostWithRelations,
    summary="Update post",
    description="""
    Partial update. `tag_ids` replaces the whole tag set when present;
    omit it to leave tags untouched.
    """,
)
def admin_update_post(
    post_id: int,
    post_in: PostUpdate,
    db: Session = Depends(get_db),
) -> PostWithRelations:
    return crud_post.update_post(db, post_id=post_id, post_in=post_in)


@admin_router.put(
    "/{post_id}/tags",
    response_model=PostWithRelations,
    summary="Replace the tag set of a post",
)
def admin_sync_post_tags(
    post_id: int,
    tags_in: PostTagsUpdate,
    db: Session = Depends(get_db),
) -> PostWithRelations:
    crud_post.sync_tags(db, post_id=post_id, tag_ids=tags_in.tag_ids)
    return crud_post.get_with_relations(db, post_id=post_id)


@admin_router.delete("/{post_id}", status_code=status.HTTP_200_OK, summary="Delete post")
def admin_delete_post(post_id: int, db: Session = Depends(get_db)) -> dict:
    crud_post.delete_post(db, post_id=post_id)
    return {"success": True, "message": "Post deleted"}
