"""Comment moderation endpoints (admin only)."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blogcms.api.deps import get_db, require_admin
from blogcms.crud import crud_comment
from blogcms.models.comment import Comment
from blogcms.schemas.comment import CommentAdminResponse

logger = logging.getLogger(__name__)

admin_router = APIRouter(
    prefix="/admin/comments",
    tags=["Admin Comments"],
    dependencies=[Depends(require_admin)],
)


@admin_router.get(
    "",
    response_model=List[CommentAdminResponse],
    summary="List comments",
    description="All comments, newest first. Filter with `approved=true|false`.",
)
def list_comments(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    approved: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
) -> List[Comment]:
    return crud_comment.get_all(db, skip=skip, limit=limit, approved=approved)


@admin_router.put(
    "/{comment_id}/approve",
    response_model=CommentAdminResponse,
    summary="Approve comment",
)
def approve_comment(comment_id: int, db: Session = Depends(get_db)) -> Comment:
    comment = crud_comment.approve(db, comment_id=comment_id)
    logger.info(f"[COMMENT] Approved comment id={comment_id}")
    return comment


@admin_router.delete("/{comment_id}", status_code=status.HTTP_200_OK, summary="Delete comment")
def delete_comment(comment_id: int, db: Session = Depends(get_db)) -> dict:
    crud_comment.delete(db, id=comment_id)
    return {"success": True, "message": "Comment deleted"}
