"""Tag endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blogcms.api.deps import get_db, require_admin
from blogcms.crud import crud_tag
from blogcms.models.tag import Tag
from blogcms.schemas.tag import TagCreate, TagResponse, TagUpdate, TagWithPostCount

router = APIRouter(
    prefix="/tags",
    tags=["Tags"],
)

admin_router = APIRouter(
    prefix="/admin/tags",
    tags=["Admin Tags"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=List[TagWithPostCount], summary="List tags")
def list_tags(db: Session = Depends(get_db)) -> List[TagWithPostCount]:
    return crud_tag.get_all_with_post_count(db)


@router.get("/{slug}", response_model=TagResponse, summary="Get tag by slug")
def get_tag(slug: str, db: Session = Depends(get_db)) -> Tag:
    return crud_tag.get_by_slug_or_raise(db, slug)


@admin_router.get("", response_model=List[TagWithPostCount], summary="List tags (admin)")
def admin_list_tags(db: Session = Depends(get_db)) -> List[TagWithPostCount]:
    return crud_tag.get_all_with_post_count(db)


@admin_router.post(
    "",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create tag",
)
def create_tag(tag_in: TagCreate, db: Session = Depends(get_db)) -> Tag:
    return crud_tag.create_tag(db, tag_in=tag_in)


@admin_router.put("/{tag_id}", response_model=TagResponse, summary="Update tag")
def update_tag(
    tag_id: int,
    tag_in: TagUpdate,
    db: Session = Depends(get_db),
) -> Tag:
    tag = crud_tag.get_or_raise(db, tag_id)
    return crud_tag.update(db, db_obj=tag, obj_in=tag_in.model_dump(exclude_none=True))


@admin_router.delete("/{tag_id}", status_code=status.HTTP_200_OK, summary="Delete tag")
def delete_tag(tag_id: int, db: Session = Depends(get_db)) -> dict:
    crud_tag.delete_tag(db, tag_id=tag_id)
    return {"success": True, "message": "Tag deleted"}
