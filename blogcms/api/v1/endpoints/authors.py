"""Author endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blogcms.api.deps import get_db, require_admin
from blogcms.crud import crud_author
from blogcms.models.author import Author
from blogcms.schemas.author import (
    AuthorCreate,
    AuthorResponse,
    AuthorUpdate,
    AuthorWithPostCount,
)

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
)

admin_router = APIRouter(
    prefix="/admin/authors",
    tags=["Admin Authors"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=List[AuthorWithPostCount], summary="List authors")
def list_authors(db: Session = Depends(get_db)) -> List[AuthorWithPostCount]:
    return crud_author.get_all_with_post_count(db)


@router.get("/{author_id}", response_model=AuthorResponse, summary="Get author by ID")
def get_author(author_id: int, db: Session = Depends(get_db)) -> Author:
    return crud_author.get_or_raise(db, author_id)


@admin_router.get("", response_model=List[AuthorWithPostCount], summary="List authors (admin)")
def admin_list_authors(db: Session = Depends(get_db)) -> List[AuthorWithPostCount]:
    return crud_author.get_all_with_post_count(db)


@admin_router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create author",
)
def create_author(author_in: AuthorCreate, db: Session = Depends(get_db)) -> Author:
    return crud_author.create(db, obj_in=author_in)


@admin_router.put("/{author_id}", response_model=AuthorResponse, summary="Update author")
def update_author(
    author_id: int,
    author_in: AuthorUpdate,
    db: Session = Depends(get_db),
) -> Author:
    author = crud_author.get_or_raise(db, author_id)
    return crud_author.update(db, db_obj=author, obj_in=author_in)


@admin_router.delete(
    "/{author_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete author",
    description="Refused while the author still has published posts.",
)
def delete_author(author_id: int, db: Session = Depends(get_db)) -> dict:
    crud_author.delete_author(db, author_id=author_id)
    return {"success": True, "message": "Author deleted"}
