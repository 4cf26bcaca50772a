"""Category endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blogcms.api.deps import get_db, require_admin
from blogcms.crud import crud_category
from blogcms.models.category import Category
from blogcms.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryWithPostCount,
)

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)

admin_router = APIRouter(
    prefix="/admin/categories",
    tags=["Admin Categories"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=List[CategoryWithPostCount], summary="List categories")
def list_categories(db: Session = Depends(get_db)) -> List[CategoryWithPostCount]:
    return crud_category.get_all_with_post_count(db)


@router.get("/{slug}", response_model=CategoryResponse, summary="Get category by slug")
def get_category(slug: str, db: Session = Depends(get_db)) -> Category:
    return crud_category.get_by_slug_or_raise(db, slug)


@admin_router.get("", response_model=List[CategoryWithPostCount], summary="List categories (admin)")
def admin_list_categories(db: Session = Depends(get_db)) -> List[CategoryWithPostCount]:
    return crud_category.get_all_with_post_count(db)


@admin_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
def create_category(category_in: CategoryCreate, db: Session = Depends(get_db)) -> Category:
    return crud_category.create_category(db, category_in=category_in)


@admin_router.put("/{category_id}", response_model=CategoryResponse, summary="Update category")
def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    db: Session = Depends(get_db),
) -> Category:
    category = crud_category.get_or_raise(db, category_id)
    return crud_category.update(db, db_obj=category, obj_in=category_in.model_dump(exclude_none=True))


@admin_router.delete("/{category_id}", status_code=status.HTTP_200_OK, summary="Delete category")
def delete_category(category_id: int, db: Session = Depends(get_db)) -> dict:
    crud_category.delete_category(db, category_id=category_id)
    return {"success": True, "message": "Category deleted"}
