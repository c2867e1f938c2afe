from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db, require_authenticated
from marketplace.core.security_context import SecurityContext
from marketplace.schemas.category import Category, CategoryCreate
from marketplace.schemas.response import ApiResponse
from marketplace.services import category as category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post(
    "",
    response_model=ApiResponse[Category],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    request: Request,
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Create a category. Admin only; the name is normalized first."""
    category = category_service.create_category(db, category_data.name, ctx)
    return ApiResponse.ok(request, Category.model_validate(category))


@router.get("", response_model=ApiResponse[list[Category]], response_model_exclude_none=True)
def get_all_categories(request: Request, db: Session = Depends(get_db)):
    categories = category_service.get_all_categories(db)
    return ApiResponse.ok(request, [Category.model_validate(c) for c in categories])


@router.get(
    "/search", response_model=ApiResponse[list[Category]], response_model_exclude_none=True
)
def search_categories(
    request: Request,
    keyword: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    categories = category_service.search_categories(db, keyword)
    return ApiResponse.ok(request, [Category.model_validate(c) for c in categories])


@router.get(
    "/{category_id}", response_model=ApiResponse[Category], response_model_exclude_none=True
)
def get_category(request: Request, category_id: str, db: Session = Depends(get_db)):
    category = category_service.get_category(db, category_id)
    return ApiResponse.ok(request, Category.model_validate(category))


@router.delete("/{name}", response_model=ApiResponse[str], response_model_exclude_none=True)
def delete_category(
    request: Request,
    name: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Delete a category by name. Admin only; fails while products still use it."""
    category_service.delete_category(db, name, ctx)
    return ApiResponse.ok(request, "Category has been deleted")
