from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db, require_authenticated
from marketplace.core.security_context import SecurityContext
from marketplace.schemas.response import ApiResponse
from marketplace.schemas.shop import Shop, ShopCreate
from marketplace.services import shop as shop_service

router = APIRouter(prefix="/shops", tags=["shops"])


@router.post(
    "",
    response_model=ApiResponse[Shop],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_shop(
    request: Request,
    shop_data: ShopCreate,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Open a shop owned by the current user."""
    shop = shop_service.create_shop(db, shop_data, ctx)
    return ApiResponse.ok(request, Shop.model_validate(shop))


@router.get("", response_model=ApiResponse[list[Shop]], response_model_exclude_none=True)
def get_all_shops(request: Request, db: Session = Depends(get_db)):
    shops = shop_service.get_all_shops(db)
    return ApiResponse.ok(request, [Shop.model_validate(shop) for shop in shops])


@router.get("/search", response_model=ApiResponse[list[Shop]], response_model_exclude_none=True)
def search_shops(
    request: Request,
    district_code: str | None = Query(None, description="District code of the shop address"),
    province_code: str | None = Query(None, description="Province code of the shop address"),
    db: Session = Depends(get_db),
):
    """Find shops by district and/or province."""
    shops = shop_service.search_shops(db, district_code=district_code, province_code=province_code)
    return ApiResponse.ok(request, [Shop.model_validate(shop) for shop in shops])


@router.get(
    "/owner/{username}", response_model=ApiResponse[list[Shop]], response_model_exclude_none=True
)
def get_shops_by_owner(request: Request, username: str, db: Session = Depends(get_db)):
    shops = shop_service.get_shops_by_owner(db, username)
    return ApiResponse.ok(request, [Shop.model_validate(shop) for shop in shops])


@router.get("/{shop_id}", response_model=ApiResponse[Shop], response_model_exclude_none=True)
def get_shop(request: Request, shop_id: str, db: Session = Depends(get_db)):
    shop = shop_service.get_shop(db, shop_id)
    return ApiResponse.ok(request, Shop.model_validate(shop))
