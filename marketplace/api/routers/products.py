from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db, require_authenticated
from marketplace.core.security_context import SecurityContext
from marketplace.schemas.product import (
    Product,
    ProductCreate,
    ProductImage,
    ProductImageCreate,
    ProductUpdate,
)
from marketplace.schemas.response import ApiResponse
from marketplace.services import product as product_service

router = APIRouter(prefix="/products", tags=["products"])


def _to_list(products) -> list[Product]:
    return [Product.model_validate(product) for product in products]


@router.post(
    "",
    response_model=ApiResponse[Product],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    request: Request,
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """
    Add a product to a shop.

    Only the shop owner or an admin may do this. Unknown category names are
    created on the fly.
    """
    product = product_service.create_product(db, product_data, ctx)
    return ApiResponse.ok(request, Product.model_validate(product))


@router.get(
    "/shop/{shop_id}", response_model=ApiResponse[list[Product]], response_model_exclude_none=True
)
def get_products_by_shop(request: Request, shop_id: str, db: Session = Depends(get_db)):
    return ApiResponse.ok(request, _to_list(product_service.get_products_by_shop(db, shop_id)))


@router.get(
    "/category/{category_name}",
    response_model=ApiResponse[list[Product]],
    response_model_exclude_none=True,
)
def get_products_by_category(
    request: Request, category_name: str, db: Session = Depends(get_db)
):
    products = product_service.get_products_by_category(db, category_name)
    return ApiResponse.ok(request, _to_list(products))


@router.get(
    "/brand/{brand}", response_model=ApiResponse[list[Product]], response_model_exclude_none=True
)
def get_products_by_brand(request: Request, brand: str, db: Session = Depends(get_db)):
    return ApiResponse.ok(request, _to_list(product_service.get_products_by_brand(db, brand)))


@router.get(
    "/search", response_model=ApiResponse[list[Product]], response_model_exclude_none=True
)
def search_products(
    request: Request,
    keyword: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    return ApiResponse.ok(request, _to_list(product_service.search_products(db, keyword)))


@router.get("/{product_id}", response_model=ApiResponse[Product], response_model_exclude_none=True)
def get_product(request: Request, product_id: str, db: Session = Depends(get_db)):
    product = product_service.get_product(db, product_id)
    return ApiResponse.ok(request, Product.model_validate(product))


@router.put("/{product_id}", response_model=ApiResponse[Product], response_model_exclude_none=True)
def update_product(
    request: Request,
    product_id: str,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    product = product_service.update_product(db, product_id, product_data, ctx)
    return ApiResponse.ok(request, Product.model_validate(product))


@router.delete(
    "/{product_id}", response_model=ApiResponse[str], response_model_exclude_none=True
)
def delete_product(
    request: Request,
    product_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    product_service.delete_product(db, product_id, ctx)
    return ApiResponse.ok(request, "Product has been deleted")


@router.post(
    "/{product_id}/images",
    response_model=ApiResponse[list[ProductImage]],
    response_model_exclude_none=True,
)
def add_product_images(
    request: Request,
    product_id: str,
    images: list[ProductImageCreate],
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Append images to a product."""
    added = product_service.add_images(db, product_id, images, ctx)
    return ApiResponse.ok(request, [ProductImage.model_validate(image) for image in added])


@router.put(
    "/{product_id}/images",
    response_model=ApiResponse[list[ProductImage]],
    response_model_exclude_none=True,
)
def replace_product_images(
    request: Request,
    product_id: str,
    images: list[ProductImageCreate],
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Replace every image of a product."""
    added = product_service.add_images(db, product_id, images, ctx, replace=True)
    return ApiResponse.ok(request, [ProductImage.model_validate(image) for image in added])
