import logging

from sqlalchemy.orm import Session

import marketplace.repositories.product as product_repo
import marketplace.repositories.shop as shop_repo
from marketplace.core.security_context import SecurityContext, get_current_username, has_role
from marketplace.db.models.product import Product as ProductModel
from marketplace.db.models.product import ProductImage as ProductImageModel
from marketplace.db.models.shop import Shop as ShopModel
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.product import ProductCreate, ProductImageCreate, ProductUpdate
from marketplace.services.cart import drop_product_from_carts
from marketplace.services.category import normalize_name, resolve_categories

logger = logging.getLogger(__name__)


def _check_shop_owner(shop: ShopModel, ctx: SecurityContext) -> None:
    """Only the shop owner or an admin may manage the shop's products."""
    if has_role(ctx, "ADMIN"):
        return
    if shop.owner_username != get_current_username(ctx):
        raise AppError(ErrorCode.UNAUTHORIZED)


def _get_product(db: Session, product_id: str) -> ProductModel:
    product = product_repo.get_product_by_id(db, product_id)
    if product is None:
        raise AppError(ErrorCode.PRODUCT_NOT_EXIST)
    return product


def create_product(db: Session, product_data: ProductCreate, ctx: SecurityContext) -> ProductModel:
    shop = shop_repo.get_shop_by_id(db, product_data.shop_id)
    if shop is None:
        raise AppError(ErrorCode.SHOP_NOT_EXIST)
    _check_shop_owner(shop, ctx)

    categories = resolve_categories(db, product_data.category_names)
    product = product_repo.create_product(
        db,
        shop_id=shop.id,
        name=product_data.name,
        price=product_data.price,
        weight=product_data.weight,
        categories=categories,
        brand=product_data.brand,
        description=product_data.description,
    )
    logger.info("Created product %s in shop %s", product.id, shop.id)
    return product


def get_products_by_shop(db: Session, shop_id: str) -> list[ProductModel]:
    if shop_repo.get_shop_by_id(db, shop_id) is None:
        raise AppError(ErrorCode.SHOP_NOT_EXIST)
    return product_repo.get_products_by_shop_id(db, shop_id)


def get_product(db: Session, product_id: str) -> ProductModel:
    return _get_product(db, product_id)


def update_product(
    db: Session, product_id: str, product_data: ProductUpdate, ctx: SecurityContext
) -> ProductModel:
    product = _get_product(db, product_id)
    _check_shop_owner(product.shop, ctx)

    categories = None
    if product_data.category_names is not None:
        categories = resolve_categories(db, product_data.category_names)

    return product_repo.update_product(
        db,
        product,
        name=product_data.name,
        price=product_data.price,
        weight=product_data.weight,
        brand=product_data.brand,
        description=product_data.description,
        categories=categories,
    )


def delete_product(db: Session, product_id: str, ctx: SecurityContext) -> None:
    product = _get_product(db, product_id)
    _check_shop_owner(product.shop, ctx)
    drop_product_from_carts(product)
    product_repo.delete_product(db, product)
    logger.info("Deleted product %s", product_id)


def get_products_by_category(db: Session, category_name: str) -> list[ProductModel]:
    return product_repo.get_products_by_category_name(db, normalize_name(category_name))


def get_products_by_brand(db: Session, brand: str) -> list[ProductModel]:
    return product_repo.get_products_by_brand(db, brand.strip())


def search_products(db: Session, keyword: str) -> list[ProductModel]:
    return product_repo.search_products(db, normalize_name(keyword))


def add_images(
    db: Session,
    product_id: str,
    images: list[ProductImageCreate],
    ctx: SecurityContext,
    replace: bool = False,
) -> list[ProductImageModel]:
    """Attach image metadata to a product; ``replace`` drops the current images first."""
    product = _get_product(db, product_id)
    _check_shop_owner(product.shop, ctx)
    return product_repo.add_product_images(
        db, product, [image.model_dump() for image in images], replace=replace
    )
