import logging

from sqlalchemy.orm import Session

import marketplace.repositories.shop as shop_repo
import marketplace.repositories.user as user_repo
from marketplace.core.security_context import SecurityContext
from marketplace.db.models.shop import Shop as ShopModel
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.shop import ShopCreate
from marketplace.services.user import build_address, get_current_user

logger = logging.getLogger(__name__)


def create_shop(db: Session, shop_data: ShopCreate, ctx: SecurityContext) -> ShopModel:
    """Open a shop owned by the caller."""
    owner = get_current_user(db, ctx)
    address = build_address(db, shop_data.address) if shop_data.address else None
    shop = shop_repo.create_shop(db, name=shop_data.name, owner_id=owner.id, address=address)
    logger.info("User %s opened shop %s", owner.username, shop.id)
    return shop


def get_all_shops(db: Session) -> list[ShopModel]:
    return shop_repo.get_all_shops(db)


def get_shop(db: Session, shop_id: str) -> ShopModel:
    shop = shop_repo.get_shop_by_id(db, shop_id)
    if shop is None:
        raise AppError(ErrorCode.SHOP_NOT_EXIST)
    return shop


def get_shops_by_owner(db: Session, owner_username: str) -> list[ShopModel]:
    owner = user_repo.get_user_by_username(db, owner_username)
    if owner is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)
    return shop_repo.get_shops_by_owner_id(db, owner.id)


def search_shops(
    db: Session,
    district_code: str | None = None,
    province_code: str | None = None,
) -> list[ShopModel]:
    """Filter shops by location; with no filter at all every shop is returned."""
    if district_code is None and province_code is None:
        return shop_repo.get_all_shops(db)
    return shop_repo.search_shops_by_location(
        db, district_code=district_code, province_code=province_code
    )
