from sqlalchemy.orm import Session

from marketplace.db.models.address import Address as AddressModel
from marketplace.db.models.location import District, Ward
from marketplace.db.models.shop import Shop as ShopModel


def get_shop_by_id(db: Session, shop_id: str) -> ShopModel | None:
    return db.query(ShopModel).filter(ShopModel.id == shop_id).first()


def get_all_shops(db: Session) -> list[ShopModel]:
    return db.query(ShopModel).order_by(ShopModel.name).all()


def get_shops_by_owner_id(db: Session, owner_id: str) -> list[ShopModel]:
    return (
        db.query(ShopModel)
        .filter(ShopModel.owner_id == owner_id)
        .order_by(ShopModel.name)
        .all()
    )


def search_shops_by_location(
    db: Session,
    district_code: str | None = None,
    province_code: str | None = None,
) -> list[ShopModel]:
    """Shops whose address lies in the given district and/or province."""
    query = (
        db.query(ShopModel)
        .join(AddressModel, ShopModel.address_id == AddressModel.id)
        .join(Ward, AddressModel.ward_code == Ward.code)
        .join(District, Ward.district_code == District.code)
    )
    if district_code is not None:
        query = query.filter(District.code == district_code)
    if province_code is not None:
        query = query.filter(District.province_code == province_code)
    return query.order_by(ShopModel.name).all()


def create_shop(
    db: Session,
    name: str,
    owner_id: str,
    address: AddressModel | None = None,
) -> ShopModel:
    """Create a new shop in the database. Pure data access - no business logic."""
    db_shop = ShopModel(name=name, owner_id=owner_id, address=address)
    db.add(db_shop)
    db.commit()
    db.refresh(db_shop)
    return db_shop
