from sqlalchemy.orm import Session

from marketplace.db.models.address import Address as AddressModel
from marketplace.db.models.location import District, Province, Ward


def get_all_provinces(db: Session) -> list[Province]:
    return db.query(Province).order_by(Province.full_name).all()


def get_districts_by_province(db: Session, province_code: str) -> list[District]:
    return (
        db.query(District)
        .filter(District.province_code == province_code)
        .order_by(District.full_name)
        .all()
    )


def get_wards_by_district(db: Session, district_code: str) -> list[Ward]:
    return (
        db.query(Ward)
        .filter(Ward.district_code == district_code)
        .order_by(Ward.full_name)
        .all()
    )


def get_ward_by_code(db: Session, ward_code: str) -> Ward | None:
    return db.query(Ward).filter(Ward.code == ward_code).first()


def build_address(
    name: str | None,
    phone: str | None,
    address_detail: str | None,
    ward: Ward | None,
) -> AddressModel:
    """Create an unsaved address; it is persisted together with its owner."""
    return AddressModel(
        name=name,
        phone=phone,
        address_detail=address_detail,
        ward=ward,
    )
