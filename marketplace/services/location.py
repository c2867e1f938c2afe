from sqlalchemy.orm import Session

import marketplace.repositories.location as location_repo
from marketplace.db.models.location import District, Province, Ward


def get_provinces(db: Session) -> list[Province]:
    return location_repo.get_all_provinces(db)


def get_districts(db: Session, province_code: str) -> list[District]:
    return location_repo.get_districts_by_province(db, province_code)


def get_wards(db: Session, district_code: str) -> list[Ward]:
    return location_repo.get_wards_by_district(db, district_code)
