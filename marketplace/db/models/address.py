import uuid

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from marketplace.db.base import Base


class Address(Base):
    __tablename__ = "addresses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    address_detail = Column(String(500), nullable=True)
    ward_code = Column(String(20), ForeignKey("wards.code"), nullable=True)

    ward = relationship("Ward")

    @property
    def district_code(self) -> str | None:
        return self.ward.district_code if self.ward is not None else None

    @property
    def province_code(self) -> str | None:
        if self.ward is None or self.ward.district is None:
            return None
        return self.ward.district.province_code
