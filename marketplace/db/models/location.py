from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from marketplace.db.base import Base


class Province(Base):
    __tablename__ = "provinces"

    code = Column(String(20), primary_key=True)
    full_name = Column(String(255), nullable=False)

    districts = relationship("District", back_populates="province")


class District(Base):
    __tablename__ = "districts"

    code = Column(String(20), primary_key=True)
    full_name = Column(String(255), nullable=False)
    province_code = Column(String(20), ForeignKey("provinces.code"), nullable=False)

    province = relationship("Province", back_populates="districts")
    wards = relationship("Ward", back_populates="district")


class Ward(Base):
    __tablename__ = "wards"

    code = Column(String(20), primary_key=True)
    full_name = Column(String(255), nullable=False)
    district_code = Column(String(20), ForeignKey("districts.code"), nullable=False)

    district = relationship("District", back_populates="wards")
