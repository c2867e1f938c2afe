import uuid

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from marketplace.db.base import Base


class Shop(Base):
    __tablename__ = "shops"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    address_id = Column(String(36), ForeignKey("addresses.id"), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="shops")
    address = relationship("Address", cascade="all, delete-orphan", single_parent=True)
    products = relationship("Product", back_populates="shop", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="shop")

    @property
    def owner_username(self) -> str | None:
        return self.owner.username if self.owner is not None else None
