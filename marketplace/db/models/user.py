import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from marketplace.db.base import Base
from marketplace.db.models.role import user_roles


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    fullname = Column(String(255), nullable=True)
    email = Column(String(320), unique=True, nullable=True, index=True)
    created_date = Column(DateTime, nullable=False, default=datetime.now)
    address_id = Column(String(36), ForeignKey("addresses.id"), nullable=True)

    # Relationships
    roles = relationship("Role", secondary=user_roles, lazy="selectin")
    address = relationship("Address", cascade="all, delete-orphan", single_parent=True)
    shops = relationship("Shop", back_populates="owner", cascade="all, delete-orphan")
    cart = relationship(
        "Cart", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    orders = relationship("Order", back_populates="user", cascade="all, delete-orphan")

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]
