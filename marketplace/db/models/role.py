from sqlalchemy import Column, ForeignKey, String, Table

from marketplace.db.base import Base

USER_ROLE = "USER"
ADMIN_ROLE = "ADMIN"

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_name", String(50), ForeignKey("roles.name", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    __tablename__ = "roles"

    name = Column(String(50), primary_key=True)
    description = Column(String(255), nullable=True)
