import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from marketplace.db.base import Base


class PasswordResetToken(Base):
    __tablename__ = "password_reset_tokens"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    token = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expiry_date = Column(DateTime, nullable=False)

    user = relationship("User")


class InvalidatedToken(Base):
    __tablename__ = "invalidated_tokens"

    # JWT id (jti) of a logged-out or refreshed token
    id = Column(String(36), primary_key=True)
    expiry_time = Column(DateTime, nullable=False, index=True)
