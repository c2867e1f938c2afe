import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from marketplace.db.base import Base


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String(36), ForeignKey("orders.id"), unique=True, nullable=False)
    payment_method = Column(String(20), nullable=False)
    payment_status = Column(Enum(PaymentStatus, native_enum=False, length=20), nullable=False)
    amount = Column(Float, nullable=False)
    transaction_id = Column(String(100), nullable=False, index=True)
    payment_date = Column(DateTime, nullable=True, default=datetime.now)

    order = relationship("Order", back_populates="payment")
