from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from marketplace.db.models.payment import PaymentStatus


class PaymentMethod(str, Enum):
    VNPAY = "VNPAY"
    MOMO = "MOMO"
    COD = "COD"


class PaymentRequest(BaseModel):
    order_id: str
    payment_method: PaymentMethod


class Payment(BaseModel):
    order_id: str
    transaction_id: str
    status: PaymentStatus
    amount: float
    payment_method: str
    payment_date: datetime | None = None
    message: str | None = None
