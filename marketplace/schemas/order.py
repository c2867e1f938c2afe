from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from marketplace.db.models.order import OrderStatus


class OrderItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str | None = None
    product_name: str
    quantity: int
    price_at_purchase: float


class Order(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: OrderStatus
    shop_id: str | None = None
    total_amount: float
    shipping_fee: float | None = None
    created_at: datetime | None = None
    items: list[OrderItem] = []

    @classmethod
    def from_model(cls, order) -> "Order":
        response = cls.model_validate(order)
        if order.shipment is not None:
            response.shipping_fee = order.shipment.shipping_fee
        return response


class CheckoutRequest(BaseModel):
    product_ids: list[str] = Field(..., min_length=1)


class BuyNowRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., gt=0)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
