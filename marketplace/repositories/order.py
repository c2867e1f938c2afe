from datetime import date

from sqlalchemy.orm import Session

from marketplace.db.models.order import Order as OrderModel
from marketplace.db.models.order import OrderItem as OrderItemModel
from marketplace.db.models.order import OrderStatus
from marketplace.db.models.order import Shipment as ShipmentModel
from marketplace.db.models.order import ShipmentStatus


def get_order_by_id(db: Session, order_id: str) -> OrderModel | None:
    return db.query(OrderModel).filter(OrderModel.id == order_id).first()


def get_orders_by_user_id(db: Session, user_id: str) -> list[OrderModel]:
    return (
        db.query(OrderModel)
        .filter(OrderModel.user_id == user_id)
        .order_by(OrderModel.created_at.desc())
        .all()
    )


def build_order(
    user_id: str,
    shop_id: str | None,
    items: list[OrderItemModel],
    shipping_fee: float,
    shipping_provider: str,
    estimated_delivery_date: date,
) -> OrderModel:
    """Create an unsaved pending order with its shipment. Total includes shipping."""
    item_total = sum(item.price_at_purchase * item.quantity for item in items)
    order = OrderModel(
        user_id=user_id,
        shop_id=shop_id,
        status=OrderStatus.PENDING,
        total_amount=item_total + shipping_fee,
        items=items,
    )
    order.shipment = ShipmentModel(
        provider=shipping_provider,
        shipping_fee=shipping_fee,
        status=ShipmentStatus.PREPARING,
        estimated_delivery_date=estimated_delivery_date,
    )
    return order


def save_orders(db: Session, orders: list[OrderModel]) -> list[OrderModel]:
    """Persist orders (and anything else pending in the session) in one commit."""
    db.add_all(orders)
    db.commit()
    for order in orders:
        db.refresh(order)
    return orders


def update_order_status(db: Session, order: OrderModel, status: OrderStatus) -> OrderModel:
    order.status = status
    if status == OrderStatus.CANCELLED and order.shipment is not None:
        order.shipment.status = ShipmentStatus.CANCELLED
    db.commit()
    db.refresh(order)
    return order
