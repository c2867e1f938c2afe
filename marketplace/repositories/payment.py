from datetime import datetime

from sqlalchemy.orm import Session

from marketplace.db.models.order import Order as OrderModel
from marketplace.db.models.order import OrderStatus
from marketplace.db.models.payment import Payment as PaymentModel
from marketplace.db.models.payment import PaymentStatus


def get_payment_by_order_id(db: Session, order_id: str) -> PaymentModel | None:
    return db.query(PaymentModel).filter(PaymentModel.order_id == order_id).first()


def record_payment(
    db: Session,
    order: OrderModel,
    payment_method: str,
    payment_status: PaymentStatus,
    transaction_id: str,
) -> PaymentModel:
    """Store the payment for an order, replacing a previous unpaid attempt.

    A SUCCESS payment also marks the order PAID.
    """
    payment = get_payment_by_order_id(db, order.id)
    if payment is None:
        payment = PaymentModel(order_id=order.id)
        db.add(payment)
    payment.payment_method = payment_method
    payment.payment_status = payment_status
    payment.amount = order.total_amount
    payment.transaction_id = transaction_id
    payment.payment_date = datetime.now()
    if payment_status == PaymentStatus.SUCCESS:
        order.status = OrderStatus.PAID
    db.commit()
    db.refresh(payment)
    return payment


def confirm_payment(db: Session, payment: PaymentModel, order: OrderModel) -> PaymentModel:
    payment.payment_status = PaymentStatus.SUCCESS
    payment.payment_date = datetime.now()
    order.status = OrderStatus.PAID
    db.commit()
    db.refresh(payment)
    return payment
