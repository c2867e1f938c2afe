"""Simulated payments: online gateways succeed at random, COD waits for admin confirmation."""

import logging
import random
import uuid

from sqlalchemy.orm import Session

import marketplace.repositories.order as order_repo
import marketplace.repositories.payment as payment_repo
from marketplace.core.config import settings
from marketplace.core.security_context import SecurityContext, require_admin
from marketplace.db.models.order import Order as OrderModel
from marketplace.db.models.order import OrderStatus
from marketplace.db.models.payment import PaymentStatus
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.payment import Payment, PaymentMethod, PaymentRequest
from marketplace.services.order import get_order

logger = logging.getLogger(__name__)


def _new_transaction_id() -> str:
    return "TXN_" + uuid.uuid4().hex[:8].upper()


def _get_order(db: Session, order_id: str) -> OrderModel:
    order = order_repo.get_order_by_id(db, order_id)
    if order is None:
        raise AppError(ErrorCode.ORDER_NOT_EXIST)
    return order


def _check_payable(order: OrderModel) -> None:
    """Only PENDING orders take payments."""
    if order.status == OrderStatus.PAID:
        raise AppError(ErrorCode.PAYMENT_FAILED, "Order is already paid")
    if order.status != OrderStatus.PENDING:
        raise AppError(
            ErrorCode.PAYMENT_FAILED, f"Order cannot be paid in status {order.status.value}"
        )


def simulate_online_payment(
    db: Session, request: PaymentRequest, ctx: SecurityContext
) -> Payment:
    """Pay an order through a simulated gateway. Success marks the order PAID."""
    order = get_order(db, request.order_id, ctx)
    _check_payable(order)

    success = random.random() < settings.payment_success_rate
    status = PaymentStatus.SUCCESS if success else PaymentStatus.FAILED

    payment = payment_repo.record_payment(
        db,
        order,
        payment_method=request.payment_method.value,
        payment_status=status,
        transaction_id=_new_transaction_id(),
    )
    logger.info("Payment simulation: %s for order %s", status.value, order.id)

    return Payment(
        order_id=order.id,
        transaction_id=payment.transaction_id,
        status=status,
        amount=payment.amount,
        payment_method=payment.payment_method,
        payment_date=payment.payment_date,
        message="Payment successful" if success else "Payment failed",
    )


def create_cod_payment(db: Session, order_id: str, ctx: SecurityContext) -> Payment:
    """Record a cash-on-delivery payment; the order stays PENDING until confirmed."""
    order = get_order(db, order_id, ctx)
    _check_payable(order)

    payment = payment_repo.record_payment(
        db,
        order,
        payment_method=PaymentMethod.COD.value,
        payment_status=PaymentStatus.PENDING,
        transaction_id=f"COD_{order.id}",
    )
    logger.info("COD payment created for order %s", order.id)

    return Payment(
        order_id=order.id,
        transaction_id=payment.transaction_id,
        status=PaymentStatus.PENDING,
        amount=payment.amount,
        payment_method=PaymentMethod.COD.value,
        message="Pay on delivery",
    )


def confirm_cod_payment(db: Session, order_id: str, ctx: SecurityContext) -> Payment:
    """Admin confirms the cash was collected: payment SUCCESS, order PAID."""
    require_admin(ctx)
    order = _get_order(db, order_id)
    _check_payable(order)

    payment = payment_repo.get_payment_by_order_id(db, order.id)
    if payment is None or payment.payment_method != PaymentMethod.COD.value:
        raise AppError(ErrorCode.PAYMENT_FAILED, "No COD payment recorded for this order")

    payment = payment_repo.confirm_payment(db, payment, order)
    logger.info("COD payment confirmed for order %s", order.id)

    return Payment(
        order_id=order.id,
        transaction_id=payment.transaction_id,
        status=PaymentStatus.SUCCESS,
        amount=order.total_amount,
        payment_method=PaymentMethod.COD.value,
        payment_date=payment.payment_date,
        message="COD payment confirmed",
    )
