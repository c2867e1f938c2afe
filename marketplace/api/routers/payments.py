from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db, require_authenticated
from marketplace.core.security_context import SecurityContext
from marketplace.schemas.payment import Payment, PaymentRequest
from marketplace.schemas.response import ApiResponse
from marketplace.services import payment as payment_service

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/online", response_model=ApiResponse[Payment], response_model_exclude_none=True)
def pay_online(
    request: Request,
    payment_data: PaymentRequest,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Simulated VNPay/MoMo payment. The outcome is random."""
    return ApiResponse.ok(request, payment_service.simulate_online_payment(db, payment_data, ctx))


@router.post(
    "/cod/confirm/{order_id}",
    response_model=ApiResponse[Payment],
    response_model_exclude_none=True,
)
def confirm_cod(
    request: Request,
    order_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Mark a COD payment as collected. Admin only."""
    return ApiResponse.ok(request, payment_service.confirm_cod_payment(db, order_id, ctx))


@router.post("/cod/{order_id}", response_model=ApiResponse[Payment], response_model_exclude_none=True)
def pay_cod(
    request: Request,
    order_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    return ApiResponse.ok(request, payment_service.create_cod_payment(db, order_id, ctx))
