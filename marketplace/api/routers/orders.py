from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db, require_authenticated
from marketplace.core.security_context import SecurityContext
from marketplace.schemas.order import BuyNowRequest, CheckoutRequest, Order, OrderStatusUpdate
from marketplace.schemas.response import ApiResponse
from marketplace.services import order as order_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "/checkout",
    response_model=ApiResponse[list[Order]],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def checkout(
    request: Request,
    checkout_data: CheckoutRequest,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """
    Check out the selected cart products.

    One order is created per shop, each with its own shipping fee.
    """
    orders = await order_service.checkout(db, checkout_data, ctx)
    return ApiResponse.ok(request, [Order.from_model(order) for order in orders])


@router.post(
    "/buy-now",
    response_model=ApiResponse[Order],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def buy_now(
    request: Request,
    buy_data: BuyNowRequest,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    order = await order_service.buy_now(db, buy_data, ctx)
    return ApiResponse.ok(request, Order.from_model(order))


@router.get(
    "/user/{user_id}", response_model=ApiResponse[list[Order]], response_model_exclude_none=True
)
def get_orders_by_user(
    request: Request,
    user_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """List a user's orders. Owner or admin only."""
    orders = order_service.get_orders_by_user(db, user_id, ctx)
    return ApiResponse.ok(request, [Order.from_model(order) for order in orders])


@router.get("/{order_id}", response_model=ApiResponse[Order], response_model_exclude_none=True)
def get_order(
    request: Request,
    order_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    order = order_service.get_order(db, order_id, ctx)
    return ApiResponse.ok(request, Order.from_model(order))


@router.put(
    "/{order_id}/status", response_model=ApiResponse[Order], response_model_exclude_none=True
)
def update_order_status(
    request: Request,
    order_id: str,
    status_data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Change an order's status. Admin only."""
    order = order_service.update_order_status(db, order_id, status_data.status, ctx)
    return ApiResponse.ok(request, Order.from_model(order))
