from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db, require_authenticated
from marketplace.core.security_context import SecurityContext
from marketplace.schemas.cart import Cart, CartItemAdd
from marketplace.schemas.response import ApiResponse
from marketplace.services import cart as cart_service

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/{user_id}", response_model=ApiResponse[Cart], response_model_exclude_none=True)
def get_cart(
    request: Request,
    user_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Get a user's cart. Owner or admin only."""
    cart = cart_service.get_cart(db, user_id, ctx)
    return ApiResponse.ok(request, Cart.from_model(cart))


@router.post(
    "/{user_id}/items", response_model=ApiResponse[Cart], response_model_exclude_none=True
)
def add_to_cart(
    request: Request,
    user_id: str,
    item_data: CartItemAdd,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    cart = cart_service.add_to_cart(db, user_id, item_data, ctx)
    return ApiResponse.ok(request, Cart.from_model(cart))


@router.delete(
    "/{user_id}/items/{product_id}",
    response_model=ApiResponse[Cart],
    response_model_exclude_none=True,
)
def remove_from_cart(
    request: Request,
    user_id: str,
    product_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    cart = cart_service.remove_from_cart(db, user_id, product_id, ctx)
    return ApiResponse.ok(request, Cart.from_model(cart))


@router.delete("/{user_id}", response_model=ApiResponse[Cart], response_model_exclude_none=True)
def clear_cart(
    request: Request,
    user_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    cart = cart_service.clear_cart(db, user_id, ctx)
    return ApiResponse.ok(request, Cart.from_model(cart))
