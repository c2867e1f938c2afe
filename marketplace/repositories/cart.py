from sqlalchemy.orm import Session

from marketplace.db.models.cart import Cart as CartModel
from marketplace.db.models.cart import CartItem as CartItemModel
from marketplace.db.models.product import Product as ProductModel


def create_cart(db: Session, user_id: str) -> CartModel:
    cart = CartModel(user_id=user_id, total_amount=0)
    db.add(cart)
    db.commit()
    db.refresh(cart)
    return cart


def add_item(db: Session, cart: CartModel, product: ProductModel, quantity: int) -> CartItemModel:
    """Append a new line to the cart (not committed)."""
    item = CartItemModel(product=product, quantity=quantity)
    cart.items.append(item)
    return item


def save_cart(db: Session, cart: CartModel) -> CartModel:
    db.commit()
    db.refresh(cart)
    return cart
